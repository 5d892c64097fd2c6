from fastapi import FastAPI
from fastapi.testclient import TestClient

from imageserver.middleware import ErrorHandlingMiddleware, RequestSizeLimitMiddleware


def build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestSizeLimitMiddleware, max_size=10)

    @app.post("/echo")
    async def echo():
        return {"ok": True}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    return app


def test_request_size_limit_blocks_large_bodies():
    client = TestClient(build_app())

    assert client.post("/echo", content=b"small").status_code == 200

    res = client.post("/echo", content=b"x" * 100)
    assert res.status_code == 413
    assert res.json() == {"success": False, "data": None, "error": "Request entity too large"}


def test_unhandled_errors_become_500_envelope():
    client = TestClient(build_app())

    res = client.get("/boom")

    assert res.status_code == 500
    assert res.json()["success"] is False
    assert res.json()["error"].startswith("Internal server error")
