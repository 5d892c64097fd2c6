from imageserver import deps
from imageserver.infrastructure.memory.memory_image_store import InMemoryImageStore
from imageserver.infrastructure.persistence.sqlalchemy.repositories.image_store_sql import SqlImageStore


def test_sql_backend_wraps_request_session(monkeypatch, db_session):
    monkeypatch.setattr(deps.settings, "STORE_BACKEND", "sql")

    store = deps.get_image_store(session=db_session)

    assert isinstance(store, SqlImageStore)
    assert store.session is db_session


def test_memory_backend_is_shared_between_requests(monkeypatch):
    monkeypatch.setattr(deps.settings, "STORE_BACKEND", "memory")

    first = deps.get_image_store(session=None)
    second = deps.get_image_store(session=None)

    assert isinstance(first, InMemoryImageStore)
    assert first is second


def test_services_share_the_store(db_session):
    store = SqlImageStore(db_session)
    assert deps.get_resolution_service(image_store=store).image_store is store
    assert deps.get_upload_service(image_store=store).image_store is store
