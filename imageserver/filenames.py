import os
import re
import mimetypes
from typing import Optional

MAX_FILE_NAME_LENGTH = 255
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_UNDERSCORE_RUNS = re.compile(r"_{2,}")


def extension_for(mime_type: Optional[str]) -> str:
    """Preferred file extension for a MIME type, '' if unknown."""
    if not mime_type:
        return ""
    if mime_type == "image/jpeg":
        return ".jpg"
    return mimetypes.guess_extension(mime_type) or ""


def sanitize_file_name(original: Optional[str], mime_type: Optional[str] = None) -> str:
    """
    Reduce an uploaded file name to a safe storage key.

    Directory parts are dropped, anything outside [A-Za-z0-9._-] becomes '_',
    and leading dots are removed so hidden or relative names cannot be stored.
    Names that end up empty fall back to 'image' plus an extension guessed
    from the MIME type.
    """
    name = (original or "").replace("\\", "/").split("/")[-1]
    name = _UNSAFE_CHARS.sub("_", name.strip())
    name = _UNDERSCORE_RUNS.sub("_", name).lstrip(".")

    stem, ext = os.path.splitext(name)
    if not stem.strip("_"):
        return f"image{ext or extension_for(mime_type)}"

    if len(name) > MAX_FILE_NAME_LENGTH:
        if len(ext) > 16:
            name = name[:MAX_FILE_NAME_LENGTH]
        else:
            name = stem[:MAX_FILE_NAME_LENGTH - len(ext)] + ext
    return name
