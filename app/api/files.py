from fastapi import HTTPException, UploadFile

from app.core.config import settings
from app.services import blob_store
from app.services.document_service import ALLOWED_TYPES

IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}


def read_uploads(files: list[UploadFile] | None, allowed: set[str] | None = ALLOWED_TYPES) -> list[blob_store.UploadFile]:
    """Read multipart files into memory, enforcing count, size and MIME limits."""
    files = files or []
    if not files:
        raise HTTPException(status_code=400, detail="No files uploaded")
    if len(files) > settings.UPLOAD_MAX_FILES:
        raise HTTPException(status_code=400, detail=f"At most {settings.UPLOAD_MAX_FILES} files per request")
    out = []
    for f in files:
        ctype = (f.content_type or "application/octet-stream").split(";")[0].strip().lower()
        if allowed is not None and ctype not in allowed:
            raise HTTPException(status_code=400, detail=f"File type not allowed: {ctype}")
        data = f.file.read(settings.UPLOAD_MAX_BYTES + 1)
        if len(data) > settings.UPLOAD_MAX_BYTES:
            raise HTTPException(status_code=413, detail=f"{f.filename} exceeds the {settings.UPLOAD_MAX_BYTES // (1024 * 1024)}MB limit")
        out.append(blob_store.UploadFile(filename=f.filename or "file", content=data, content_type=ctype))
    return out
