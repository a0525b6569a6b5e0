from __future__ import annotations

import logging
import os
import re
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from app.core.config import settings

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass
class UploadFile:
    """An in-memory file ready for storage."""
    filename: str
    content: bytes
    content_type: str


def make_key(folder: str, filename: str) -> str:
    safe = _UNSAFE.sub("_", os.path.basename(filename or "file")) or "file"
    return f"{folder}/{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}-{safe}"


def uses_gcs() -> bool:
    return bool(settings.GCS_BUCKET_NAME and settings.GOOGLE_APPLICATION_CREDENTIALS)


def _gcs_bucket():
    try:
        from google.cloud import storage  # type: ignore
    except Exception as e:
        raise RuntimeError("google-cloud-storage is not installed. Install requirements and retry") from e
    client = storage.Client()
    return client.bucket(settings.GCS_BUCKET_NAME)


def put(key: str, data: bytes, content_type: str) -> str:
    """Store bytes under key and return a public URL."""
    if uses_gcs():
        blob = _gcs_bucket().blob(key)
        blob.upload_from_string(data, content_type=content_type)
        return f"https://storage.googleapis.com/{settings.GCS_BUCKET_NAME}/{key}"

    base = settings.BLOB_LOCAL_DIR or "./data/media"
    path = os.path.join(base, *key.split("/"))
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)
    return f"{settings.API_PUBLIC_URL.rstrip('/')}/media/{key}"


def delete(key: str) -> None:
    if uses_gcs():
        _gcs_bucket().blob(key).delete()
        return
    path = os.path.join(settings.BLOB_LOCAL_DIR or "./data/media", *key.split("/"))
    if os.path.exists(path):
        os.remove(path)


def upload_many(files: list[UploadFile], folder: str) -> list[dict]:
    """Upload all files concurrently. Any failure propagates and aborts the caller."""

    def _one(f: UploadFile) -> dict:
        key = make_key(folder, f.filename)
        link = put(key, f.content, f.content_type)
        return {"name": f.filename, "size": len(f.content), "type": f.content_type, "link": link, "key": key}

    if not files:
        return []
    with ThreadPoolExecutor(max_workers=min(len(files), 8)) as pool:
        return list(pool.map(_one, files))


def delete_quietly(key: str | None) -> None:
    if not key:
        return
    try:
        delete(key)
    except Exception:
        logger.warning("could not delete blob %s", key, exc_info=True)
