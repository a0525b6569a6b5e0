import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.core.config import settings
from app.core.errors import install_error_handlers
from app.api.v1.api import api_router
from app.services import blob_store

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=settings.APP_NAME)

# CORS: use CORS_ORIGINS from env in production; default to localhost for dev
_default_origins = [
    "http://127.0.0.1:3000", "http://localhost:3000",
    "http://127.0.0.1:5173", "http://localhost:5173",
]
_origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()] if settings.CORS_ORIGINS else _default_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)
app.include_router(api_router)


@app.get("/health")
def health():
    return {"status": "ok"}


# Local blob store: serve uploads so returned links resolve
if not blob_store.uses_gcs():
    os.makedirs(settings.BLOB_LOCAL_DIR, exist_ok=True)
    app.mount("/media", StaticFiles(directory=settings.BLOB_LOCAL_DIR), name="media")
