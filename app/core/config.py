from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "local"
    APP_NAME: str = "TourBirth API"
    LOG_LEVEL: str = "INFO"
    # Comma-separated origins for CORS. If empty, uses localhost defaults.
    CORS_ORIGINS: str = ""

    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 48
    # Companion sessions: temp-password logins get the shorter TTL
    COMPANION_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    TEMP_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    OTP_EXPIRE_MINUTES: int = 10

    AUTH_COOKIE_NAME: str = "jwt"
    AUTH_COOKIE_SECURE: bool = False
    AUTH_COOKIE_SAMESITE: str = "lax"

    DATABASE_URL: str

    @field_validator("DATABASE_URL", mode="after")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Render and others give postgres://; SQLAlchemy expects postgresql+psycopg2://."""
        if v and v.startswith("postgres://"):
            return "postgresql+psycopg2://" + v[11:]
        return v
    REDIS_URL: str = "redis://localhost:6379/0"
    EMAIL_QUEUE_INTERVAL_SECONDS: int = 120

    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 25
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_FROM: str = "hello@tourbirth.local"

    SENDGRID_API_KEY: str = ""
    SENDGRID_FROM_EMAIL: str = ""

    FRONTEND_URL: str = "http://localhost:3000"
    API_PUBLIC_URL: str = "http://localhost:8000"  # base for local blob links
    ADMIN_NOTIFY_EMAIL: str = ""  # receives waitlist/newsletter/contact notifications

    # Blob storage (uploads). GCS when both are set, local disk otherwise.
    BLOB_LOCAL_DIR: str = "./data/media"
    GCS_BUCKET_NAME: str = ""
    GOOGLE_APPLICATION_CREDENTIALS: str = ""

    UPLOAD_MAX_BYTES: int = 10 * 1024 * 1024
    UPLOAD_MAX_FILES: int = 10

    # First admin, created by app.seed when both are set
    SEED_ADMIN_EMAIL: str = ""
    SEED_ADMIN_PASSWORD: str = ""


settings = Settings()
