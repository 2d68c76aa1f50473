from functools import lru_cache
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./echovid.db"
    # Create tables on startup instead of running Alembic (dev/sqlite only)
    create_tables: bool = False

    # JWT (secret_key has no default: startup fails when it is not configured)
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Blob storage: "local" writes under local_blob_dir, "gcs" uses a bucket
    blob_backend: str = "local"
    local_blob_dir: str = ""  # empty = <project>/uploads/media
    public_base_url: str = ""  # empty: local = http://localhost:<port>/media, gcs = blob public URL
    gcs_bucket_name: str = ""
    gcs_credentials_path: str = ""  # service account JSON; empty = use ADC

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env")

    @field_validator("secret_key")
    @classmethod
    def secret_key_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("SECRET_KEY must not be empty")
        return v

    @field_validator("blob_backend")
    @classmethod
    def known_blob_backend(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("local", "gcs"):
            raise ValueError("BLOB_BACKEND must be 'local' or 'gcs'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
