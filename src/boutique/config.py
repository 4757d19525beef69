from typing import Literal

from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # e.g. mongodb://localhost:27017/fashionDB
    host: str
    port: int
    debug: bool
    jwt_secret: str  # HS256 signing secret for bearer tokens
    jwt_expires_days: int = 7
    cors_origins: list[str] = []
    storage_backend: Literal["local", "cloudinary"] = "local"
    uploads_path: str = "uploads"  # Directory for the local blob store, served at /uploads
    max_upload_size_mb: int = 10
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None
    cloudinary_folder: str = "wazihas_boutique"
    # Require an admin token on product update/delete and all user mutation routes
    guard_all_mutations: bool = False

    model_config = {
        "env_file": [".env"],
        "env_prefix": "BOUTIQUE_",
        "extra": "ignore",
    }

    @property
    def max_upload_size(self) -> int:
        """Upload limit in bytes."""
        return self.max_upload_size_mb * 1024 * 1024
