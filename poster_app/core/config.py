# poster_app/core/config.py
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Repo root, where public/images/base.png ships
PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Cloudinary credentials (.env):
      - CLOUDINARY_CLOUD_NAME
      - CLOUDINARY_API_KEY
      - CLOUDINARY_API_SECRET

    They are optional at startup: when missing, the app still boots and
    every remote call fails with an authentication error instead.

    Poster options:
      - POSTER_FOLDER: Cloudinary folder the composed posters go into
      - BASE_IMAGE_PATH: local path (or remote URL) of the poster template
      - LIST_MAX_RESULTS: page size used when listing all assets
    """

    PROJECT_NAME: str = "Promo Poster API"
    API_PREFIX: str = "/api"

    # Cloudinary account
    CLOUDINARY_CLOUD_NAME: str | None = None
    CLOUDINARY_API_KEY: str | None = None
    CLOUDINARY_API_SECRET: str | None = None

    POSTER_FOLDER: str = "black-friday-posters"
    BASE_IMAGE_PATH: str = "public/images/base.png"

    # 500 is the largest page the Admin API hands out
    LIST_MAX_RESULTS: int = 500

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def has_cloudinary_credentials(self) -> bool:
        return bool(
            self.CLOUDINARY_CLOUD_NAME
            and self.CLOUDINARY_API_KEY
            and self.CLOUDINARY_API_SECRET
        )

    @property
    def base_image_source(self) -> str:
        """
        BASE_IMAGE_PATH as handed to the uploader.

        - http(s) URLs are passed through for Cloudinary to fetch.
        - Relative paths are tried against the working directory first,
          then against the project root.
        """
        if self.BASE_IMAGE_PATH.startswith(("http://", "https://")):
            return self.BASE_IMAGE_PATH

        path = Path(self.BASE_IMAGE_PATH)
        if not path.is_absolute() and not path.exists():
            path = PROJECT_ROOT / path
        return str(path)

    def base_image_problem(self) -> str | None:
        """Return why the poster template cannot be uploaded, or None if it can."""
        source = self.base_image_source
        if source.startswith(("http://", "https://")):
            return None
        if not Path(source).is_file():
            return f"Poster template not found: {self.BASE_IMAGE_PATH}"
        return None


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
