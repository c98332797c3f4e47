from functools import lru_cache
from pathlib import Path
from typing import Dict, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PLACEHOLDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = "https://placehold.co"
    timeout_seconds: float = Field(default=30.0, gt=0)
    # Only turn this off against a test endpoint you control.
    verify_tls: bool = True
    user_agent: str = "placeholder-gallery/1.0"

    data_dir: Path = Path("data")
    public_base_url: str = "http://localhost:8000"

    count_policy: Literal["clamp", "reject"] = "clamp"
    default_count: int = Field(default=10, ge=1)
    min_count: int = Field(default=1, ge=1)
    max_count: int = Field(default=500, ge=1)

    min_dimension: int = Field(default=100, ge=1)
    max_dimension: int = Field(default=500, ge=1)

    thumb_small_px: int = Field(default=256, ge=1)
    thumb_medium_px: int = Field(default=512, ge=1)

    @model_validator(mode="after")
    def _ranges_in_order(self) -> "Settings":
        if self.min_count > self.max_count:
            raise ValueError(f"min_count ({self.min_count}) exceeds max_count ({self.max_count})")
        if self.min_dimension > self.max_dimension:
            raise ValueError(
                f"min_dimension ({self.min_dimension}) exceeds max_dimension ({self.max_dimension})"
            )
        return self

    @property
    def uploads_dir(self) -> Path:
        return self.data_dir / "uploads"

    @property
    def thumbs_dir(self) -> Path:
        return self.data_dir / "thumbs"

    @property
    def thumb_sizes(self) -> Dict[str, int]:
        return {"small": self.thumb_small_px, "medium": self.thumb_medium_px}

    @property
    def db_path(self) -> Path:
        return self.data_dir / "app.db"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
