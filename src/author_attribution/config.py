"""Configuration management for Author Attribution."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AA_",
    )

    # Segmentation
    max_sentence_length: int = Field(default=96, ge=1, description="Maximum chunk length in characters")
    language: str = Field(default="xx", description="spaCy language code for non-CJK word segmentation")

    # Per-token ratings
    min_rating: float = Field(default=0.2, gt=0.0, lt=1.0)
    max_rating: float = Field(default=0.7, gt=0.0, lt=1.0)
    unseen_token_rating: float = Field(default=0.2, gt=0.0, lt=1.0, description="Rating of tokens missing from the model")
    no_token_rating: float = Field(default=0.4, gt=0.0, lt=1.0, description="Rating of tokens never used by an author")
    zero_count_policy: Literal["both", "fixed"] = Field(
        default="both",
        description="both: record the fixed rating and the computed one; fixed: record only the fixed rating",
    )

    # Outlier trimming
    trim_threshold: int = Field(default=6, ge=0, description="Trim only when more ratings than this")
    trim_count: int = Field(default=2, ge=0, description="Ratings dropped from each end")
    max_ratings: int = Field(default=80, ge=1)
    tail_ratings: int = Field(default=40, ge=1, description="Ratings kept at each end when over max_ratings")

    # Degenerate input fallback
    neutral_score: float = Field(default=0.5, ge=0.0, le=1.0)

    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def _check_bounds(self) -> "Settings":
        if self.min_rating > self.max_rating:
            raise ValueError("min_rating must not exceed max_rating")
        if self.tail_ratings * 2 > self.max_ratings:
            raise ValueError("tail_ratings must be at most half of max_ratings")
        if self.trim_count * 2 > self.trim_threshold:
            raise ValueError("trim_count must be at most half of trim_threshold")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
