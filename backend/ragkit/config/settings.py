"""Configuration settings for the ragkit document extraction core."""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RagkitSettings(BaseSettings):
    """Extraction core settings."""

    model_config = SettingsConfigDict(
        env_prefix="RAGKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # HTML loader settings
    html_parser: str = Field(
        default="html.parser",
        description="Default BeautifulSoup tree builder (html.parser, lxml, html5lib)",
    )
    html_fallback_selector: str = Field(
        default="body",
        description="Selector injected when no text selector applies to a URL",
    )

    # Text loader settings
    text_encodings: List[str] = Field(
        default=["utf-8", "utf-8-sig", "latin-1", "cp1252"],
        description="Encodings tried in order when decoding plain text",
    )

    # Splitter settings
    default_chunk_size: int = Field(
        default=1000,
        ge=1,
        le=500000,
        description="Default chunk size in characters for the text splitter",
    )
    default_chunk_overlap: int = Field(
        default=100,
        ge=0,
        le=10000,
        description="Default overlap between chunks in characters",
    )

    @field_validator("html_parser", "html_fallback_selector")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject blank values."""
        if not v or not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()

    @field_validator("text_encodings")
    @classmethod
    def validate_encodings(cls, v: List[str]) -> List[str]:
        """Ensure at least one encoding is configured."""
        if not v:
            raise ValueError("At least one encoding is required")
        return v


@lru_cache()
def get_settings() -> RagkitSettings:
    """Get cached settings instance.

    Returns:
        RagkitSettings instance
    """
    return RagkitSettings()
