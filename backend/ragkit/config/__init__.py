"""Configuration module for ragkit."""

from ragkit.config.settings import RagkitSettings, get_settings

__all__ = [
    "RagkitSettings",
    "get_settings",
]
