"""Process-wide settings for the labeler service: ``from config import settings``."""

from . import settings

__all__ = ["settings"]
