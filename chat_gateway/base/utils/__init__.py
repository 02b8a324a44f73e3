"""Small shared helpers for adapters."""

from .envelope import dig, dig_text, usage_from

__all__ = ["dig", "dig_text", "usage_from"]
