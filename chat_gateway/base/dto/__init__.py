"""Data transfer objects used at the adapter construction boundary."""

from .adapter_config import AdapterConfig

__all__ = ["AdapterConfig"]
