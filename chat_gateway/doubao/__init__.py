"""Doubao provider package."""

from .client import DoubaoAdapter

__all__ = ["DoubaoAdapter"]
