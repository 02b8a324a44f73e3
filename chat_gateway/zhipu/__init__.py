"""Zhipu provider package."""

from .client import ZhipuAdapter

__all__ = ["ZhipuAdapter"]
