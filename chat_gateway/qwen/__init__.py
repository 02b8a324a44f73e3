"""Qwen (DashScope) provider package."""

from .client import QwenAdapter

__all__ = ["QwenAdapter"]
