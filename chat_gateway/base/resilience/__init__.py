"""Resilience primitives (request budgets)."""

from .rate_limiter import RateLimiter, RateLimiterConfig, create_rate_limiter, rate_limiter

__all__ = ["RateLimiter", "RateLimiterConfig", "create_rate_limiter", "rate_limiter"]
