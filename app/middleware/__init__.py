"""Application middleware."""

from app.middleware.rate_limit import RateLimitMiddleware, RateLimitRule, RateLimitStore

__all__ = ["RateLimitMiddleware", "RateLimitRule", "RateLimitStore"]
