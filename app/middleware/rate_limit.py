"""Per-client request throttling.

Clients are identified by the address Cloudflare reports, then the first
X-Forwarded-For hop, then the socket peer. Counters live in process memory
and reset at the end of each fixed window.
"""

import re
import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response


@dataclass
class RateLimitRule:
    """A request budget for paths matching ``path_pattern``.

    Attributes:
        requests: Requests allowed per window.
        window_seconds: Window length in seconds.
        path_pattern: Regex matched against the request path; None matches all.
        methods: HTTP methods the rule applies to; None means any method.
    """

    requests: int
    window_seconds: int
    path_pattern: Optional[str] = None
    methods: Optional[frozenset[str]] = None

    def __post_init__(self):
        self._compiled = re.compile(self.path_pattern) if self.path_pattern else None

    @property
    def key(self) -> str:
        methods = ",".join(sorted(self.methods)) if self.methods else "*"
        return f"{methods} {self.path_pattern or 'default'}"

    def applies_to(self, method: str, path: str) -> bool:
        if self.methods is not None and method not in self.methods:
            return False
        return self._compiled is None or self._compiled.match(path) is not None


@dataclass
class WindowCounter:
    count: int = 0
    window_start: float = 0.0
    window: int = 0


class RateLimitStore:
    """Fixed-window counters keyed by (client, rule)."""

    def __init__(self, clock: Callable[[], float] = time.time, sweep_interval: int = 60):
        self._counters: dict[tuple[str, str], WindowCounter] = defaultdict(WindowCounter)
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._last_sweep = clock()

    def _sweep(self, now: float) -> None:
        """Drop counters whose own window ended a full window ago."""
        if now - self._last_sweep < self._sweep_interval:
            return
        stale = [key for key, c in self._counters.items() if now - c.window_start > c.window * 2]
        for key in stale:
            del self._counters[key]
        self._last_sweep = now

    def hit(self, client_id: str, rule_key: str, limit: int, window: int) -> tuple[bool, int, int]:
        """Count one request.

        Returns:
            (allowed, remaining, reset) where reset is the unix time the
            current window ends.
        """
        now = self._clock()
        self._sweep(now)

        counter = self._counters[(client_id, rule_key)]
        counter.window = window
        if now - counter.window_start >= window:
            counter.count = 0
            counter.window_start = now

        reset = int(counter.window_start + window)
        if counter.count >= limit:
            return False, 0, reset

        counter.count += 1
        return True, max(0, limit - counter.count), reset


DEFAULT_RULES = [
    # Rating writes
    RateLimitRule(requests=10, window_seconds=60, path_pattern=r"^/api/rate", methods=frozenset({"POST"})),
    RateLimitRule(requests=200, window_seconds=3600, path_pattern=r"^/api/rate", methods=frozenset({"POST"})),
    # Other record writes
    RateLimitRule(
        requests=20, window_seconds=60, path_pattern=r"^/api/(officials|staff)", methods=frozenset({"POST"})
    ),
    # Image rendering
    RateLimitRule(requests=30, window_seconds=60, path_pattern=r"^/api/(og-image|share-card)"),
    RateLimitRule(requests=60, window_seconds=60, path_pattern=r"^/api/"),
    RateLimitRule(requests=120, window_seconds=60),
]


def client_id_for(request: Request) -> str:
    connecting_ip = request.headers.get("CF-Connecting-IP")
    if connecting_ip:
        return connecting_ip.strip()

    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    if request.client:
        return request.client.host
    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject clients that exceed their budget with a 429.

    Every matching rule is counted; the request is refused as soon as one of
    them is exhausted. Responses carry X-RateLimit-* headers for the first
    matching rule.
    """

    def __init__(
        self,
        app,
        rules: Optional[list[RateLimitRule]] = None,
        store: Optional[RateLimitStore] = None,
    ):
        super().__init__(app)
        self.rules = rules if rules is not None else DEFAULT_RULES
        self.store = store if store is not None else RateLimitStore()

    def matching_rules(self, method: str, path: str) -> list[RateLimitRule]:
        """Rules that apply to a request, most specific first.

        Once a rule with a path pattern matches, only other rules for that
        same pattern are kept, so a request isn't also charged to the broad
        ``/api/`` or default budgets.
        """
        matched = [rule for rule in self.rules if rule.applies_to(method, path)]
        if not matched:
            return [RateLimitRule(requests=120, window_seconds=60)]
        first = matched[0]
        return [rule for rule in matched if rule.path_pattern == first.path_pattern]

    @staticmethod
    def _with_headers(response: Response, limit: int, remaining: int, reset: int) -> Response:
        response.headers["X-RateLimit-Limit"] = str(limit)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Reset"] = str(reset)
        return response

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if path == "/health" or request.method == "OPTIONS":
            return await call_next(request)

        client_id = client_id_for(request)
        rules = self.matching_rules(request.method, path)

        headers = None
        for rule in rules:
            allowed, remaining, reset = self.store.hit(
                client_id, rule.key, rule.requests, rule.window_seconds
            )
            if headers is None:
                headers = (rule.requests, remaining, reset)
            if not allowed:
                retry_after = max(0, reset - int(time.time()))
                response = JSONResponse(
                    status_code=429,
                    content={
                        "success": False,
                        "error": "Rate limit exceeded. Please try again later.",
                        "retryAfter": retry_after,
                    },
                )
                response.headers["Retry-After"] = str(retry_after)
                return self._with_headers(response, rule.requests, 0, reset)

        response = await call_next(request)
        return self._with_headers(response, *headers)
