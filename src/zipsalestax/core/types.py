"""Type aliases used across the ZIP Sales Tax service."""

from __future__ import annotations

from typing import Callable

CacheKey = str
Percentage = float
ExpiresAt = float
Clock = Callable[[], float]
