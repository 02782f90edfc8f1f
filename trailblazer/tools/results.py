"""Result type returned by the best-effort adapter calls."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class FetchResult:
    """
    Outcome of a "safe" adapter call.

    ``payload`` is always usable: the real data when ``ok`` is True, the
    placeholder otherwise. ``error`` holds the failure text for logging.
    """

    ok: bool
    payload: Any
    error: Optional[str] = None

    @classmethod
    def success(cls, payload: Any) -> "FetchResult":
        return cls(ok=True, payload=payload)

    @classmethod
    def unavailable(cls, placeholder: Any, error: Optional[str] = None) -> "FetchResult":
        return cls(ok=False, payload=placeholder, error=error)
