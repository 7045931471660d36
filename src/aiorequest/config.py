from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .types import Seconds

DEFAULT_TIMEOUT: Seconds = 60


@dataclass(frozen=True)
class RequestConfiguration:
    """
    Per-call options. ``headers`` are applied to every request made with this
    configuration, before any header set by the body encoder or the caller.
    """

    timeout: Seconds | None = None
    headers: Mapping[str, str] | None = None

    @classmethod
    def default(cls) -> RequestConfiguration:
        return cls()

    @property
    def resolved_timeout(self) -> Seconds:
        if self.timeout is not None:
            return self.timeout
        return DEFAULT_TIMEOUT
