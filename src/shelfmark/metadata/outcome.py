# ABOUTME: Explicit three-way result of a single provider call.
# ABOUTME: Distinguishes found, not-found, and failed instead of mixing None and exceptions.

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from shelfmark.metadata.provider import ProviderError
from shelfmark.metadata.types import BookCandidate

logger = logging.getLogger(__name__)


class LookupStatus(enum.Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class LookupOutcome:
    """What one provider produced for one query."""

    provider: str
    status: LookupStatus
    candidates: list[BookCandidate] = field(default_factory=list)
    error: ProviderError | None = None

    @classmethod
    def found(cls, provider: str, candidates: list[BookCandidate]) -> "LookupOutcome":
        if not candidates:
            raise ValueError("a found outcome needs at least one candidate")
        return cls(provider=provider, status=LookupStatus.FOUND, candidates=candidates)

    @classmethod
    def not_found(cls, provider: str) -> "LookupOutcome":
        return cls(provider=provider, status=LookupStatus.NOT_FOUND)

    @classmethod
    def failed(cls, provider: str, error: ProviderError) -> "LookupOutcome":
        return cls(provider=provider, status=LookupStatus.FAILED, error=error)

    @property
    def first(self) -> BookCandidate | None:
        return self.candidates[0] if self.candidates else None

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.FOUND


def attempt(
    provider: str,
    call: Callable[..., BookCandidate | list[BookCandidate] | None],
    *args: object,
) -> LookupOutcome:
    """Run a provider call and classify its result.

    A ProviderError becomes a FAILED outcome; anything else raised is a bug
    and propagates.
    """
    try:
        result = call(*args)
    except ProviderError as exc:
        logger.debug("%s lookup failed: %s", provider, exc)
        return LookupOutcome.failed(provider, exc)

    if result is None:
        return LookupOutcome.not_found(provider)
    candidates = result if isinstance(result, list) else [result]
    if not candidates:
        return LookupOutcome.not_found(provider)
    return LookupOutcome.found(provider, candidates)
