"""core.abc

Abstract base class that *all* upstream invokers must implement.

Design goals
============
1. **Credential as an argument** - `invoke()` receives the API key on every
    call instead of reading process-wide state, so tests inject fakes freely.
2. **No exception crosses the boundary** - `invoke()` converts every
    `UpstreamError` raised by `_invoke()` into a `Failure` result. Callers
    only ever see a `GenerationResult`.
3. **Exactly one attempt** - no retry wrapper; one `invoke()` is one request.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import structlog

from gpt_bridge.core.exceptions import UpstreamError
from gpt_bridge.core.types import ErrorKind, Failure, Success

if TYPE_CHECKING:
    from collections.abc import Mapping

    from gpt_bridge.core.types import GenerationResult

logger = structlog.get_logger(__name__)


class AbstractInvoker(ABC):
    """Provider-independent upstream invoker interface."""

    # ------------------------------------------------------------------
    # Public async API
    # ------------------------------------------------------------------

    async def invoke(self, credential: str, payload: Mapping[str, Any]) -> GenerationResult:
        """Perform one upstream call and classify its outcome.

        Subclasses **must not** override this - override `_invoke()` instead.
        """
        try:
            return await self._invoke(credential, payload)
        except UpstreamError as exc:
            logger.error('Upstream call failed', model=payload.get('model'), error=str(exc))
            return Failure(error_kind=ErrorKind(exc.error_kind), message=str(exc))

    # ------------------------------------------------------------------
    # Methods to implement in concrete adapters
    # ------------------------------------------------------------------

    @abstractmethod
    async def _invoke(self, credential: str, payload: Mapping[str, Any]) -> Success:
        """Provider-specific call. Raise `UpstreamError` on any failure."""

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f'<{self.__class__.__name__}>'
