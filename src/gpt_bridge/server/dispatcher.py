"""server.dispatcher

Binds the two tool entry points to the pipeline

    parse arguments -> build payload -> invoke upstream -> format envelope

Validation failures stop before the network call and come back as a
``ValidationError`` envelope; nothing in here raises to the protocol layer.
The dispatcher holds only the credential and a stateless invoker, so any
number of calls may be in flight at once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from gpt_bridge.core.exceptions import ParameterValidationError
from gpt_bridge.core.formatter import format_result
from gpt_bridge.core.request_mapper import build_conversation_payload, build_prompt_payload
from gpt_bridge.core.types import ErrorKind, Failure, parse_conversation_request, parse_prompt_request

if TYPE_CHECKING:
    from collections.abc import Mapping

    from gpt_bridge.core.abc import AbstractInvoker
    from gpt_bridge.core.types import ResultEnvelope

logger = structlog.get_logger(__name__)

PREVIEW_CHARS = 100


class Dispatcher:
    """Entry points for the ``generate`` and ``converse`` operations."""

    def __init__(self, credential: str, invoker: AbstractInvoker) -> None:
        self._credential = credential
        self._invoker = invoker

    async def generate(self, arguments: Mapping[str, Any] | None) -> ResultEnvelope:
        """Single-prompt generation."""
        try:
            request = parse_prompt_request(arguments)
        except ParameterValidationError as exc:
            return self._rejected('generate', exc)

        logger.info('GPT-5 generate', model=request.model, input_preview=request.input[:PREVIEW_CHARS])
        result = await self._invoker.invoke(self._credential, build_prompt_payload(request))
        return format_result(result)

    async def converse(self, arguments: Mapping[str, Any] | None) -> ResultEnvelope:
        """Generation from an ordered list of conversation messages."""
        try:
            request = parse_conversation_request(arguments)
        except ParameterValidationError as exc:
            return self._rejected('converse', exc)

        logger.info('GPT-5 messages', model=request.model, message_count=len(request.messages))
        result = await self._invoker.invoke(self._credential, build_conversation_payload(request))
        return format_result(result)

    @staticmethod
    def _rejected(operation: str, exc: ParameterValidationError) -> ResultEnvelope:
        logger.warning('Rejected tool arguments', operation=operation, fields=list(exc.fields))
        return format_result(Failure(error_kind=ErrorKind(exc.error_kind), message=str(exc)))
