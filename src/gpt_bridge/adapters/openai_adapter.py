"""adapters.openai_adapter

Concrete invoker that bridges :class:`gpt_bridge.core.abc.AbstractInvoker`
with the **OpenAI Responses** HTTP API.

This implementation targets *openai>=1.x* (the unified client with
``client.responses``). A fresh ``AsyncOpenAI`` client is opened per call with
the SDK's built-in retries disabled, so every invocation is exactly one HTTP
request and the connection is released when the call ends.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import openai

from gpt_bridge.core.abc import AbstractInvoker
from gpt_bridge.core.exceptions import UpstreamError
from gpt_bridge.core.types import Success, Usage

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


@dataclass(frozen=True)
class UpstreamReply:
    """The parts of a Responses API reply we care about."""

    text: str | None
    usage: Usage | None


def parse_reply(response: Any) -> UpstreamReply:
    """Pull text and token counters out of an SDK ``Response`` object."""
    text = getattr(response, 'output_text', None)
    if not isinstance(text, str):
        text = None

    raw_usage = getattr(response, 'usage', None)
    if raw_usage is None:
        return UpstreamReply(text=text, usage=None)
    try:
        usage = Usage(
            prompt_tokens=raw_usage.input_tokens,
            completion_tokens=raw_usage.output_tokens,
            total_tokens=raw_usage.total_tokens,
        )
    except (AttributeError, ValueError) as exc:
        raise UpstreamError(f'Malformed usage in upstream response: {exc}') from exc
    return UpstreamReply(text=text, usage=usage)


# ---------------------------------------------------------------------------
# Invoker implementation
# ---------------------------------------------------------------------------


class OpenAIInvoker(AbstractInvoker):
    """Invoker for the OpenAI Responses API."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        client_factory: Callable[..., openai.AsyncOpenAI] = openai.AsyncOpenAI,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._client_factory = client_factory

    def _client_options(self, credential: str) -> dict[str, Any]:
        options: dict[str, Any] = {'api_key': credential, 'max_retries': 0}
        if self._base_url is not None:
            options['base_url'] = self._base_url
        if self._timeout is not None:
            options['timeout'] = self._timeout
        return options

    async def _invoke(self, credential: str, payload: Mapping[str, Any]) -> Success:
        try:
            async with self._client_factory(**self._client_options(credential)) as client:
                response = await client.responses.create(**payload)
        except openai.OpenAIError as exc:
            raise UpstreamError(str(exc)) from exc
        except ValueError as exc:
            # 2xx with a body the SDK cannot decode (e.g. invalid JSON)
            raise UpstreamError(f'Malformed upstream response: {exc}') from exc

        reply = parse_reply(response)
        match reply:
            case UpstreamReply(text=None):
                raise UpstreamError('Malformed upstream response: no text output')
            case UpstreamReply(text=text, usage=usage):
                return Success(content=text, usage=usage)
