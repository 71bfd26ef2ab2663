"""core.request_mapper

Pure conversion of validated tool arguments into keyword arguments for the
OpenAI Responses API (``client.responses.create(**payload)``).

Optional knobs the caller did not set are left out entirely so the upstream
defaults apply; no ``None`` placeholder is ever sent.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gpt_bridge.core.types import ConversationRequest, GenerationParams, PromptRequest

# Tool argument name -> Responses API parameter name
_RENAMED_FIELDS: dict[str, str] = {
    'max_tokens': 'max_output_tokens',
}


def _common_fields(params: GenerationParams) -> dict[str, Any]:
    payload: dict[str, Any] = {'model': params.model}
    for name, value in params.optional_fields().items():
        if name == 'reasoning_effort':
            payload['reasoning'] = {'effort': value}
        else:
            payload[_RENAMED_FIELDS.get(name, name)] = value
    return payload


def build_prompt_payload(request: PromptRequest) -> dict[str, Any]:
    """Single-turn request: the prompt string is the whole input."""
    payload = _common_fields(request)
    payload['input'] = request.input
    return payload


def build_conversation_payload(request: ConversationRequest) -> dict[str, Any]:
    """Multi-turn request: messages are sent in caller order, roles untouched."""
    payload = _common_fields(request)
    payload['input'] = [{'role': str(message.role), 'content': message.content} for message in request.messages]
    return payload
