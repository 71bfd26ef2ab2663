"""core.types

Shared DTOs and enums used throughout *gpt_bridge*.

The request models double as the tool input schema: they validate raw
caller arguments and their JSON schema is what the MCP server advertises.
Numeric and string fields are strict so that nothing is coerced across
types (``"0.5"`` is not a temperature), and out-of-range values are
rejected rather than clamped. Unknown keys are dropped; an explicit
``null`` for an optional field is an error, the field must be omitted.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)

from gpt_bridge.core.exceptions import ParameterValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_MODEL = 'gpt-5'

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Role(StrEnum):
    user = 'user'
    developer = 'developer'
    assistant = 'assistant'


class ReasoningEffort(StrEnum):
    low = 'low'
    medium = 'medium'
    high = 'high'


class ErrorKind(StrEnum):
    validation = 'ValidationError'
    upstream = 'UpstreamError'


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


class Message(BaseModel):
    """Single conversation turn. Content is kept verbatim, empty allowed."""

    role: Role = Field(..., description='Message role')
    content: StrictStr = Field(..., description='Message content')

    # Immutable value-object
    model_config = ConfigDict(frozen=True, extra='ignore')


# ---------------------------------------------------------------------------
# Generation parameters shared by both tools
# ---------------------------------------------------------------------------


class GenerationParams(BaseModel):
    """Model selection and optional sampling controls.

    Optional fields the caller omits stay ``None`` and never reach the
    upstream request.
    """

    model: StrictStr = Field(DEFAULT_MODEL, description='GPT-5 model variant to use')
    instructions: StrictStr | None = Field(None, description='System instructions for the model')
    reasoning_effort: ReasoningEffort | None = Field(None, description='Reasoning effort level')
    max_tokens: Annotated[StrictInt, Field(gt=0)] | None = Field(None, description='Maximum tokens to generate')
    temperature: Annotated[StrictFloat, Field(ge=0.0, le=2.0)] | None = Field(
        None, description='Temperature for randomness (0-2)'
    )
    top_p: Annotated[StrictFloat, Field(ge=0.0, le=1.0)] | None = Field(None, description='Top-p sampling parameter')

    model_config = ConfigDict(frozen=True, extra='ignore')

    @field_validator('instructions', 'reasoning_effort', 'max_tokens', 'temperature', 'top_p', mode='before')
    @classmethod
    def _reject_explicit_null(cls, v: object) -> object:
        """Optional means "may be omitted", not "may be null"."""
        if v is None:
            raise ValueError('must be omitted rather than null')
        return v

    def optional_fields(self) -> dict[str, Any]:
        """Return only the optional knobs the caller actually set."""
        return self.model_dump(include=set(GenerationParams.model_fields) - {'model'}, exclude_none=True, mode='json')


class PromptRequest(GenerationParams):
    """Arguments of the single-prompt tool."""

    input: Annotated[StrictStr, Field(min_length=1)] = Field(..., description='The input text or prompt for GPT-5')


class ConversationRequest(GenerationParams):
    """Arguments of the multi-turn tool. Message order is preserved."""

    messages: Annotated[list[Message], Field(min_length=1)] = Field(..., description='Array of conversation messages')


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class Usage(BaseModel):
    prompt_tokens: NonNegativeInt
    completion_tokens: NonNegativeInt
    total_tokens: NonNegativeInt

    model_config = ConfigDict(frozen=True)


class Success(BaseModel):
    status: Literal['success'] = 'success'
    content: str
    usage: Usage | None = None

    model_config = ConfigDict(frozen=True)


class Failure(BaseModel):
    status: Literal['failure'] = 'failure'
    error_kind: ErrorKind
    message: str

    model_config = ConfigDict(frozen=True)


GenerationResult = Annotated[Success | Failure, Field(discriminator='status')]


class TextBlock(BaseModel):
    type: Literal['text'] = 'text'
    text: str

    model_config = ConfigDict(frozen=True)


class ResultEnvelope(BaseModel):
    """What every tool call returns: one text block plus an error flag."""

    content: list[TextBlock]
    is_error: bool = Field(False, serialization_alias='isError')

    model_config = ConfigDict(frozen=True)

    @property
    def text(self) -> str:
        return ''.join(block.text for block in self.content)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _to_parameter_error(exc: ValidationError) -> ParameterValidationError:
    fields: list[str] = []
    problems: list[str] = []
    for err in exc.errors():
        location = '.'.join(str(part) for part in err['loc']) or '<root>'
        fields.append(location)
        problems.append(f'{location}: {err["msg"]}')
    return ParameterValidationError('; '.join(problems), fields=tuple(fields))


def parse_prompt_request(arguments: Mapping[str, Any] | None) -> PromptRequest:
    """Validate raw tool arguments for the single-prompt tool.

    Raises
    ------
    ParameterValidationError
        If any field is missing, mistyped or out of its domain.

    """
    try:
        return PromptRequest.model_validate(dict(arguments or {}))
    except ValidationError as exc:
        raise _to_parameter_error(exc) from exc


def parse_conversation_request(arguments: Mapping[str, Any] | None) -> ConversationRequest:
    """Validate raw tool arguments for the conversation tool."""
    try:
        return ConversationRequest.model_validate(dict(arguments or {}))
    except ValidationError as exc:
        raise _to_parameter_error(exc) from exc
