"""core.formatter

Turns a :data:`GenerationResult` into the :class:`ResultEnvelope` handed back
to the MCP caller. The mapping is total: every result yields exactly one
envelope holding exactly one text block.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gpt_bridge.core.types import ErrorKind, Failure, ResultEnvelope, Success, TextBlock, Usage

if TYPE_CHECKING:
    from gpt_bridge.core.types import GenerationResult

ERROR_PREFIXES: dict[ErrorKind, str] = {
    ErrorKind.upstream: 'GPT-5 API error',
    ErrorKind.validation: 'Invalid arguments',
}


def format_usage(usage: Usage) -> str:
    return (
        f'{usage.prompt_tokens} prompt tokens, '
        f'{usage.completion_tokens} completion tokens, '
        f'{usage.total_tokens} total tokens'
    )


def format_result(result: GenerationResult) -> ResultEnvelope:
    match result:
        case Failure(error_kind=kind, message=message):
            return ResultEnvelope(content=[TextBlock(text=f'{ERROR_PREFIXES[kind]}: {message}')], is_error=True)
        case Success(content=content, usage=None):
            text = content
        case Success(content=content, usage=usage):
            text = f'{content}\n\n**Usage:** {format_usage(usage)}'
    return ResultEnvelope(content=[TextBlock(text=text)], is_error=False)
