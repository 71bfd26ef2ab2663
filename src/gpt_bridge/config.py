"""config

Process configuration for the bridge.

Values come from the process environment, optionally seeded from a ``.env``
file via python-dotenv (variables already set in the environment win). The
only required value is ``OPENAI_API_KEY``; its absence is a fatal
:class:`ConfigurationError` raised before the server starts.

Recognised variables
--------------------
OPENAI_API_KEY          credential forwarded to the upstream API (required)
OPENAI_BASE_URL         alternative API base URL
OPENAI_TIMEOUT          per-request timeout in seconds (SDK default if unset)
GPT_BRIDGE_LOG_LEVEL    DEBUG, INFO, WARNING, ERROR (default INFO)
GPT_BRIDGE_LOG_FORMAT   console or json (default console)
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Literal

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from gpt_bridge.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path


class Settings(BaseModel):
    """Immutable snapshot of the process configuration."""

    api_key: SecretStr
    base_url: str | None = None
    timeout: float | None = Field(None, gt=0)
    log_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = 'INFO'
    log_format: Literal['console', 'json'] = 'console'

    model_config = ConfigDict(frozen=True)

    @property
    def credential(self) -> str:
        return self.api_key.get_secret_value()


def load_settings(
    env_file: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build :class:`Settings` from the environment.

    Parameters
    ----------
    env_file
        Explicit ``.env`` path. When omitted python-dotenv searches upwards
        from the working directory.
    environ
        Mapping to read instead of ``os.environ``. No ``.env`` file is loaded
        when this is given.

    Raises
    ------
    ConfigurationError
        If ``OPENAI_API_KEY`` is missing or another value is malformed.

    """
    if environ is None:
        load_dotenv(env_file or find_dotenv(usecwd=True))
        environ = os.environ

    api_key = environ.get('OPENAI_API_KEY')
    if not api_key:
        raise ConfigurationError(
            'OPENAI_API_KEY environment variable is not set. '
            'Please set it in .env file or as an environment variable'
        )

    raw = {
        'api_key': api_key,
        'base_url': environ.get('OPENAI_BASE_URL') or None,
        'timeout': environ.get('OPENAI_TIMEOUT') or None,
        'log_level': environ.get('GPT_BRIDGE_LOG_LEVEL', 'INFO').upper(),
        'log_format': environ.get('GPT_BRIDGE_LOG_FORMAT', 'console').lower(),
    }
    try:
        return Settings.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f'Invalid configuration: {exc}') from exc
