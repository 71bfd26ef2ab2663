from __future__ import annotations

from pathlib import Path

import pytest

from gpt_bridge import main as main_module
from gpt_bridge.config import Settings, load_settings
from gpt_bridge.core.exceptions import ConfigurationError


def test_missing_key_is_fatal() -> None:
    with pytest.raises(ConfigurationError) as info:
        load_settings(environ={})
    assert 'OPENAI_API_KEY' in str(info.value)
    assert info.value.error_kind == 'ConfigurationError'


def test_empty_key_is_fatal() -> None:
    with pytest.raises(ConfigurationError):
        load_settings(environ={'OPENAI_API_KEY': ''})


def test_defaults() -> None:
    settings: Settings = load_settings(environ={'OPENAI_API_KEY': 'sk-test'})
    assert settings.credential == 'sk-test'
    assert 'sk-test' not in repr(settings)
    assert settings.base_url is None
    assert settings.timeout is None
    assert settings.log_level == 'INFO'
    assert settings.log_format == 'console'


def test_optional_values() -> None:
    settings = load_settings(
        environ={
            'OPENAI_API_KEY': 'sk-test',
            'OPENAI_BASE_URL': 'http://localhost:8080/v1',
            'OPENAI_TIMEOUT': '30',
            'GPT_BRIDGE_LOG_LEVEL': 'debug',
            'GPT_BRIDGE_LOG_FORMAT': 'JSON',
        }
    )
    assert settings.base_url == 'http://localhost:8080/v1'
    assert settings.timeout == 30.0  # noqa: PLR2004
    assert settings.log_level == 'DEBUG'
    assert settings.log_format == 'json'


@pytest.mark.parametrize(
    ('name', 'value'),
    [('OPENAI_TIMEOUT', 'soon'), ('OPENAI_TIMEOUT', '-1'), ('GPT_BRIDGE_LOG_FORMAT', 'xml')],
)
def test_malformed_values(name: str, value: str) -> None:
    with pytest.raises(ConfigurationError):
        load_settings(environ={'OPENAI_API_KEY': 'sk-test', name: value})


def test_env_file_loaded(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # setenv first so monkeypatch removes whatever load_dotenv writes
    monkeypatch.setenv('OPENAI_API_KEY', 'placeholder')
    monkeypatch.delenv('OPENAI_API_KEY')
    env_file = tmp_path / '.env'
    env_file.write_text('OPENAI_API_KEY=sk-from-file\n')

    assert load_settings(env_file).credential == 'sk-from-file'


def test_main_exits_on_missing_key(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv('OPENAI_API_KEY', raising=False)
    monkeypatch.setattr(main_module, 'configure_logging', lambda *_: None)
    ran: list[object] = []
    monkeypatch.setattr(main_module.anyio, 'run', lambda *args: ran.append(args))

    assert main_module.main(['--env-file', str(tmp_path / 'missing.env')]) == 1
    assert ran == []


def test_env_file_found_from_working_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('OPENAI_API_KEY', 'placeholder')
    monkeypatch.delenv('OPENAI_API_KEY')
    (tmp_path / '.env').write_text('OPENAI_API_KEY=sk-from-cwd\n')
    monkeypatch.chdir(tmp_path)

    assert load_settings().credential == 'sk-from-cwd'
