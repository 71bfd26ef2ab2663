"""Process entry point: ``gpt5-server [--env-file PATH]``.

Loads configuration, configures logging and runs the MCP server on stdio
until the client disconnects or SIGINT/SIGTERM arrives. A missing API key
is reported on stderr and exits with status 1.
"""

from __future__ import annotations

import argparse
import signal
import sys
from typing import TYPE_CHECKING

import anyio
import structlog

from gpt_bridge.adapters.openai_adapter import OpenAIInvoker
from gpt_bridge.config import load_settings
from gpt_bridge.core.exceptions import ConfigurationError
from gpt_bridge.logging_config import configure_logging
from gpt_bridge.server.app import build_server, serve_stdio
from gpt_bridge.server.dispatcher import Dispatcher

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gpt_bridge.config import Settings

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='gpt5-server', description='MCP server forwarding tool calls to GPT-5')
    parser.add_argument('--env-file', dest='env_file', help='Path to a .env file to load before startup')
    return parser


async def _cancel_on_signal(scope: anyio.CancelScope) -> None:
    with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
        async for signum in signals:
            logger.info('Received signal, shutting down', signal=signal.Signals(signum).name)
            scope.cancel()
            return


async def run(settings: Settings) -> None:
    invoker = OpenAIInvoker(base_url=settings.base_url, timeout=settings.timeout)
    server = build_server(Dispatcher(settings.credential, invoker))

    async with anyio.create_task_group() as tg:
        tg.start_soon(_cancel_on_signal, tg.cancel_scope)
        await serve_stdio(server)
        # stdin closed: stop watching for signals
        tg.cancel_scope.cancel()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        settings = load_settings(args.env_file)
    except ConfigurationError as exc:
        logger.error('Startup aborted', error_kind=exc.error_kind, error=str(exc))
        return 1

    configure_logging(settings.log_level, settings.log_format)
    logger.info('Starting GPT-5 MCP server')
    anyio.run(run, settings)
    return 0


if __name__ == '__main__':
    sys.exit(main())
