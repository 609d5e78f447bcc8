"""Console front end for the copy review group chat."""

from __future__ import annotations

import asyncio
import logging
import sys

from rich.console import Console
from rich.text import Text

from groupchat.agents import REVIEWER_NAME, WRITER_NAME
from groupchat.session import get_config, run_session
from groupchat.utils.config import Config
from groupchat.utils.errors import CompletionProviderError, ConfigurationError
from groupchat.utils.logging import clear_context, setup_logging
from groupchat.utils.transcript import TranscriptFormatter

EXIT_TOKEN = "exit"

logger = logging.getLogger(__name__)

console = Console(highlight=False)


async def stream_session(user_input: str, config: Config, formatter: TranscriptFormatter) -> None:
    """Print each agent turn in its author's color as soon as it arrives."""
    async for turn in run_session(user_input, config=config):
        console.print(Text(formatter.format_turn(turn) + "\n", style=formatter.style_for(turn)))


def main() -> int:
    try:
        config = get_config()
    except ConfigurationError as e:
        console.print(f"[red]{e.context.message}[/red]")
        if e.context.remediation:
            console.print(e.context.remediation)
        return 1

    setup_logging(config.logging.level, config.logging.format, config.logging.file)
    logger.info(f"Configuration loaded: region={config.aws_region}, model={config.bedrock.model_id}")

    formatter = TranscriptFormatter.for_agents(
        writer=config.writer.name or WRITER_NAME,
        reviewer=config.reviewer.name or REVIEWER_NAME,
    )

    while True:
        try:
            user_input = console.input("[bold]User:[/bold] ")
        except EOFError:
            break
        if not user_input or user_input == EXIT_TOKEN:
            break

        console.print("\n[bold]Assistant:[/bold]")
        try:
            asyncio.run(stream_session(user_input, config, formatter))
        except CompletionProviderError as e:
            console.print(f"[red]Session aborted: {e}[/red]\n")
            continue
        finally:
            clear_context()

        console.print("[bold]Assistant:[/bold] Done\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
