"""Generate feedback for a Forge test file from the command line."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import toadus.lib.cli as click
from toadus.core import di
from toadus.core.container import FeedbackContainer
from toadus.model import EvaluatorExit, FeedbackStrategy, ThoroughnessMode

logger = logging.getLogger(__name__)


class EchoReporter(object):
    """Progress on stderr, so that stdout carries only the feedback itself."""

    def progress(self, message: str) -> None:
        click.echo(message, err=True)

    def warn(self, message: str) -> None:
        click.echo(click.style(message, fg="yellow"), err=True)

    def error(self, message: str) -> None:
        click.echo(click.style(message, fg="red"), err=True)


@click.command("feedback")
@click.argument("test_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strategy", type=click.EnumType(FeedbackStrategy), default=None, help="overrides feedback.strategy")
@click.option(
    "--thoroughness", type=click.EnumType(ThoroughnessMode), default=None, help="overrides feedback.thoroughness"
)
@click.option("--show-output", is_flag=True, default=False, help="echo evaluator output as it arrives")
@di.inject
def feedback(
    test_file: Path,
    strategy: FeedbackStrategy | None,
    thoroughness: ThoroughnessMode | None,
    show_output: bool,
    container: FeedbackContainer = di.Provide["feedback"],
) -> int:
    """Explain what is inconsistent or missing in TEST_FILE (a `*.test.frg` file)."""
    container.reporter.override(EchoReporter())
    generator = container.generator()
    if strategy is not None:
        generator.strategy = strategy
    if thoroughness is not None:
        generator.thoroughness = thoroughness

    gateway = container.gateway()
    if show_output:
        gateway.on_stdout(lambda chunk: click.echo(chunk, nl=False, err=True))
        gateway.on_stderr(lambda chunk: click.echo(click.style(chunk, dim=True), nl=False, err=True))

    def on_exit(exit_: EvaluatorExit) -> None:
        logger.debug(exit_.describe())

    gateway.on_exit(on_exit)

    async def _feedback() -> str:
        try:
            return await generator.generate_hints(test_file.read_text(encoding="utf8"), str(test_file))
        finally:
            await gateway.aclose()

    logger.info("generating feedback", extra={"test_file": str(test_file), "strategy": generator.strategy.value})
    click.echo(asyncio.run(_feedback()))
    return 0
