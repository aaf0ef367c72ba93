"""Dojo CLI: scrape Codewars katas and generate practice files.

Usage:
    dojo scrape URL                    # Extract a kata and save its JSON document
    dojo scrape URL -d my-katas        # ... under a custom katas directory
    dojo generate-files KATA_JSON      # Write solution/test/README files
    dojo full URL                      # Scrape, then generate files
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import click

from dojo.common.browser_session import BrowserSession
from dojo.common.data_models import Kata
from dojo.common.exceptions import (
    ExtractionError,
    KataFileError,
    ScraperAssumptionException,
    SessionError,
)
from dojo.driver.kata_driver import ExtractionSettings, KataDriver
from dojo.storage import GeneratedFiles, generate_kata_files, save_kata


@contextmanager
def _open_session(headed: bool, timeout: int) -> Iterator[BrowserSession]:
    from dojo.driver.playwright_session import PlaywrightSession

    with PlaywrightSession.open(
        headless=not headed, default_timeout=timeout
    ) as session:
        yield session


def _configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _scrape_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that drives a browser."""
    options = [
        click.option(
            "-d",
            "--katas-dir",
            type=click.Path(file_okay=False),
            default="katas",
            show_default=True,
            help="Directory to store katas in.",
        ),
        click.option(
            "--headed", is_flag=True, help="Show the browser window."
        ),
        click.option(
            "--max-attempts",
            type=click.IntRange(min=1),
            default=5,
            show_default=True,
            help="Extraction attempts before giving up.",
        ),
        click.option(
            "--retry-delay",
            type=click.FloatRange(min=0),
            default=1.0,
            show_default=True,
            help="Seconds to wait between attempts.",
        ),
        click.option(
            "--settle-pause",
            type=click.FloatRange(min=0),
            default=1.0,
            show_default=True,
            help="Seconds to pause after each scroll.",
        ),
        click.option(
            "--timeout",
            type=click.IntRange(min=1),
            default=30000,
            show_default=True,
            help="Timeout in milliseconds for each page wait.",
        ),
        click.option("-v", "--verbose", is_flag=True, help="Verbose logging."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _scrape(
    url: str,
    headed: bool,
    max_attempts: int,
    retry_delay: float,
    settle_pause: float,
    timeout: int,
) -> Kata:
    settings = ExtractionSettings(
        max_attempts=max_attempts,
        retry_delay=retry_delay,
        wait_timeout=timeout,
        settle_pause=settle_pause,
    )
    try:
        with _open_session(headed, timeout) as session:
            return KataDriver(session, settings).extract(url)
    except (ScraperAssumptionException, ExtractionError, SessionError) as e:
        raise click.ClickException(str(e)) from e


def _save(kata: Kata, katas_dir: str) -> Path:
    try:
        return save_kata(kata, katas_dir)
    except OSError as e:
        raise click.ClickException(f"Could not save kata: {e}") from e


def _generate(json_path: Path) -> GeneratedFiles:
    try:
        return generate_kata_files(json_path)
    except KataFileError as e:
        raise click.ClickException(str(e)) from e
    except OSError as e:
        raise click.ClickException(f"Could not write kata files: {e}") from e


def _echo_summary(kata: Kata, json_path: Path) -> None:
    click.echo(f"\nKata information saved to: {json_path}")
    click.echo("\nKata Information:")
    click.echo(f"Name:       {kata.name}")
    click.echo(f"Difficulty: {kata.difficulty}")
    click.echo(f"Author:     {kata.author or 'Unknown'}")
    click.echo(f"Category:   {kata.category or 'Uncategorized'}")
    click.echo(f"Tags:       {', '.join(kata.tags)}")
    click.echo(f"\nDescription:\n{kata.description}")
    click.echo(f"\nAvailable Languages: {', '.join(kata.languages_available)}")
    click.echo(f"\nSolution Template:\n{kata.solution_placeholder}")
    click.echo(f"\nTests:\n{kata.tests}")


def _echo_generated(files: GeneratedFiles) -> None:
    click.echo("Files generated successfully:")
    click.echo(f"- Solution: {files.solution}")
    click.echo(f"- Tests: {files.tests}")
    click.echo(f"- README: {files.readme}")


@click.group()
@click.version_option(package_name="dojo")
def cli() -> None:
    """Dojo: Codewars kata scraper CLI."""


@cli.command()
@click.argument("url")
@_scrape_options
def scrape(
    url: str,
    katas_dir: str,
    headed: bool,
    max_attempts: int,
    retry_delay: float,
    settle_pause: float,
    timeout: int,
    verbose: bool,
) -> None:
    """Scrape a kata from Codewars and save it as JSON.

    \b
    Examples:
        dojo scrape https://www.codewars.com/kata/abc123/train/python
        dojo scrape https://www.codewars.com/kata/abc123/train/ruby -d ~/katas
    """
    _configure_logging(verbose)
    kata = _scrape(url, headed, max_attempts, retry_delay, settle_pause, timeout)
    json_path = _save(kata, katas_dir)
    _echo_summary(kata, json_path)


@cli.command("generate-files")
@click.argument("kata_json", type=click.Path(dir_okay=False))
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
def generate_files(kata_json: str, verbose: bool) -> None:
    """Generate solution, test and README files from a kata JSON file."""
    _configure_logging(verbose)
    _echo_generated(_generate(Path(kata_json)))


@cli.command()
@click.argument("url")
@_scrape_options
def full(
    url: str,
    katas_dir: str,
    headed: bool,
    max_attempts: int,
    retry_delay: float,
    settle_pause: float,
    timeout: int,
    verbose: bool,
) -> None:
    """Scrape a kata, save it, and generate its solution files."""
    _configure_logging(verbose)
    kata = _scrape(url, headed, max_attempts, retry_delay, settle_pause, timeout)
    json_path = _save(kata, katas_dir)
    _echo_summary(kata, json_path)
    _echo_generated(_generate(json_path))


if __name__ == "__main__":
    cli()
