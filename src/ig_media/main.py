"""Main CLI entry point for the Instagram media extractor."""

import asyncio
import logging
import sys
from typing import Optional

import hydra
from omegaconf import DictConfig
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import AppConfig, load_config
from .errors import ExtractionError
from .models import ExtractionResult
from .scraper import InstagramScraper

console = Console()


def setup_logging(level: str = "INFO") -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


@hydra.main(version_base=None, config_path="../../conf", config_name="config")
def main(cfg: DictConfig) -> None:
    """Main entry point."""
    config = load_config(cfg)
    setup_logging(config.log_level)

    console.print("[bold blue]Instagram Media Extractor[/bold blue]")
    console.print()

    if not config.urls:
        console.print("[yellow]No URLs given.[/yellow] Pass urls='[https://www.instagram.com/reel/ABC123/]'")
        return

    failures = asyncio.run(run_extraction(config))
    if failures:
        sys.exit(1)


async def run_extraction(config: AppConfig) -> int:
    """Extract every configured URL and print a summary table.

    Returns:
        Number of URLs that failed
    """
    scraper = InstagramScraper(config=config)
    outcomes: list[tuple[str, Optional[ExtractionResult], Optional[ExtractionError]]] = []

    for url in config.urls:
        try:
            result = await scraper.extract(url)
            outcomes.append((url, result, None))
        except ExtractionError as e:
            outcomes.append((url, None, e))

    console.print(render_table(outcomes))
    return sum(1 for _, _, error in outcomes if error is not None)


def render_table(outcomes) -> Table:
    table = Table(title="Extraction Results")
    table.add_column("URL", style="cyan", overflow="fold")
    table.add_column("Type")
    table.add_column("Media URL", overflow="fold")
    table.add_column("Caption", overflow="fold")

    for url, result, error in outcomes:
        if error is not None:
            table.add_row(url, f"[red]{error.kind.value}[/red]", error.message, "")
        else:
            table.add_row(url, f"[green]{result.type}[/green]", result.media_url, result.caption or "")

    return table


if __name__ == "__main__":
    main()
