# ABOUTME: CLI entry point using asyncclick for native async support
# ABOUTME: Runs the full municipality crawl; the only options control logging output

import asyncclick as click
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

from municipality_crawler.config import get_config
from municipality_crawler.core.pipeline import CrawlOrchestrator, CrawlSummary
from municipality_crawler.utils.logging import LoggingMode, configure_logging, with_pipeline_context
from municipality_crawler.utils.rich_tables import create_crawl_summary_table, print_rich_table

console = Console()


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    mode = LoggingMode.PRODUCTION if json_output else config.log_mode

    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


async def _run_with_progress(orchestrator: CrawlOrchestrator) -> CrawlSummary:
    """Run the crawl behind a rich progress bar that advances once per saved batch."""
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    )
    task_id = progress.add_task("🗺️ Crawling municipalities...", total=None)

    def on_batch(index: int, count: int, saved: int) -> None:
        progress.update(task_id, completed=index, total=count, description=f"🗺️ {saved} municipalities saved")

    with progress:
        return await orchestrator.run(on_batch=on_batch)


async def _crawl_async(json_output: bool) -> CrawlSummary:
    config = get_config()

    with with_pipeline_context("municipality_crawl") as logger:
        if not json_output:
            console.print(
                Panel.fit(
                    "🏔️ [bold cyan]Swiss Municipality Crawler[/bold cyan] 🏔️\n"
                    f"Project: {config.google_cloud_project} · Location: {config.google_cloud_location}",
                    border_style="magenta",
                )
            )

        orchestrator = CrawlOrchestrator.from_config(config)
        try:
            if json_output:
                summary = await orchestrator.run()
            else:
                summary = await _run_with_progress(orchestrator)
        finally:
            await orchestrator.close()

        logger.info("Crawl finished", total=summary.total, failed=summary.failed)

        if not json_output:
            print_rich_table(console, create_crawl_summary_table(summary))

        return summary


@click.command()
@click.option("--json", "json_output", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", default=None, help="Custom log file path")
async def app(json_output: bool, log_level: str | None, log_file: str | None):
    """
    🏔️ Swiss Municipality Crawler

    Crawls every Swiss municipality from Wikipedia, extracts facts with Gemini,
    renders a stylized diorama per municipality and saves the dataset to
    output/municipalities.json.
    """
    _initialize_logging(json_output, log_level, log_file)
    await _crawl_async(json_output)


if __name__ == "__main__":
    app()
