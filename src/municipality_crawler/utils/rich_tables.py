# ABOUTME: Rich table builders for CLI output
# ABOUTME: Summarizes a finished crawl run for the console

from rich.box import ROUNDED
from rich.console import Console
from rich.table import Table

from municipality_crawler.core.pipeline import CrawlSummary


def create_crawl_summary_table(summary: CrawlSummary) -> Table:
    """Create a two-column table describing a crawl run."""
    table = Table(title="🏔️ Crawl Summary", box=ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Municipalities listed", str(summary.discovered))
    table.add_row("Already in dataset", str(summary.already_done))
    table.add_row("Processed this run", str(summary.attempted))
    table.add_row("Failed this run", f"[red]{summary.failed}[/red]" if summary.failed else "0")
    table.add_row("Batches", str(summary.batches))
    table.add_row("Total municipalities", f"[bold green]{summary.total}[/bold green]")
    table.add_row("With images", str(summary.with_image))
    table.add_row("With stylized images", str(summary.with_stylized))
    table.add_row("Output", str(summary.output_path))

    return table


def print_rich_table(console: Console, table: Table) -> None:
    console.print()
    console.print(table)
