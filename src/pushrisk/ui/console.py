"""Rich-powered console output for pushrisk."""

from __future__ import annotations

from rich.console import Console as RichConsole
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from pushrisk.models import ScoreResponse, severity_for_score

_SEVERITY_COLOR = {
    "warning": "green",
    "error": "yellow",
    "critical": "red",
}


class Console:
    """Terminal output for the pushrisk CLI."""

    def __init__(self, stderr: bool = False) -> None:
        self.console = RichConsole(stderr=stderr)

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def info(self, message: str) -> None:
        self.console.print(f"[blue]i[/blue] {message}")

    def markdown(self, text: str) -> None:
        self.console.print(Markdown(text))

    def show_score(self, response: ScoreResponse) -> None:
        """Display a scoring result as a panel plus hotspot table."""
        score = response.impact_score
        color = _SEVERITY_COLOR[severity_for_score(score)]
        flags = ", ".join(f.value for f in response.risk_flags) or "none"
        tags = ", ".join(t.value for t in response.change_type_tags) or "none"

        self.console.print(
            Panel(
                f"[bold]Impact Score:[/bold] [{color}]{score}/100[/{color}]\n"
                f"[bold]Risk Flags:[/bold] {flags}\n"
                f"[bold]Change Types:[/bold] {tags}",
                title="[bold]Push Impact[/bold]",
                border_style=color,
            )
        )

        if response.hotspot_files:
            table = Table(title="Hotspot Files", border_style=color)
            table.add_column("#", justify="right", style="dim")
            table.add_column("File", style="cyan")
            for i, path in enumerate(response.hotspot_files, 1):
                table.add_row(str(i), path)
            self.console.print(table)

        for line in response.explanations:
            self.console.print(f"  [dim]•[/dim] {line}")
