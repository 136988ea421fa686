"""
Rich-based rendering of pipeline stages.

Used when debugging a composed pipeline interactively: one row per stage
with its callback, arity and binding.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .pipeline import Pipeline


def _binding_label(stage) -> str:
    if stage.reuses_context:
        return "[dim]↳ previous[/dim]"
    return escape(repr(stage.context))


def describe_stages(pipeline: Pipeline, title: Optional[str] = None) -> Table:
    """
    Build a table describing every stage of ``pipeline``.

    Args:
        pipeline: The pipeline to describe
        title: Optional table title

    Returns:
        A rich Table with columns #, callback, length and binding
    """
    table = Table(title=title, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("callback")
    table.add_column("length", justify="right")
    table.add_column("binding")

    for position, stage in enumerate(pipeline.stages, start=1):
        table.add_row(str(position), escape(stage.name), str(stage.length), _binding_label(stage))

    return table


def print_stages(pipeline: Pipeline, console: Optional[Console] = None,
                 title: Optional[str] = None) -> None:
    """Print the stage table of ``pipeline`` to ``console`` (stdout by default)."""
    console = console or Console()
    if not pipeline.stages:
        console.print("[dim]empty pipeline: identity on a single argument[/dim]")
        return
    console.print(describe_stages(pipeline, title=title))


__all__ = ["describe_stages", "print_stages"]
