"""Display functions for privacy commands."""

from typing import Dict, Optional

from rich import box
from rich.table import Table

from cli.core.context import Context
from cli.privacy.operations import AnonymizationOperation
from privacy.period import Period


def display_period(ctx: Context, period: Period):
    """Show the resolved time window."""
    ctx.console.print(
        f'Start date is "{period.start_string}", end date is "{period.end_string}"',
        markup=False, highlight=False, soft_wrap=True
    )


def display_no_op(ctx: Context, operation: AnonymizationOperation):
    ctx.console.print(operation.no_op_message, style="green", markup=False, soft_wrap=True)


def display_skipped(ctx: Context, operation: AnonymizationOperation):
    ctx.console.print(operation.skipped_message, style="green", markup=False, soft_wrap=True)


def display_started(ctx: Context, operation: AnonymizationOperation):
    ctx.console.print(operation.start_message, markup=False, soft_wrap=True)


def display_applied(ctx: Context, operation: AnonymizationOperation, rows_affected: int):
    ctx.console.print(
        operation.applied_message.format(rows=rows_affected),
        style="green", markup=False, soft_wrap=True
    )


def display_done(ctx: Context):
    ctx.console.print("Done", style="bold", soft_wrap=True)


def _format_default(value: Optional[object]) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bytes):
        return "0x" + value.hex() if value else "''"
    return repr(value)


def display_unsettable_columns(ctx: Context, table_name: str, defaults: Dict[str, Optional[object]]):
    """Display the columns of a log table that may be unset."""
    table = Table(title=f"{table_name} columns", box=box.SIMPLE_HEAD, show_header=True)
    table.add_column("Column", style="cyan")
    table.add_column("Reset value", justify="right", style="dim")

    for name, default in defaults.items():
        table.add_row(name, _format_default(default))

    ctx.console.print(table)
