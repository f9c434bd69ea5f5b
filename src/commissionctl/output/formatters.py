"""Human/JSON output helpers.

Human mode prints exactly one fee per line and nothing else on stdout.
Diagnostics (errors, warnings) are rendered with Rich for stderr.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from commissionctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from commissionctl.services.result import ServiceResult


def format_result(result: ServiceResult, *, json_output: bool = False) -> list[str]:
    """Format a ServiceResult as output lines.

    Args:
        result: The service result to format.
        json_output: If True, return the whole result as one JSON document.
    """
    if json_output:
        return [result.model_dump_json(indent=2)]
    if result.ok:
        return [str(fee) for fee in result.data.get("fees", [])]
    return [format_error(result)]


def format_error(result: ServiceResult) -> str:
    """``ERROR: <op> — <message>`` line for a failed result."""
    message = result.error.message if result.error else "Unknown error"
    code = f" [fee.code]({result.error.code})[/fee.code]" if result.error else ""
    console = create_console()
    console.print(
        f"[fee.error]ERROR:[/fee.error] [fee.op]{escape(result.op)}[/fee.op] — "
        f"{escape(message)}{code}"
    )
    return get_output(console).rstrip("\n")


def format_warning(message: str) -> str:
    """``WARNING: <message>`` line."""
    console = create_console()
    console.print(f"[fee.warning]WARNING:[/fee.warning] {escape(message)}")
    return get_output(console).rstrip("\n")
