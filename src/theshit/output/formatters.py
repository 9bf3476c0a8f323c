"""Human/JSON output helpers.

``fix`` and ``alias`` print their payload bare, because the shell evaluates
it. Other operations get a short Rich-styled summary. ``--json`` serializes
the whole ServiceResult.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from theshit.output.console import create_console, get_output

if TYPE_CHECKING:
    from theshit.services.result import ServiceResult

# Operations whose stdout is consumed by the shell: op -> data key.
RAW_OUTPUT_FIELDS: dict[str, str] = {
    "fix": "command",
    "alias": "function",
}


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    no_color: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
        no_color: Disable ANSI styling in human output.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    if result.ok:
        raw_field = RAW_OUTPUT_FIELDS.get(result.op)
        if raw_field is not None:
            return str(result.data.get(raw_field, ""))
        console = create_console(no_color=no_color)
        console.print(f"[shit.ok]OK[/]: [shit.op]{escape(result.op)}[/]")
        for key, value in result.data.items():
            console.print(f"  [shit.key]{escape(key)}[/]: {escape(str(value))}")
        return get_output(console).rstrip("\n")

    error_msg = result.error.message if result.error else "Unknown error"
    return f"ERROR: {result.op} — {error_msg}"
