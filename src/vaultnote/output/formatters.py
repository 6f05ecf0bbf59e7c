"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich markup) or machines
(``--json``). Rendering happens into a buffer so callers get a string.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape

from vaultnote.output.console import create_console, get_output

if TYPE_CHECKING:
    from vaultnote.services.result import ServiceResult


def _format_value(value: Any) -> str:
    if isinstance(value, dict):
        return escape(_json.dumps(value, ensure_ascii=False, separators=(",", ":")))
    if isinstance(value, list):
        return escape(", ".join(str(v) for v in value)) if value else "-"
    return escape(str(value))


def format_result(result: ServiceResult, *, json_output: bool = False) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if result.ok:
        console.print(f"[vn.ok]OK[/vn.ok]: [vn.op]{result.op}[/vn.op]")
        for key, value in result.data.items():
            rendered = _format_value(value)
            if key == "path":
                rendered = f"[vn.path]{rendered}[/vn.path]"
            console.print(f"  [vn.key]{key}:[/vn.key] {rendered}")
        if result.data.get("fallback"):
            console.print("  [vn.fallback]minimal fallback document written[/vn.fallback]")
    else:
        message = result.error.message if result.error else "Unknown error"
        code = result.error.code if result.error else "ERROR"
        console.print(
            f"[vn.error]ERROR[/vn.error]: [vn.op]{result.op}[/vn.op] ({code}) - {escape(message)}"
        )
    return get_output(console).rstrip("\n")
