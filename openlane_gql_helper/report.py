"""Console report for fetched controls."""
from __future__ import annotations

from typing import Iterable

from .controls import Control


def format_control(index: int, control: Control) -> str:
    lines = [
        f"{index}. [{control.ref_code}] {control.title or '-'}",
        f"   Category: {control.category or '-'}",
    ]
    if control.description is not None:
        lines.append(f"   Description: {control.description}")
    return "\n".join(lines) + "\n"


def render_report(controls: Iterable[Control]) -> str:
    """Render the total count followed by one numbered block per control."""
    controls = list(controls)
    blocks = [f"Total controls fetched: {len(controls)}\n"]
    blocks.extend(format_control(i, control) for i, control in enumerate(controls, start=1))
    return "\n".join(blocks)
