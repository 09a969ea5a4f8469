"""
reStructuredText generator for line definitions.

Converts a LineDefinition into a read-the-docs section.

Supports two modes:
    - SIMPLE: Section title and default line(s)
    - DETAILED: Additionally a list-table with one row per component
      (and one per switch choice)
"""

from enum import Enum
from typing import List

from datline.definition import LineDefinition
from datline.rendering import default_lines, read_the_docs_rows


class RtdMode(Enum):
    """Rendering modes for RST output."""
    SIMPLE = "simple"        # Title and default lines
    DETAILED = "detailed"    # Include parameter table


def _escape_rst_cell(s: str) -> str:
    """Escape characters with inline-markup meaning in RST table cells."""
    if not s:
        return ""
    s = s.replace("\\", "\\\\")
    s = s.replace("*", "\\*")
    s = s.replace("`", "\\`")
    s = s.replace("|", "\\|")
    return s


def _section_anchor(section: str) -> str:
    return section.lower().replace(" ", "")


def generate_rtd(definition: LineDefinition, mode: RtdMode = RtdMode.SIMPLE) -> str:
    """
    Generate reStructuredText for a line definition.

    Args:
        definition: Definition to document
        mode: Rendering mode (SIMPLE, DETAILED)

    Returns:
        String containing the RST section
    """
    lines: List[str] = []

    # Header
    title = definition.section
    lines.append(f".. _{_section_anchor(title)}:")
    lines.append("")
    lines.append(title)
    lines.append("^" * len(title))
    lines.append("")

    if definition.description:
        lines.append(definition.description)
        lines.append("")

    # =========================================================================
    # DEFAULT LINES
    # =========================================================================

    lines.append(".. code-block:: none")
    lines.append("")
    lines.append(f"   --{title}")
    for line in default_lines(definition.components):
        lines.append(f"   {line}")
    lines.append("")

    # =========================================================================
    # PARAMETER TABLE (DETAILED MODE)
    # =========================================================================

    if mode == RtdMode.DETAILED and definition.components:
        lines.append(".. list-table::")
        lines.append("   :header-rows: 1")
        lines.append("")
        lines.append("   * - Parameter")
        lines.append("     - optional")
        lines.append("     - Description")
        for component in definition.components:
            for token, optional, description in read_the_docs_rows(component):
                lines.append(f"   * - {_escape_rst_cell(token)}")
                lines.append(f"     - {optional}")
                lines.append(f"     - {_escape_rst_cell(description)}")
        lines.append("")

    return "\n".join(lines)


def save_rtd_file(definition: LineDefinition, filename: str, mode: RtdMode = RtdMode.SIMPLE) -> None:
    """
    Generate RST and save to file.

    Args:
        definition: Definition to document
        filename: Output file path (.rst extension recommended)
        mode: Rendering mode
    """
    rst = generate_rtd(definition, mode=mode)
    with open(filename, 'w') as f:
        f.write(rst)


__all__ = ["RtdMode", "generate_rtd", "save_rtd_file"]
