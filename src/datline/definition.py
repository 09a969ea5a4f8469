"""
Line Definition: the complete grammar of one kind of input line.

A LineDefinition owns an ordered component sequence plus the section it
belongs to. It is validated once, when it is built, and can then read any
number of lines.

Example:
    definition = LineDefinition(
        section="DESIGN SURF MANIFOLD DIRICH CONDITIONS",
        components=[
            Separator("NUMDOF"), Integer("NUMDOF"),
            Separator("ONOFF"), IntegerVector("ONOFF", LengthFrom("NUMDOF")),
        ],
    )
    container = definition.read("NUMDOF 2 ONOFF 1 0")
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from datline.analyzer import analyze_components
from datline.components import Component
from datline.container import ParameterContainer
from datline.cursor import LineCursor
from datline.errors import InvalidGrammarDefinition
from datline.reader import read_components
from datline.rendering import default_line, default_lines

logger = logging.getLogger("datline.definition")


@dataclass
class LineDefinition:
    """
    Grammar of one input line.

    Properties:
        section: Section name, used in diagnostics
        components: Ordered components of the line
        description: Human-readable description

    INVARIANTS (checked at construction):
        - Every dynamic vector length refers to an integer read earlier on
          the same branch
        - No branch writes the same key twice
    """

    section: str
    components: Sequence[Component] = field(default_factory=list)
    description: str = ""

    def __post_init__(self):
        self.components = list(self.components)
        report = analyze_components(self.components, name=self.section)
        if report.unresolved_lengths:
            raise InvalidGrammarDefinition(
                f"Vectors {sorted(report.unresolved_lengths)} in '{self.section}' take their length "
                f"from fields not read before them."
            )
        if report.duplicate_keys:
            raise InvalidGrammarDefinition(
                f"Keys {sorted(report.duplicate_keys)} are written twice in '{self.section}'."
            )
        for warning in report.warnings:
            logger.warning("%s: %s", self.section, warning)

    def read(self, line: str, container: Optional[Any] = None) -> Any:
        """
        Read one line of this kind.

        Args:
            line: Raw line text
            container: Sink to write into (a new ParameterContainer if None)

        Returns:
            The container holding every field of the line

        Raises:
            LineParseError: The line violates the grammar
        """
        if container is None:
            container = ParameterContainer()
        read_components(self.components, self.section, LineCursor(line), container)
        return container

    def default_line(self) -> str:
        return default_line(self.components)

    def default_lines(self) -> List[str]:
        return default_lines(self.components)

    def container_keys(self) -> List[str]:
        """Keys any branch of this grammar may write, in first-seen order."""
        return analyze_components(self.components, name=self.section).keys_written


__all__ = ["LineDefinition"]
