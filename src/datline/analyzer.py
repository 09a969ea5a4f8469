"""
Grammar Analyzer: diagnostics and inventory of component sequences.

This module provides lightweight analysis of line grammars:
    - Component inventory per kind
    - Branches opened by switches
    - Container keys written per branch
    - Dynamic vector length dependencies
    - Warning flags for grammars that cannot read correctly

IMPORTANT: This is an analysis layer. It does NOT modify the grammar.
It only produces read-only reports. LineDefinition uses it to reject
broken grammars at construction time.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set

from datline.components import (
    Component,
    Integer,
    IntegerVector,
    LengthFrom,
    Processed,
    RealVector,
    Selection,
    Separator,
    Switch,
)


def _flatten_branches(components: Sequence[Component]) -> List[List[Component]]:
    """
    Expand switches into one linear component list per choice combination.

    A switch contributes its discriminator Selection followed by the
    components of the chosen branch.
    """
    branches: List[List[Component]] = [[]]
    for component in components:
        if isinstance(component, Switch):
            expanded = []
            for branch in branches:
                for choice in component.choices:
                    for sub in _flatten_branches(choice.components):
                        expanded.append(branch + [component.selection] + sub)
            branches = expanded
        else:
            branches = [branch + [component] for branch in branches]
    return branches


def _switch_depth(components: Sequence[Component]) -> int:
    depth = 0
    for component in components:
        if isinstance(component, Switch):
            inner = max((_switch_depth(c.components) for c in component.choices), default=0)
            depth = max(depth, 1 + inner)
    return depth


def _iter_components(components: Sequence[Component]):
    for component in components:
        yield component
        if isinstance(component, Switch):
            for choice in component.choices:
                yield from _iter_components(choice.components)


def _writes_key(component: Component) -> bool:
    return not isinstance(component, (Separator, Processed))


def _writes_int(component: Component) -> bool:
    if isinstance(component, Integer):
        return True
    if isinstance(component, Selection):
        return all(isinstance(v, int) for v in component.values)
    return False


@dataclass
class GrammarReport:
    """Analysis report for one grammar."""

    name: str
    total_components: int = 0
    component_counts: Dict[str, int] = field(default_factory=dict)
    optional_components: int = 0

    # Switch structure
    total_branches: int = 1
    switch_depth: int = 0

    # Container keys
    keys_written: List[str] = field(default_factory=list)
    duplicate_keys: Set[str] = field(default_factory=set)

    # Dynamic lengths: vector name -> field it depends on
    length_dependencies: Dict[str, str] = field(default_factory=dict)
    unresolved_lengths: Set[str] = field(default_factory=set)

    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True if every branch can be read without a grammar error."""
        return not self.duplicate_keys and not self.unresolved_lengths

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_components(components: Sequence[Component], name: str = "") -> GrammarReport:
    """
    Analyze a component sequence.

    Checks for:
    - Dynamic lengths referencing fields not read earlier on the same branch
    - Names written twice on one branch
    - Optional separators followed by mandatory values

    Returns a GrammarReport with metrics and warnings.
    """
    report = GrammarReport(name=name)

    # =========================================================================
    # 1. INVENTORY
    # =========================================================================

    counts: Dict[str, int] = defaultdict(int)
    for component in _iter_components(components):
        counts[type(component).__name__] += 1
        report.total_components += 1
        if component.optional:
            report.optional_components += 1
        if isinstance(component, (IntegerVector, RealVector)) and isinstance(component.length, LengthFrom):
            report.length_dependencies[component.name] = component.length.field
    report.component_counts = dict(counts)
    report.switch_depth = _switch_depth(components)

    # =========================================================================
    # 2. BRANCH CHECKS
    # =========================================================================

    branches = _flatten_branches(components)
    report.total_branches = len(branches)

    for branch in branches:
        written: Set[str] = set()
        int_fields: Set[str] = set()
        for component in branch:
            if isinstance(component, (IntegerVector, RealVector)) and isinstance(component.length, LengthFrom):
                if component.length.field not in int_fields:
                    report.unresolved_lengths.add(component.name)

            if not _writes_key(component):
                continue
            if component.name in written:
                report.duplicate_keys.add(component.name)
            written.add(component.name)
            if _writes_int(component):
                int_fields.add(component.name)
            if component.name not in report.keys_written:
                report.keys_written.append(component.name)

        for previous, current in zip(branch, branch[1:]):
            if isinstance(previous, Separator) and previous.optional and _writes_key(current) \
                    and not current.optional and not isinstance(current, Selection):
                report.add_warning(
                    f"Optional separator '{previous.name}' is followed by mandatory '{current.name}'"
                )

    # =========================================================================
    # 3. WARNING FLAGS
    # =========================================================================

    if report.unresolved_lengths:
        report.add_warning(
            f"Unresolved vector lengths: {', '.join(sorted(report.unresolved_lengths))}"
        )

    if report.duplicate_keys:
        report.add_warning(
            f"Keys written twice: {', '.join(sorted(report.duplicate_keys))}"
        )

    return report


def analyze_definition(definition) -> GrammarReport:
    """Analyze the grammar of a LineDefinition."""
    return analyze_components(definition.components, name=definition.section)


__all__ = ["GrammarReport", "analyze_components", "analyze_definition"]
