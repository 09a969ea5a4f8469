"""
Documentation surfaces derived from component sequences.

Two views are offered, neither of them authoritative:
    - Default lines: each component's default written out as input text.
      Reading a default line back through the same grammar reproduces the
      declared defaults.
    - Read-the-docs text: short placeholders and (token, optional,
      description) rows for tables.

Switches are covered completely: default_lines() and read_the_docs_rows()
visit every registered choice, not only the default one.
"""

from typing import Any, Dict, List, Sequence, Tuple

from datline.components import (
    Boolean,
    Component,
    FixedLength,
    Integer,
    IntegerVector,
    LengthFrom,
    Processed,
    Real,
    RealVector,
    Selection,
    Separator,
    String,
    Switch,
)

Row = Tuple[str, str, str]
_Branch = Tuple[List[str], Dict[str, Any]]


def _format_real(value: float) -> str:
    return repr(float(value))


def _format_bool(value: bool) -> str:
    return "Yes" if value else "No"


def _default_length(component, defaults: Dict[str, Any]) -> int:
    length = component.length
    if isinstance(length, FixedLength):
        return length.value
    if isinstance(length, LengthFrom):
        value = defaults.get(length.field)
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return value
    return 1


def _render_component(component: Component, defaults: Dict[str, Any], all_choices: bool) -> List[_Branch]:
    """Default tokens of one component, one entry per branch it opens."""
    defaults = dict(defaults)

    if isinstance(component, Switch):
        choices = sorted(component.choices, key=lambda c: c.key != component.default_key)
        if not all_choices:
            choices = choices[:1]
        branches: List[_Branch] = []
        for choice in choices:
            state = dict(defaults)
            state[component.name] = choice.key
            for tokens, sub_state in _render_branches(choice.components, state, all_choices):
                branches.append(([choice.literal] + tokens, sub_state))
        return branches

    if isinstance(component, Separator):
        tokens = [component.name]
    elif isinstance(component, String):
        tokens = [component.default]
        defaults[component.name] = component.default
    elif isinstance(component, Integer):
        tokens = [str(component.default)]
        defaults[component.name] = component.default
    elif isinstance(component, Real):
        tokens = [_format_real(component.default)]
        defaults[component.name] = component.default
    elif isinstance(component, Boolean):
        tokens = [_format_bool(component.default)]
        defaults[component.name] = component.default
    elif isinstance(component, IntegerVector):
        tokens = [str(component.default)] * _default_length(component, defaults)
        defaults[component.name] = [component.default] * len(tokens)
    elif isinstance(component, RealVector):
        tokens = [_format_real(component.default)] * _default_length(component, defaults)
        defaults[component.name] = [component.default] * len(tokens)
    elif isinstance(component, Selection):
        tokens = [component.default]
        defaults[component.name] = component.value_for(component.default)
    elif isinstance(component, Processed):
        tokens = ["none"]
    else:
        raise TypeError(f"Unsupported component type: {type(component)}")

    return [(tokens, defaults)]


def _render_branches(components: Sequence[Component], defaults: Dict[str, Any], all_choices: bool) -> List[_Branch]:
    branches: List[_Branch] = [([], dict(defaults))]
    for component in components:
        extended: List[_Branch] = []
        for tokens, state in branches:
            for extra, new_state in _render_component(component, state, all_choices):
                extended.append((tokens + extra, new_state))
        branches = extended
    return branches


def default_line(components: Sequence[Component]) -> str:
    """
    Render the default input line of a grammar.

    Switches contribute their default choice. Dynamic vector lengths are
    taken from the defaults rendered before them (1 if unavailable).
    """
    tokens, _ = _render_branches(components, {}, all_choices=False)[0]
    return " ".join(tokens)


def default_lines(components: Sequence[Component]) -> List[str]:
    """One default line per combination of switch choices, default first."""
    return [" ".join(tokens) for tokens, _ in _render_branches(components, {}, all_choices=True)]


def describe(component: Component) -> str:
    """Fixed-width description (only separators carry one)."""
    if isinstance(component, Separator):
        optional = "(optional)" if component.optional else ""
        return f"    {component.name:<15}{optional:<15}{component.description}"
    return ""


def read_the_docs(component: Component) -> str:
    """Short placeholder text for one component."""
    if isinstance(component, Separator):
        return component.name
    if isinstance(component, Integer):
        return str(component.default)
    if isinstance(component, Real):
        return _format_real(component.default)
    if isinstance(component, Boolean):
        return _format_bool(component.default)
    if isinstance(component, IntegerVector):
        return f"<int vec:{component.name}>"
    if isinstance(component, RealVector):
        return f"<real vec:{component.name}>"
    if isinstance(component, Switch):
        return f"<{component.name}> [further parameters]"
    if isinstance(component, (String, Selection, Processed)):
        return f"<{component.name}>"
    raise TypeError(f"Unsupported component type: {type(component)}")


def read_the_docs_lines(switch: Switch) -> List[str]:
    """One line per registered choice: the literal followed by its placeholders."""
    lines = []
    for choice in switch.choices:
        parts = [choice.literal] + [read_the_docs(c) for c in choice.components]
        lines.append(" ".join(parts))
    return lines


def read_the_docs_rows(component: Component) -> List[Row]:
    """
    Table rows (token, optional, description) for one component.

    A Switch yields its own row followed by one row per choice.
    """
    optional = "yes" if component.optional else ""
    rows: List[Row] = [(read_the_docs(component), optional, component.description)]

    if isinstance(component, Switch):
        for choice, line in zip(component.choices, read_the_docs_lines(component)):
            rows.append((line, "", f"{component.name} = {choice.key}"))

    return rows


def get_options(component: Component) -> List[str]:
    """Literals accepted by a Selection or Switch; empty for other components."""
    if isinstance(component, Switch):
        return list(component.selection.literals)
    if isinstance(component, Selection):
        return list(component.literals)
    return []


__all__ = [
    "Row",
    "default_line",
    "default_lines",
    "describe",
    "read_the_docs",
    "read_the_docs_lines",
    "read_the_docs_rows",
    "get_options",
]
