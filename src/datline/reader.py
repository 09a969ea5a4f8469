"""
Reader: drives a cursor and a container through a component sequence.

One dispatch function, read_component(), covers the closed set of
components defined in datline.components. Each branch consumes its
token(s) from the cursor and writes at most one entry into the container
(a Switch writes its discriminator and lets the chosen components write
theirs).

All per-field failures propagate immediately. Entries written before the
failing field stay in the container.
"""

import logging
from typing import Any, Iterable, List, Optional

from datline.components import (
    Boolean,
    Component,
    FixedLength,
    Integer,
    IntegerVector,
    Length,
    LengthFrom,
    Processed,
    Real,
    RealVector,
    Selection,
    Separator,
    String,
    Switch,
)
from datline.container import ParameterContainer
from datline.cursor import LineCursor
from datline.errors import (
    InternalInconsistency,
    InvalidBooleanLiteral,
    MalformedNumber,
    RequiredFieldMissing,
)
from datline.numbers import convert_number

logger = logging.getLogger("datline.reader")

TRUE_LITERALS = ("Yes", "YES", "yes", "True", "TRUE", "true")
FALSE_LITERALS = ("No", "NO", "no", "False", "FALSE", "false")


def _missing(component: Component, section: str) -> RequiredFieldMissing:
    return RequiredFieldMissing(
        f"Value of parameter '{component.name}' for section '{section}' not properly specified in input file!",
        field=component.name, section=section,
    )


def resolve_length(length: Length, container: Any, field: str = "", section: str = "") -> int:
    """
    Number of values a vector reads.

    Raises:
        InternalInconsistency: Referenced field not read yet, or not an integer
        MalformedNumber: Referenced field holds a negative count
    """
    if isinstance(length, FixedLength):
        return length.value

    if isinstance(length, LengthFrom):
        try:
            value = container.get(length.field)
        except KeyError:
            raise InternalInconsistency(
                f"Length of '{field}' depends on '{length.field}', which has not been read "
                f"before it in section '{section}'."
            ) from None
        if isinstance(value, bool) or not isinstance(value, int):
            raise InternalInconsistency(
                f"Length of '{field}' depends on '{length.field}', which is not an integer."
            )
        if value < 0:
            raise MalformedNumber(
                f"Variable '{length.field}' in '{section}' gives a negative length ({value}) "
                f"for '{field}'.",
                field=length.field, section=section, value=value,
            )
        return value

    raise InternalInconsistency(f"Unsupported length definition: {type(length)}")


# =========================================================================
# PER-COMPONENT READERS
# =========================================================================


def _read_separator(component: Separator, section: str, cursor: LineCursor, container: Any) -> None:
    cursor.consume_label(component.name, optional=component.optional, field=component.name, section=section)


def _read_scalar_token(component: Component, section: str, cursor: LineCursor) -> Optional[str]:
    """
    Shared policy for single-token components.

    Returns:
        The token, or None when an optional field is absent

    Raises:
        RequiredFieldMissing: Mandatory field absent (for non-numeric fields)
    """
    if cursor.at_end():
        if component.optional:
            return None
        raise _missing(component, section)

    if component.optional and cursor.peek_token() is None:
        return None
    return cursor.read_token()


def _read_string(component: String, section: str, cursor: LineCursor, container: Any) -> None:
    token = _read_scalar_token(component, section, cursor)
    if token is None and not component.optional:
        raise _missing(component, section)
    container.insert(component.name, component.default if token is None else token)


def _read_integer(component: Integer, section: str, cursor: LineCursor, container: Any) -> None:
    token = _read_scalar_token(component, section, cursor)
    value = component.default
    if token is not None or not component.optional:
        value = convert_number(token or "", int, component.name, section, 1, component.optional)
    container.insert(component.name, value)


def _read_real(component: Real, section: str, cursor: LineCursor, container: Any) -> None:
    # An empty optional real leaves the cursor untouched and keeps the default.
    token = _read_scalar_token(component, section, cursor)
    value = component.default
    if token is not None or not component.optional:
        value = convert_number(token or "", float, component.name, section, 1, component.optional)
    container.insert(component.name, value)


def _read_boolean(component: Boolean, section: str, cursor: LineCursor, container: Any) -> None:
    token = _read_scalar_token(component, section, cursor)
    value = component.default
    if token is None:
        if not component.optional:
            raise _missing(component, section)
    elif token in TRUE_LITERALS:
        value = True
    elif token in FALSE_LITERALS:
        value = False
    else:
        raise InvalidBooleanLiteral(
            f"Value '{token}' of parameter '{component.name}' for section '{section}' not properly "
            f"specified in input file! Expected one of {TRUE_LITERALS + FALSE_LITERALS}.",
            field=component.name, section=section, value=token,
        )
    container.insert(component.name, value)


def _read_vector(component, number_type: type, section: str, cursor: LineCursor, container: Any) -> None:
    length = resolve_length(component.length, container, component.name, section)
    values: List[Any] = [component.default] * length

    if length and cursor.at_end():
        if not component.optional:
            raise _missing(component, section)
    elif length:
        for i in range(length):
            if component.optional and cursor.peek_token() is None:
                break
            token = cursor.read_token()
            values[i] = convert_number(
                token or "", number_type, component.name, section, length, component.optional
            )

    container.insert(component.name, values)


def _read_integer_vector(component: IntegerVector, section: str, cursor: LineCursor, container: Any) -> None:
    _read_vector(component, int, section, cursor, container)


def _read_real_vector(component: RealVector, section: str, cursor: LineCursor, container: Any) -> None:
    _read_vector(component, float, section, cursor, container)


def _read_selection(component: Selection, section: str, cursor: LineCursor, container: Any) -> None:
    selected = component.default
    for literal in component.literals:
        start = cursor.find_label(literal)
        if start is not None:
            selected = literal
            cursor.remove_at(start, len(literal))
            break
    else:
        logger.debug("No literal of '%s' in section '%s', using default '%s'", component.name, section, selected)

    container.insert(component.name, component.value_for(selected))


def _read_switch(component: Switch, section: str, cursor: LineCursor, container: Any) -> None:
    _read_selection(component.selection, section, cursor, container)
    key = container.get(component.selection.name)

    choice = component.get_choice(key)
    if choice is None:
        raise InternalInconsistency(f"Switch '{component.name}' has no choice registered for key '{key}'.")

    logger.debug("Switch '%s' selected '%s' in section '%s'", component.name, choice.literal, section)
    read_components(choice.components, section, cursor, container)


def _read_processed(component: Processed, section: str, cursor: LineCursor, container: Any) -> None:
    token = _read_scalar_token(component, section, cursor)
    if token is None:
        if not component.optional:
            raise _missing(component, section)
        return
    component.insert(token, container)


# =========================================================================
# DISPATCH
# =========================================================================


def read_component(component: Component, section: str, cursor: LineCursor, container: Any) -> None:
    """
    Read one component from `cursor` into `container`.

    Args:
        component: Component descriptor
        section: Section name (diagnostics only)
        cursor: Cursor of the line being read; mutated
        container: Sink offering insert(name, value) and get(name)

    Raises:
        LineParseError: The line violates the component's grammar
        DuplicateKey: The component's name was already written
        InternalInconsistency: Unsupported component or unregistered key
    """
    if isinstance(component, Separator):
        _read_separator(component, section, cursor, container)
    elif isinstance(component, String):
        _read_string(component, section, cursor, container)
    elif isinstance(component, Integer):
        _read_integer(component, section, cursor, container)
    elif isinstance(component, Real):
        _read_real(component, section, cursor, container)
    elif isinstance(component, Boolean):
        _read_boolean(component, section, cursor, container)
    elif isinstance(component, IntegerVector):
        _read_integer_vector(component, section, cursor, container)
    elif isinstance(component, RealVector):
        _read_real_vector(component, section, cursor, container)
    elif isinstance(component, Selection):
        _read_selection(component, section, cursor, container)
    elif isinstance(component, Switch):
        _read_switch(component, section, cursor, container)
    elif isinstance(component, Processed):
        _read_processed(component, section, cursor, container)
    else:
        raise InternalInconsistency(f"Unsupported component type: {type(component)}")

    logger.debug("Read %s '%s' in section '%s'", type(component).__name__, component.name, section)


def read_components(components: Iterable[Component], section: str, cursor: LineCursor, container: Any) -> None:
    """Read every component of a sequence, in order."""
    for component in components:
        read_component(component, section, cursor, container)


def read_line(
    components: Iterable[Component],
    line: str,
    section: str = "",
    container: Optional[Any] = None,
) -> Any:
    """
    Read a complete line.

    Args:
        components: Grammar of the line
        line: Raw line text
        section: Section the line belongs to
        container: Sink to write into (a new ParameterContainer if None)

    Returns:
        The container
    """
    if container is None:
        container = ParameterContainer()
    read_components(components, section, LineCursor(line), container)
    return container


__all__ = [
    "TRUE_LITERALS",
    "FALSE_LITERALS",
    "resolve_length",
    "read_component",
    "read_components",
    "read_line",
]
