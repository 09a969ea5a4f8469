"""
Line Component Descriptors

Defines the closed set of components a line grammar is built from.

Each component describes how one field (or fixed fragment) of an input line
is consumed:
    - Separator: a literal label, discarded
    - String, Integer, Real, Boolean: one token -> one scalar
    - IntegerVector, RealVector: N tokens -> list, N fixed or read earlier
    - Selection: one of a finite set of literals -> mapped value
    - Switch: a Selection choosing which further components apply
    - Processed: one token handed to a caller-supplied insert function

ARCHITECTURAL RULE:
    These objects:
        - Are pure descriptors (frozen dataclasses)
        - Know nothing about cursors or containers
        - Are validated eagerly at construction
        - Are shared read-only by every line using the grammar
    Reading lives in datline.reader, rendering in datline.rendering.
"""

from abc import ABC
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple, Union

from datline.errors import InvalidGrammarDefinition

Key = Union[int, str]


class Component(ABC):
    """
    Base class for all line components.

    Intentionally empty: dispatch happens in the reader and rendering
    layers over this closed set of subclasses.
    """

    name: str
    optional: bool
    description: str


def _check_literal(text: str, what: str) -> None:
    if not isinstance(text, str) or not text or any(ch.isspace() for ch in text):
        raise InvalidGrammarDefinition(f"Invalid {what} '{text}': must be a non-empty token without whitespace.")


def _check_int(value: Any, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidGrammarDefinition(f"Invalid {what} '{value}': must be an integer.")


def _check_real(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidGrammarDefinition(f"Invalid {what} '{value}': must be a number.")
    return float(value)


# =========================================================================
# LENGTH DEFINITIONS
# =========================================================================


@dataclass(frozen=True)
class FixedLength:
    """Vector length known when the grammar is written."""

    value: int

    def __post_init__(self):
        _check_int(self.value, "vector length")
        if self.value < 0:
            raise InvalidGrammarDefinition(f"Vector length must not be negative, got {self.value}.")


@dataclass(frozen=True)
class LengthFrom:
    """
    Vector length equal to an integer read earlier on the same line.

    Example:
        IntegerVector("STOICHIOMETRIES", LengthFrom("NUMSCAL"))

    The referenced field must be written before the vector is read;
    LineDefinition checks this when it is built.
    """

    field: str


Length = Union[FixedLength, LengthFrom]


def _normalize_length(length: Union[int, Length]) -> Length:
    if isinstance(length, (FixedLength, LengthFrom)):
        return length
    _check_int(length, "vector length")
    return FixedLength(length)


# =========================================================================
# LEAF COMPONENTS
# =========================================================================


@dataclass(frozen=True)
class Separator(Component):
    """
    A literal label that is searched for anywhere in the line and discarded.

    The label anchors the cursor: the value components following it read
    the tokens written after the label.

    Properties:
        name: The label text (also the component's name)
        description: Documentation text
        optional: If True, a missing label moves the cursor to the end of the
            line; otherwise a missing label is an error
    """

    name: str
    description: str = ""
    optional: bool = False

    def __post_init__(self):
        _check_literal(self.name, "separator label")


@dataclass(frozen=True)
class String(Component):
    """
    One token stored verbatim.

    The default must itself be a single token so that the default line
    reads back to it. "none" marks an unset value.
    """

    name: str
    default: str = "none"
    optional: bool = False
    description: str = ""

    def __post_init__(self):
        _check_literal(self.default, f"default of string '{self.name}'")


@dataclass(frozen=True)
class Integer(Component):
    """One token converted to an int."""

    name: str
    default: int = 0
    optional: bool = False
    description: str = ""

    def __post_init__(self):
        _check_int(self.default, f"default of '{self.name}'")


@dataclass(frozen=True)
class Real(Component):
    """One token converted to a float."""

    name: str
    default: float = 0.0
    optional: bool = False
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "default", _check_real(self.default, f"default of '{self.name}'"))


@dataclass(frozen=True)
class Boolean(Component):
    """
    One yes/no token.

    Accepted literals:
        True:  Yes YES yes True TRUE true
        False: No NO no False FALSE false
    """

    name: str
    default: bool = False
    optional: bool = False
    description: str = ""

    def __post_init__(self):
        if not isinstance(self.default, bool):
            raise InvalidGrammarDefinition(f"Invalid default '{self.default}' for boolean '{self.name}'.")


@dataclass(frozen=True)
class IntegerVector(Component):
    """
    N tokens converted to a list of ints.

    Properties:
        length: FixedLength, LengthFrom, or a plain int (normalised to FixedLength)
        default: Value of every slot not read from the line
    """

    name: str
    length: Union[int, Length] = 1
    default: int = 0
    optional: bool = False
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "length", _normalize_length(self.length))
        _check_int(self.default, f"default of '{self.name}'")


@dataclass(frozen=True)
class RealVector(Component):
    """N tokens converted to a list of floats."""

    name: str
    length: Union[int, Length] = 1
    default: float = 0.0
    optional: bool = False
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "length", _normalize_length(self.length))
        object.__setattr__(self, "default", _check_real(self.default, f"default of '{self.name}'"))


@dataclass(frozen=True)
class Selection(Component):
    """
    One of a finite set of literals, mapped to an output value.

    Unlike the other components, a selection does not read at the cursor:
    it searches the whole line for any of its literals. The first literal
    (in declaration order) found wins. If none is present, the value mapped
    to `default` is written.

    Properties:
        name: Container key
        default: Literal used when none is found; must be in `literals`
        literals: Tokens accepted in the input line
        values: Output value per literal (all str or all int)

    INVARIANTS:
        - len(literals) == len(values)
        - literals and values are free of duplicates
    """

    name: str
    default: str
    literals: Sequence[str]
    values: Sequence[Key]
    optional: bool = False
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "literals", tuple(self.literals))
        object.__setattr__(self, "values", tuple(self.values))

        for literal in self.literals:
            _check_literal(literal, f"literal of selection '{self.name}'")
        if self.default not in self.literals:
            raise InvalidGrammarDefinition(f"Invalid default value '{self.default}'.")
        if len(self.literals) != len(self.values):
            raise InvalidGrammarDefinition("Input file values must match condition values.")
        if len(set(self.literals)) != len(self.literals):
            raise InvalidGrammarDefinition(f"Duplicate literals in selection '{self.name}': {self.literals}")
        if len(set(self.values)) != len(self.values):
            raise InvalidGrammarDefinition(f"Duplicate values in selection '{self.name}': {self.values}")

        all_str = all(isinstance(v, str) for v in self.values)
        all_int = all(isinstance(v, int) and not isinstance(v, bool) for v in self.values)
        if not (all_str or all_int):
            raise InvalidGrammarDefinition(
                f"Values of selection '{self.name}' must be all strings or all integers."
            )

    def value_for(self, literal: str) -> Key:
        """Output value mapped to `literal`."""
        return self.values[self.literals.index(literal)]


@dataclass(frozen=True)
class Processed(Component):
    """
    One token handed to a caller-supplied insert function.

    Used where the token needs a conversion the leaf components do not offer
    (e.g. a file name resolved to a path). `insert(token, container)` is
    responsible for writing into the container.
    """

    name: str
    insert: Callable[[str, Any], None]
    optional: bool = False
    description: str = ""

    def __post_init__(self):
        if not callable(self.insert):
            raise InvalidGrammarDefinition(f"Insert operation of '{self.name}' is not callable.")


# =========================================================================
# SWITCH
# =========================================================================


@dataclass(frozen=True)
class Choice:
    """
    One branch of a Switch.

    Properties:
        key: Value written for the discriminator when this branch is chosen
        literal: Token selecting this branch in the input line
        components: Components read when this branch is chosen
    """

    key: Key
    literal: str
    components: Tuple[Component, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "components", tuple(self.components))


@dataclass(frozen=True)
class Switch(Component):
    """
    A discriminator selecting which further components apply.

    Reading happens in exactly two steps:
        1. The internal Selection decodes the discriminator to a key
        2. Every component registered for that key is read in order

    Example:
        Switch(
            name="KINETIC_MODEL",
            default_key=1,
            choices={
                1: ("A", [Integer("X")]),
                2: ("B", []),
            },
        )

        "A 7" -> {KINETIC_MODEL: 1, X: 7}
        "B"   -> {KINETIC_MODEL: 2}

    Properties:
        name: Container key for the decoded discriminator
        default_key: Key used when no choice literal is present
        choices: Mapping key -> (literal, components), or a sequence of Choice
        selection: Derived discriminator Selection (built eagerly)
    """

    name: str
    default_key: Key
    choices: Union[Mapping[Key, Tuple[str, Sequence[Component]]], Sequence[Choice]]
    description: str = ""
    optional: bool = False
    selection: Selection = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if isinstance(self.choices, Mapping):
            choices = tuple(
                Choice(key=key, literal=literal, components=tuple(components))
                for key, (literal, components) in self.choices.items()
            )
        else:
            choices = tuple(self.choices)
        object.__setattr__(self, "choices", choices)

        if not choices:
            raise InvalidGrammarDefinition(f"Switch '{self.name}' needs at least one choice.")
        keys = [choice.key for choice in choices]
        if self.default_key not in keys:
            raise InvalidGrammarDefinition(
                f"Default key '{self.default_key}' of switch '{self.name}' has no registered choice."
            )

        selection = Selection(
            name=self.name,
            default=choices[keys.index(self.default_key)].literal,
            literals=[choice.literal for choice in choices],
            values=keys,
            optional=self.optional,
            description=self.description,
        )
        object.__setattr__(self, "selection", selection)

    @property
    def keys(self) -> Tuple[Key, ...]:
        return tuple(choice.key for choice in self.choices)

    def get_choice(self, key: Key) -> Optional[Choice]:
        """
        Retrieve a choice by key.

        Returns:
            Choice or None if `key` is not registered
        """
        for choice in self.choices:
            if choice.key == key:
                return choice
        return None


__all__ = [
    "Key",
    "Component",
    "FixedLength",
    "LengthFrom",
    "Length",
    "Separator",
    "String",
    "Integer",
    "Real",
    "Boolean",
    "IntegerVector",
    "RealVector",
    "Selection",
    "Processed",
    "Choice",
    "Switch",
]
