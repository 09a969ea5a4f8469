"""
Error taxonomy for line reading.

Every failure raised by this package derives from DatlineError and carries
a `kind` from ErrorKind, so callers can dispatch on the kind instead of the
message text.

Two families exist:
    - LineParseError: a field of one input line violates its grammar.
      Fatal for the current line; the caller decides whether to skip the
      line or abort the file.
    - Construction errors (InvalidGrammarDefinition, InternalInconsistency):
      the grammar itself is wrong. Raised eagerly when components and
      definitions are built.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    """Programmatic error kinds."""

    REQUIRED_FIELD_MISSING = "required_field_missing"
    MALFORMED_NUMBER = "malformed_number"
    MISSING_REQUIRED_VALUE = "missing_required_value"
    TRAILING_GARBAGE = "trailing_garbage"
    INVALID_BOOLEAN_LITERAL = "invalid_boolean_literal"
    DUPLICATE_KEY = "duplicate_key"
    INTERNAL_INCONSISTENCY = "internal_inconsistency"
    INVALID_GRAMMAR_DEFINITION = "invalid_grammar_definition"


class DatlineError(Exception):
    """Root of all errors raised by datline."""

    kind: ErrorKind = ErrorKind.INTERNAL_INCONSISTENCY


class LineParseError(DatlineError):
    """
    A single field of an input line could not be read.

    Properties:
        field: Name of the component that failed
        section: Section the line belongs to (diagnostics only)
        value: Offending token, if any
    """

    def __init__(self, message: str, field: str = "", section: str = "", value: Optional[Any] = None):
        super().__init__(message)
        self.field = field
        self.section = section
        self.value = value


class RequiredFieldMissing(LineParseError):
    """A mandatory label or value is absent from the line."""

    kind = ErrorKind.REQUIRED_FIELD_MISSING


class MalformedNumber(LineParseError):
    """A token cannot be read as a number at all."""

    kind = ErrorKind.MALFORMED_NUMBER


class MissingRequiredValue(RequiredFieldMissing, MalformedNumber):
    """No token was supplied for a mandatory numeric field."""

    kind = ErrorKind.MISSING_REQUIRED_VALUE


class TrailingGarbage(LineParseError):
    """Characters remain after the numeric prefix of a token."""

    kind = ErrorKind.TRAILING_GARBAGE


class InvalidBooleanLiteral(LineParseError):
    """Token is not one of the accepted yes/no literals."""

    kind = ErrorKind.INVALID_BOOLEAN_LITERAL


class DuplicateKey(DatlineError):
    """A name was written twice into the same parameter container."""

    kind = ErrorKind.DUPLICATE_KEY

    def __init__(self, name: str):
        super().__init__(f"Parameter '{name}' has already been read for this line.")
        self.name = name


class InternalInconsistency(DatlineError):
    """Programming error: a state that grammar validation should rule out."""

    kind = ErrorKind.INTERNAL_INCONSISTENCY


class InvalidGrammarDefinition(DatlineError, ValueError):
    """A component or line definition is malformed."""

    kind = ErrorKind.INVALID_GRAMMAR_DEFINITION


__all__ = [
    "ErrorKind",
    "DatlineError",
    "LineParseError",
    "RequiredFieldMissing",
    "MalformedNumber",
    "MissingRequiredValue",
    "TrailingGarbage",
    "InvalidBooleanLiteral",
    "DuplicateKey",
    "InternalInconsistency",
    "InvalidGrammarDefinition",
]
