"""
datline: line components for structured input files.

Reads one line of a legacy input file into typed parameters, driven by an
ordered sequence of component descriptors.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - How an input file is split into sections and lines
    - What the parameters mean to the application
    - Which grammars exist for which section

This package defines LINE GRAMMAR only.

Catalogues of grammars and the consumers of the resulting containers live
in external layers.
"""

from datline.components import (
    Boolean,
    Choice,
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
from datline.container import ParameterContainer
from datline.cursor import LineCursor
from datline.definition import LineDefinition
from datline.errors import (
    DatlineError,
    DuplicateKey,
    ErrorKind,
    InternalInconsistency,
    InvalidBooleanLiteral,
    InvalidGrammarDefinition,
    LineParseError,
    MalformedNumber,
    MissingRequiredValue,
    RequiredFieldMissing,
    TrailingGarbage,
)
from datline.reader import read_component, read_components, read_line

__version__ = "0.1.0"
