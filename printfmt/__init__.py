"""
printfmt - Rust-style format strings for the command line

Substitutes positional and named arguments into ``{}`` placeholders and
applies fill, alignment, width, precision, sign and base directives.
"""

from .arguments import ArgumentTable, ArgumentValue, ValueKind
from .error_msg import (
    FormatError,
    InvalidArgument,
    InvalidFormatSpec,
    InvalidPlaceholder,
    MissingArgument,
    UnsupportedSpec,
    UnterminatedPlaceholder,
)
from .formatter import Formatter, Literal
from .parser import Alignment, Base, FormatSpec, Placeholder, Reference, ReferenceKind, Sign
from .version import __version__

__all__ = [
    'Alignment',
    'ArgumentTable',
    'ArgumentValue',
    'Base',
    'FormatError',
    'FormatSpec',
    'Formatter',
    'InvalidArgument',
    'InvalidFormatSpec',
    'InvalidPlaceholder',
    'Literal',
    'MissingArgument',
    'Placeholder',
    'Reference',
    'ReferenceKind',
    'Sign',
    'UnsupportedSpec',
    'UnterminatedPlaceholder',
    'ValueKind',
    '__version__',
]
