"""Argument values and the argument table used to resolve placeholders."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import math
import re
from typing import Iterable, Iterator, Optional, Sequence, Union

from printfmt.error_msg import InvalidArgument

logger = logging.getLogger("printfmt.arguments")

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
# Decimal and exponent forms plus inf/nan; no underscores or hex floats
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)

Scalar = Union[int, float, str]


class ValueKind(Enum):
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"

    @property
    def is_numeric(self) -> bool:
        return self is not ValueKind.STRING


def _parse_scalar(text: str) -> tuple[ValueKind, Scalar]:
    if _INTEGER_RE.fullmatch(text):
        try:
            return ValueKind.INTEGER, int(text)
        except ValueError:
            # Past the interpreter's digit limit; keep the text as written
            logger.debug("Integer text of %d characters kept as a string", len(text))
            return ValueKind.STRING, text
    if _FLOAT_RE.fullmatch(text):
        return ValueKind.FLOAT, float(text)
    return ValueKind.STRING, text


@dataclass(frozen=True)
class ArgumentValue:
    """One command-line argument, optionally named, with its typed value.

    The kind is decided once, at parse time: integer first, then float, and
    anything else stays a string. Rendering dispatches on ``kind`` and never
    re-parses ``raw``.
    """

    position: int
    name: Optional[str]
    kind: ValueKind
    value: Scalar
    raw: str

    @classmethod
    def parse(cls, raw: str, position: int = 0) -> "ArgumentValue":
        """Build a value from a ``value`` or ``name=value`` token.

        Only the first ``=`` separates the name, so ``a=b=c`` has the name
        ``a`` and the string value ``b=c``. Whitespace around the name and the
        value is dropped and an empty name means the argument is unnamed.
        """
        name: Optional[str] = None
        text = raw
        if "=" in raw:
            left, _, text = raw.partition("=")
            name = left.strip() or None
        text = text.strip()
        kind, value = _parse_scalar(text)
        return cls(position=position, name=name, kind=kind, value=value, raw=text)

    @classmethod
    def of(cls, value: Scalar, name: Optional[str] = None, position: int = 0) -> "ArgumentValue":
        """Wrap an already-typed Python value"""
        if isinstance(value, bool):
            raise InvalidArgument(f"Unsupported argument type: {type(value).__name__}")
        if isinstance(value, int):
            kind = ValueKind.INTEGER
        elif isinstance(value, float):
            kind = ValueKind.FLOAT
        elif isinstance(value, str):
            kind = ValueKind.STRING
        else:
            raise InvalidArgument(f"Unsupported argument type: {type(value).__name__}")
        return cls(position=position, name=name, kind=kind, value=value, raw=str(value))

    def is_named(self, name: str) -> bool:
        return self.name is not None and self.name == name

    def is_negative(self) -> bool:
        if self.kind is ValueKind.STRING:
            return False
        if self.kind is ValueKind.FLOAT and math.isnan(self.value):
            return False
        return math.copysign(1.0, self.value) < 0

    def __str__(self) -> str:
        if self.name is None:
            return self.raw
        return f"{self.name}={self.raw}"


ArgumentLike = Union[str, ArgumentValue]


class ArgumentTable:
    """Ordered arguments, addressable by position and by name.

    Every argument owns a position, named ones included, so ``{0}`` can pick
    an argument that was given as ``name=value``.
    """

    def __init__(self, values: Sequence[ArgumentValue] = ()):
        self._values = list(values)
        self._validate()

    @classmethod
    def from_tokens(cls, tokens: Iterable[ArgumentLike]) -> "ArgumentTable":
        values = []
        for position, token in enumerate(tokens):
            if isinstance(token, ArgumentValue):
                if token.position != position:
                    token = ArgumentValue(
                        position=position,
                        name=token.name,
                        kind=token.kind,
                        value=token.value,
                        raw=token.raw,
                    )
                values.append(token)
            else:
                values.append(ArgumentValue.parse(str(token), position))
        return cls(values)

    @classmethod
    def empty(cls) -> "ArgumentTable":
        return cls()

    def _validate(self) -> None:
        seen: set[str] = set()
        for value in self._values:
            if value.name is None:
                continue
            if value.name in seen:
                raise InvalidArgument(f"Duplicate argument name: '{value.name}'")
            seen.add(value.name)

    def get(self, index: int) -> Optional[ArgumentValue]:
        if index < 0 or index >= len(self._values):
            return None
        return self._values[index]

    def get_named(self, name: str) -> Optional[ArgumentValue]:
        for value in self._values:
            if value.is_named(name):
                return value
        logger.debug("No argument named '%s' among %d argument(s)", name, len(self))
        return None

    def names(self) -> list[str]:
        return [value.name for value in self._values if value.name is not None]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[ArgumentValue]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"ArgumentTable({[str(value) for value in self._values]!r})"
