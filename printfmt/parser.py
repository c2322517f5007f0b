"""
printfmt Parser module - placeholder and format specifier grammar using Lark
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import UnexpectedInput

from printfmt.error_msg import InvalidFormatSpec, InvalidPlaceholder


class Alignment(Enum):
    LEFT = "<"
    RIGHT = ">"
    CENTER = "^"


class Sign(Enum):
    PLUS = "+"
    MINUS = "-"


class Base(Enum):
    DECIMAL = ""
    HEX = "x"
    UPPER_HEX = "X"
    OCTAL = "o"
    BINARY = "b"

    @property
    def prefix(self) -> str:
        return {
            Base.DECIMAL: "",
            Base.HEX: "0x",
            Base.UPPER_HEX: "0x",
            Base.OCTAL: "0o",
            Base.BINARY: "0b",
        }[self]


@dataclass
class FormatSpec:
    """Rendering directives found after ':' in a placeholder"""

    fill: str = " "
    align: Optional[Alignment] = None
    sign: Optional[Sign] = None
    alternate: bool = False
    zero_pad: bool = False
    base: Base = Base.DECIMAL
    width: Optional[int] = None
    precision: Optional[int] = None

    @staticmethod
    def parse(raw: str) -> "FormatSpec":
        """
        Parse the text between ':' and '}' of a placeholder

        Args:
            raw: Specifier text, e.g. ``*^+#012.3x``

        Returns:
            The parsed FormatSpec

        Raises:
            InvalidFormatSpec: if the text does not match the grammar
        """
        if not raw:
            return FormatSpec()
        try:
            spec = parser.parse(raw, start="format_spec")
        except UnexpectedInput as e:
            raise InvalidFormatSpec(raw, f"unexpected input at column {getattr(e, 'column', '?')}") from e
        except ValueError as e:
            raise InvalidFormatSpec(raw, "number too large") from e
        if spec.width == 0:
            raise InvalidFormatSpec(raw, "zero width")
        return spec

    def is_empty(self) -> bool:
        return self == FormatSpec()

    def numeric_directives(self) -> List[str]:
        """Names of the directives that only make sense for numbers"""
        directives = []
        if self.sign is Sign.PLUS:
            directives.append("sign '+'")
        if self.alternate:
            directives.append("alternate form '#'")
        if self.zero_pad:
            directives.append("zero padding")
        if self.base is not Base.DECIMAL:
            directives.append(f"base '{self.base.value}'")
        if self.precision is not None:
            directives.append("precision")
        return directives

    def to_syntax(self) -> str:
        out = ""
        if self.align is not None:
            fill = "" if self.fill == " " else self.fill
            out += f"{fill}{self.align.value}"
        if self.sign is not None:
            out += self.sign.value
        if self.alternate:
            out += "#"
        if self.zero_pad:
            out += "0"
        if self.width is not None:
            out += str(self.width)
        if self.precision is not None:
            out += f".{self.precision}"
        out += self.base.value
        return out


class ReferenceKind(Enum):
    IMPLICIT = "implicit"
    INDEX = "index"
    NAME = "name"


@dataclass(frozen=True)
class Reference:
    """Which argument a placeholder selects"""

    kind: ReferenceKind
    index: Optional[int] = None
    name: Optional[str] = None

    @staticmethod
    def implicit() -> "Reference":
        return Reference(ReferenceKind.IMPLICIT)

    @staticmethod
    def at(index: int) -> "Reference":
        return Reference(ReferenceKind.INDEX, index=index)

    @staticmethod
    def named(name: str) -> "Reference":
        return Reference(ReferenceKind.NAME, name=name)

    def __str__(self) -> str:
        if self.kind is ReferenceKind.INDEX:
            return str(self.index)
        if self.kind is ReferenceKind.NAME:
            return str(self.name)
        return ""


@dataclass
class Placeholder:
    """A parsed ``{reference:spec}`` occurrence"""

    reference: Reference = field(default_factory=Reference.implicit)
    spec: Optional[FormatSpec] = None

    @staticmethod
    def parse(raw: str) -> "Placeholder":
        """
        Parse the text between '{' and '}'

        Args:
            raw: Placeholder content without braces, e.g. ``name:>10``

        Returns:
            The parsed Placeholder

        Raises:
            InvalidPlaceholder: if the reference is malformed
            InvalidFormatSpec: if the specifier is malformed
        """
        ref_text, colon, spec_text = raw.partition(":")
        if not ref_text:
            reference = Reference.implicit()
        else:
            try:
                reference = parser.parse(ref_text, start="reference")
            except UnexpectedInput as e:
                raise InvalidPlaceholder(
                    f"{{{raw}}}", "expected an argument index or name"
                ) from e
            except ValueError as e:
                raise InvalidPlaceholder(f"{{{raw}}}", "argument index too large") from e
        spec = FormatSpec.parse(spec_text) if colon else None
        return Placeholder(reference, spec)

    def to_syntax(self) -> str:
        if self.spec is None:
            return f"{{{self.reference}}}"
        return f"{{{self.reference}:{self.spec.to_syntax()}}}"

    def __str__(self) -> str:
        return self.to_syntax()


# Lark grammar for the inside of a placeholder. The reference and the
# specifier are parsed separately, so each has its own start rule.
grammar = r"""
    reference: DIGITS -> index
             | NAME -> name

    format_spec: FILL_ALIGN? SIGN? ALTERNATE? DIGITS? PRECISION? TYPE?

    // A fill is any single character directly before an alignment character
    FILL_ALIGN.2: /.?[<>^]/s
    SIGN: "+" | "-"
    ALTERNATE: "#"
    PRECISION: /\.[0-9]+/
    TYPE: /[xXob]/
    DIGITS: /[0-9]+/
    NAME: /[a-zA-Z_][a-zA-Z0-9_]*/
"""


class PlaceholderTransformer(Transformer):
    """Transform parse trees into Reference and FormatSpec objects"""

    @v_args(inline=True)
    def index(self, token):
        return Reference.at(int(token))

    @v_args(inline=True)
    def name(self, token):
        return Reference.named(str(token))

    def format_spec(self, tokens: List[Token]) -> FormatSpec:
        spec = FormatSpec()
        for token in tokens:
            text = str(token)
            if token.type == "FILL_ALIGN":
                if len(text) == 2:
                    spec.fill = text[0]
                spec.align = Alignment(text[-1])
            elif token.type == "SIGN":
                spec.sign = Sign(text)
            elif token.type == "ALTERNATE":
                spec.alternate = True
            elif token.type == "DIGITS":
                # A leading zero is the zero-padding flag, not part of the width
                if text.startswith("0"):
                    spec.zero_pad = True
                    text = text[1:] or "0"
                spec.width = int(text)
            elif token.type == "PRECISION":
                spec.precision = int(text[1:])
            elif token.type == "TYPE":
                spec.base = Base(text)
        return spec


# Create the parser
parser = Lark(
    grammar,
    start=["reference", "format_spec"],
    parser="lalr",
    transformer=PlaceholderTransformer(),
    maybe_placeholders=False,
)
