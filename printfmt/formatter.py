"""Template tokenizing, argument resolution and rendering."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable, List, Optional, Union

from wcwidth import wcswidth, wcwidth

from printfmt.arguments import ArgumentLike, ArgumentTable, ArgumentValue, ValueKind
from printfmt.error_msg import (
    InvalidPlaceholder,
    MissingArgument,
    UnsupportedSpec,
    UnterminatedPlaceholder,
)
from printfmt.parser import Alignment, Base, FormatSpec, Placeholder, ReferenceKind, Sign

logger = logging.getLogger("printfmt.formatter")


def display_width(text: str) -> int:
    """Terminal columns taken by ``text``; wide CJK and emoji count as two"""
    width = wcswidth(text)
    if width < 0:
        # Control characters take no column of their own
        width = sum(max(wcwidth(ch), 0) for ch in text)
    return width


@dataclass(frozen=True)
class Literal:
    """A run of literal text, with escaped braces already collapsed"""

    text: str


Token = Union[Literal, Placeholder]


class Formatter:
    """Render one template against one argument list.

    ``implicit_cursor`` is owned by the instance and only moves for ``{}``
    placeholders; ``{0}`` and ``{name}`` leave it where it is, as in Rust's
    ``println!``. ``generate`` starts the cursor from zero on every call.
    """

    def __init__(self, template: str, arguments: Union[ArgumentTable, Iterable[ArgumentLike]] = ()):
        self.template = template
        if isinstance(arguments, ArgumentTable):
            self.arguments = arguments
        else:
            self.arguments = ArgumentTable.from_tokens(arguments)
        self.implicit_cursor = 0
        self._tokens: Optional[List[Token]] = None

    @staticmethod
    def format(template: str, args: Iterable[ArgumentLike] = ()) -> str:
        """Format ``template`` with ``args`` in one call"""
        return Formatter(template, args).generate()

    # str and list are not borrowed in Python; kept for callers of both names
    format_owned = format

    @property
    def tokens(self) -> List[Token]:
        if self._tokens is None:
            self._tokens = self.parse_fmt(self.template)
        return self._tokens

    def expected_args(self) -> int:
        """Number of arguments the template needs.

        Implicit placeholders and explicit indexes share the positional
        slots; each distinct name needs one more argument on top of those.
        """
        placeholders = [t for t in self.tokens if isinstance(t, Placeholder)]
        implicit = sum(1 for p in placeholders if p.reference.kind is ReferenceKind.IMPLICIT)
        highest = max(
            (p.reference.index + 1 for p in placeholders if p.reference.kind is ReferenceKind.INDEX),
            default=0,
        )
        names = {p.reference.name for p in placeholders if p.reference.kind is ReferenceKind.NAME}
        return max(implicit, highest) + len(names)

    def generate(self) -> str:
        """Render the template; any failure raises and nothing is returned"""
        self.implicit_cursor = 0
        parts = []
        for token in self.tokens:
            if isinstance(token, Literal):
                parts.append(token.text)
                continue
            value = self.resolve(token)
            rendered = self.render(value, token.spec)
            logger.debug("%s -> %r", token, rendered)
            parts.append(rendered)
        return "".join(parts)

    def resolve(self, placeholder: Placeholder) -> ArgumentValue:
        reference = placeholder.reference
        if reference.kind is ReferenceKind.INDEX:
            value = self.arguments.get(reference.index)
            label = f"{{{reference.index}}}"
        elif reference.kind is ReferenceKind.NAME:
            value = self.arguments.get_named(reference.name)
            label = f"{{{reference.name}}}"
        else:
            value = self.arguments.get(self.implicit_cursor)
            label = f"{{}} (implicit argument {self.implicit_cursor})"
            self.implicit_cursor += 1

        if value is None:
            raise MissingArgument(label, len(self.arguments))
        logger.debug("Resolved %s to %s", label, value)
        return value

    @classmethod
    def render(cls, value: ArgumentValue, spec: Optional[FormatSpec]) -> str:
        if spec is None:
            spec = FormatSpec()

        if value.kind is ValueKind.STRING:
            unsupported = spec.numeric_directives()
            if unsupported:
                raise UnsupportedSpec(spec.to_syntax(), unsupported[0], value.kind.value)
            return cls.pad(value.value, spec, Alignment.LEFT)

        if value.kind is ValueKind.FLOAT:
            if spec.base is not Base.DECIMAL:
                raise UnsupportedSpec(spec.to_syntax(), f"base '{spec.base.value}'", value.kind.value)
            if spec.alternate:
                raise UnsupportedSpec(spec.to_syntax(), "alternate form '#'", value.kind.value)
            magnitude = abs(value.value)
            if spec.precision is not None:
                digits = f"{magnitude:.{spec.precision}f}"
            else:
                digits = repr(magnitude)
            prefix = ""
        else:
            digits = format(abs(value.value), spec.base.value or "d")
            prefix = spec.base.prefix if spec.alternate else ""

        if value.is_negative():
            sign = "-"
        elif spec.sign is Sign.PLUS:
            sign = "+"
        else:
            sign = ""

        if spec.zero_pad and spec.width is not None:
            body = digits.rjust(spec.width - len(sign) - len(prefix), "0")
            return f"{sign}{prefix}{body}"
        return cls.pad(f"{sign}{prefix}{digits}", spec, Alignment.RIGHT)

    @staticmethod
    def pad(text: str, spec: FormatSpec, default: Alignment) -> str:
        if spec.width is None:
            return text
        count = spec.width - display_width(text)
        if count <= 0:
            return text
        align = spec.align or default
        if align is Alignment.LEFT:
            return text + spec.fill * count
        if align is Alignment.RIGHT:
            return spec.fill * count + text
        left = count // 2
        return spec.fill * left + text + spec.fill * (count - left)

    @staticmethod
    def parse_fmt(template: str) -> List[Token]:
        """
        Split a template into literal runs and placeholders

        Args:
            template: The format string

        Returns:
            Literal and Placeholder tokens in source order

        Raises:
            UnterminatedPlaceholder: on a '{' without a closing '}'
            InvalidPlaceholder: on a lone '}' or a malformed reference
            InvalidFormatSpec: on a malformed specifier
        """
        tokens: List[Token] = []
        literal: List[str] = []
        i = 0
        n = len(template)
        while i < n:
            ch = template[i]
            if ch == "{":
                if i + 1 < n and template[i + 1] == "{":
                    literal.append("{")
                    i += 2
                    continue
                end = _find_close(template, i)
                if literal:
                    tokens.append(Literal("".join(literal)))
                    literal = []
                placeholder = Placeholder.parse(template[i + 1:end])
                logger.debug("Placeholder at %d: %s", i, placeholder)
                tokens.append(placeholder)
                i = end + 1
            elif ch == "}":
                if i + 1 < n and template[i + 1] == "}":
                    literal.append("}")
                    i += 2
                    continue
                raise InvalidPlaceholder("}", f"unmatched '}}' at character {i}")
            else:
                literal.append(ch)
                i += 1
        if literal:
            tokens.append(Literal("".join(literal)))
        return tokens


def _find_close(template: str, start: int) -> int:
    # Placeholders do not nest, so the next '}' closes; another '{' first is an error
    for j in range(start + 1, len(template)):
        ch = template[j]
        if ch == "}":
            return j
        if ch == "{":
            break
    raise UnterminatedPlaceholder(template, start)
