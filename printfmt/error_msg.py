"""
printfmt error module - exception hierarchy for parsing and rendering
"""

from typing import List, Optional, Tuple


# Context entries are (label, detail) pairs, e.g. ("placeholder", "{0:>}")
Context = List[Tuple[str, str]]


class FormatError(Exception):
    """Base error raised by the formatting pipeline"""

    def __init__(self, msg: str, context: Optional[Context] = None):
        self.msg = msg
        self.context = context or []
        super().__init__(self.format_message())

    def format_message(self) -> str:
        if not self.context:
            return self.msg

        context_str = ""
        for label, detail in self.context:
            context_str += f"\n  {label}: {detail}"

        return f"{self.msg}{context_str}"


class InvalidFormatSpec(FormatError):
    """The text after ':' in a placeholder is not a valid specifier"""

    def __init__(self, spec: str, reason: Optional[str] = None):
        self.spec = spec
        msg = f"Invalid format specifier: '{spec}'"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class UnsupportedSpec(InvalidFormatSpec):
    """A valid specifier directive that cannot apply to the resolved value"""

    def __init__(self, spec: str, directive: str, kind: str):
        self.directive = directive
        self.kind = kind
        super().__init__(spec, f"{directive} cannot be applied to a {kind} argument")


class InvalidPlaceholder(FormatError):
    """The reference part of a placeholder is malformed"""

    def __init__(self, placeholder: str, reason: Optional[str] = None):
        self.placeholder = placeholder
        msg = f"Invalid placeholder: '{placeholder}'"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class UnterminatedPlaceholder(FormatError):
    """A '{' was opened but never closed"""

    def __init__(self, template: str, offset: int):
        self.template = template
        self.offset = offset
        super().__init__(
            f"Unterminated placeholder starting at character {offset}",
            [("template", template)],
        )


class MissingArgument(FormatError):
    """A placeholder refers to an argument that was not provided"""

    def __init__(self, reference: str, arg_count: int):
        self.reference = reference
        self.arg_count = arg_count
        super().__init__(
            f"Missing argument for placeholder {reference}: "
            f"{arg_count} argument(s) provided"
        )


class InvalidArgument(FormatError):
    """The argument list cannot be turned into an argument table"""

