from __future__ import annotations

import pytest

from printfmt.error_msg import InvalidFormatSpec, InvalidPlaceholder
from printfmt.parser import (
    Alignment,
    Base,
    FormatSpec,
    Placeholder,
    Reference,
    ReferenceKind,
    Sign,
)


@pytest.mark.unit
def test_empty_placeholder_is_implicit():
    placeholder = Placeholder.parse("")
    assert placeholder.reference.kind is ReferenceKind.IMPLICIT
    assert placeholder.spec is None


@pytest.mark.unit
def test_index_and_name_references():
    assert Placeholder.parse("0").reference == Reference.at(0)
    assert Placeholder.parse("10").reference == Reference.at(10)
    assert Placeholder.parse("name").reference == Reference.named("name")
    assert Placeholder.parse("_x1").reference == Reference.named("_x1")


@pytest.mark.unit
def test_reference_with_spec():
    placeholder = Placeholder.parse("name:^10")
    assert placeholder.reference == Reference.named("name")
    assert placeholder.spec.align is Alignment.CENTER
    assert placeholder.spec.width == 10

    placeholder = Placeholder.parse("2:>5")
    assert placeholder.reference == Reference.at(2)
    assert placeholder.spec.align is Alignment.RIGHT
    assert placeholder.spec.width == 5

    placeholder = Placeholder.parse(":>")
    assert placeholder.reference.kind is ReferenceKind.IMPLICIT
    assert placeholder.spec.align is Alignment.RIGHT
    assert placeholder.spec.width is None


@pytest.mark.unit
def test_empty_spec_after_colon_is_default():
    placeholder = Placeholder.parse("0:")
    assert placeholder.spec == FormatSpec()
    assert placeholder.spec.is_empty()


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["1a", "a-b", " 0", "0 ", "-1", "1.5", "é", "٣"])
def test_malformed_reference(raw):
    with pytest.raises(InvalidPlaceholder):
        Placeholder.parse(raw)


@pytest.mark.unit
def test_fill_and_alignment():
    spec = FormatSpec.parse("*<8")
    assert spec.fill == "*"
    assert spec.align is Alignment.LEFT
    assert spec.width == 8

    # The fill may itself be an alignment character or a digit
    spec = FormatSpec.parse("<<")
    assert spec.fill == "<"
    assert spec.align is Alignment.LEFT

    spec = FormatSpec.parse("0>4")
    assert spec.fill == "0"
    assert spec.align is Alignment.RIGHT
    assert spec.width == 4
    assert spec.zero_pad is False

    spec = FormatSpec.parse("é^3")
    assert spec.fill == "é"
    assert spec.align is Alignment.CENTER


@pytest.mark.unit
def test_full_spec():
    spec = FormatSpec.parse("_^+#012.3x")
    assert spec == FormatSpec(
        fill="_",
        align=Alignment.CENTER,
        sign=Sign.PLUS,
        alternate=True,
        zero_pad=True,
        base=Base.HEX,
        width=12,
        precision=3,
    )


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, base",
    [("x", Base.HEX), ("X", Base.UPPER_HEX), ("o", Base.OCTAL), ("b", Base.BINARY)],
)
def test_base_letters(raw, base):
    assert FormatSpec.parse(raw).base is base


@pytest.mark.unit
def test_sign_zero_and_precision():
    spec = FormatSpec.parse("+")
    assert spec.sign is Sign.PLUS

    spec = FormatSpec.parse("-")
    assert spec.sign is Sign.MINUS

    spec = FormatSpec.parse("05")
    assert spec.zero_pad is True
    assert spec.width == 5

    spec = FormatSpec.parse(".2")
    assert spec.precision == 2
    assert spec.width is None

    spec = FormatSpec.parse("10.0")
    assert spec.width == 10
    assert spec.precision == 0


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["0", "00", ">0", "10x5", "x+", "+ ", "d", "#+", ".", "..2", "5.x", "٣", ".٥"])
def test_invalid_specs(raw):
    with pytest.raises(InvalidFormatSpec):
        FormatSpec.parse(raw)


@pytest.mark.unit
def test_invalid_spec_reports_the_text():
    with pytest.raises(InvalidFormatSpec, match="'10x5'"):
        FormatSpec.parse("10x5")


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["", "<", "*^10", "+#x", "08.2", ">+#010b", "X"])
def test_to_syntax_parses_back(raw):
    spec = FormatSpec.parse(raw)
    assert FormatSpec.parse(spec.to_syntax()) == spec


@pytest.mark.unit
def test_placeholder_to_syntax():
    assert Placeholder.parse("").to_syntax() == "{}"
    assert Placeholder.parse("3").to_syntax() == "{3}"
    assert Placeholder.parse("n:*>4").to_syntax() == "{n:*>4}"
    assert str(Placeholder.parse(":x")) == "{:x}"


@pytest.mark.unit
def test_oversized_index_is_malformed_reference():
    with pytest.raises(InvalidPlaceholder, match="too large"):
        Placeholder.parse("9" * 5000)


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["9" * 5000, "." + "9" * 5000])
def test_oversized_width_or_precision(raw):
    with pytest.raises(InvalidFormatSpec, match="too large"):
        FormatSpec.parse(raw)
