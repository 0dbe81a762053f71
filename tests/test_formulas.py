"""
Tests for formula helpers.
"""

from dtpcmd.formulas import format_margin, is_formula, referenced_variables, relative_formula


def test_is_formula():
    assert is_formula("=[x] + 1")
    assert not is_formula("x + 1")
    assert not is_formula(5)
    assert not is_formula(None)


def test_relative_formula():
    assert relative_formula("GENERATED_AT", 3) == "=[GENERATED_AT] + 3"
    assert relative_formula("x") == "=[x] + 0"


def test_negative_margin_keeps_sign():
    assert relative_formula("x", -2.5) == "=[x] + -2.5"


def test_integral_float_margin():
    assert format_margin(3.0) == "3"
    assert format_margin(2.25) == "2.25"


def test_referenced_variables_in_order():
    assert referenced_variables("=[b] + [a] - [b]") == ["b", "a"]


def test_referenced_variables_of_non_strings():
    assert referenced_variables(12) == []
    assert referenced_variables(None) == []
