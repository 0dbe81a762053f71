"""
Tests for the position capability of placement commands.
"""

import pytest

from dtpcmd.command import VariableDependent
from dtpcmd.commands import ImageBox, TextBox
from dtpcmd.errors import InvalidAxisError
from dtpcmd.position import PositionBinding, RelativePosition


class TestAbsolutePosition:

    def test_literal_position(self):
        box = TextBox("title").set_left(5).set_top(7.5)
        params = box.build()["params"]
        assert params["left"] == 5
        assert params["top"] == 7.5
        assert not box.is_relative_positioned()


class TestRelativePosition:

    def test_left_relative(self):
        box = TextBox("title").set_left_relative("GENERATED_AT", 3)
        assert box.get_param("left") == "=[GENERATED_AT] + 3"
        assert box.is_relative_positioned()
        assert box.is_relative_positioned_to_variable("GENERATED_AT")
        assert box.get_relative_position_variables() == {"left": "GENERATED_AT"}

    def test_top_relative(self):
        box = TextBox("title").set_top_relative("yPos", -4)
        assert box.get_param("top") == "=[yPos] + -4"
        assert box.get_dependent_variables() == ["yPos"]

    def test_literal_clears_binding(self):
        """setLeft(5) after setLeftRelative("x", 2) drops the dependency on x."""
        box = TextBox("title").set_left_relative("x", 2)
        box.set_left(5)
        assert not box.is_relative_positioned()
        assert "x" not in box.get_dependent_variables()

    def test_literal_only_clears_its_axis(self):
        box = TextBox("title").set_left_relative("x", 2).set_top_relative("y", 1)
        box.set_left(5)
        assert box.get_relative_position_variables() == {"top": "y"}
        assert box.get_dependent_variables() == ["y"]

    def test_both_axes_on_same_variable(self):
        box = ImageBox("img").set_left_relative("x").set_top_relative("x", 10)
        assert box.get_dependent_variables() == ["x"]

    def test_direct_formula_is_a_dependency(self):
        box = TextBox("title").set_top("=[a] + [b]")
        assert box.get_dependent_variables() == ["a", "b"]

    def test_invalid_axis(self):
        with pytest.raises(InvalidAxisError):
            TextBox("title").set_relative_position("bottom", "x")

    def test_box_is_variable_dependent(self):
        assert isinstance(TextBox("title"), VariableDependent)


class TestRelativePositionHelper:

    def test_bind_returns_binding(self):
        helper = RelativePosition()
        binding = helper.bind("left", "x", 2)
        assert binding == PositionBinding("left", "x", 2)
        assert binding.formula() == "=[x] + 2"

    def test_formula_update_keeps_binding(self):
        helper = RelativePosition()
        helper.bind("top", "x")
        helper.update("top", "=[x] + 0")
        assert helper.get_binding("top") is not None

    def test_none_clears_binding(self):
        helper = RelativePosition()
        helper.bind("top", "x")
        helper.update("top", None)
        assert not helper.is_relative_positioned()
