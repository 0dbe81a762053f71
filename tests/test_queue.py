"""
Tests for the CommandQueue.

Tests verify that the queue:
    - Registers variables before validating references
    - Rejects undeclared references atomically
    - Keeps emission order
    - Drives page/y cursors
    - Tracks registered and missing assets
"""

import pytest

from dtpcmd.commands import (
    CheckNewPage,
    GoToPage,
    ImageBox,
    MathFormula,
    Max,
    PageMessage,
    TextBox,
    Variable,
)
from dtpcmd.config import QueueConfig
from dtpcmd.errors import UndeclaredVariableError, ValidationError
from dtpcmd.queue import CommandQueue


@pytest.fixture
def queue():
    return CommandQueue()


class TestVariableValidation:
    """Registration and dependency validation."""

    def test_declared_variable_can_be_used(self, queue):
        queue.add_command(Variable("x", 10))
        queue.add_command(TextBox("title").set_left_relative("x", 2))
        assert len(queue) == 2

    def test_undeclared_variable_fails(self, queue):
        with pytest.raises(UndeclaredVariableError) as excinfo:
            queue.add_command(TextBox("title").set_top_relative("y"))
        assert excinfo.value.variables == ["y"]
        assert "y" in str(excinfo.value)

    def test_declare_and_use_in_same_command(self, queue):
        """A component declaring x and a sibling reading x succeed together."""
        box = TextBox("title")
        box.add_component(Variable("x", 1))
        box.add_component(MathFormula("y", "=[x] + 4"))
        queue.add_command(box)
        assert queue.is_variable_registered("x")
        assert queue.is_variable_registered("y")

    def test_nested_declarations_are_registered(self, queue):
        box = TextBox("title")
        box.add_component(Variable("titleBottom", "bottom"))
        box.add_component(Variable("titleRight", "right"))
        queue.add_command(box)
        assert queue.get_registered_variables() == {"titleBottom", "titleRight"}

    def test_nested_dependent_components_are_validated(self, queue):
        box = TextBox("title")
        box.add_component(Max("lowest", ["a", "b"]))
        with pytest.raises(UndeclaredVariableError) as excinfo:
            queue.add_command(box)
        assert excinfo.value.variables == ["a", "b"]

    def test_standalone_math_is_validated(self, queue):
        queue.add_command(Variable("a", 1))
        with pytest.raises(UndeclaredVariableError) as excinfo:
            queue.add_command(MathFormula("sum", "=[a] + [b]"))
        assert excinfo.value.variables == ["b"]

    def test_redeclaring_is_allowed(self, queue):
        queue.add_command(Variable("x", 1))
        queue.add_command(Variable("x", 2))
        assert queue.get_registered_variables() == {"x"}
        assert len(queue) == 2

    def test_literal_after_relative_needs_no_variable(self, queue):
        box = TextBox("title").set_left_relative("x", 2)
        box.set_left(5)
        queue.add_command(box)
        assert len(queue) == 1


class TestAtomicity:
    """A rejected command leaves no trace."""

    def test_rejected_command_is_not_appended(self, queue):
        queue.add_command(Variable("GENERATED_AT", 1000))
        before = queue.get_commands()
        with pytest.raises(UndeclaredVariableError):
            queue.add_command(TextBox("title").set_left_relative("MISSING", 0))
        assert queue.get_commands() == before

    def test_rejected_command_does_not_register_variables(self, queue):
        box = TextBox("title").set_top_relative("missing")
        box.add_component(Variable("declared", "bottom"))
        with pytest.raises(UndeclaredVariableError):
            queue.add_command(box)
        assert not queue.is_variable_registered("declared")
        with pytest.raises(UndeclaredVariableError):
            queue.add_command(TextBox("other").set_left_relative("declared"))

    def test_build_failure_does_not_register_variables(self, queue):
        box = TextBox("")
        box.add_component(Variable("declared", "bottom"))
        with pytest.raises(ValidationError):
            queue.add_command(box)
        assert not queue.is_variable_registered("declared")
        assert len(queue) == 0
        assert box.box_ident is None


class TestOrder:

    def test_commands_keep_call_order(self, queue):
        for i in range(5):
            queue.add_command(PageMessage(f"message {i}"))
        messages = [c["params"]["message"] for c in queue.get_commands()]
        assert messages == [f"message {i}" for i in range(5)]

    def test_get_commands_returns_copy(self, queue):
        queue.add_command(PageMessage("hello"))
        queue.get_commands().clear()
        assert len(queue.get_commands()) == 1

    def test_later_mutation_does_not_change_stream(self, queue):
        msg = PageMessage("hello")
        queue.add_command(msg)
        msg.set_param("message", "changed")
        assert queue.get_commands()[0]["params"]["message"] == "hello"

    def test_add_page_message(self, queue):
        queue.add_page_message("Check prices", on_page=True)
        record = queue.get_commands()[-1]
        assert record["cmd"] == "pagemessage"
        assert record["params"] == {"message": "Check prices", "onpage": True}


class TestCursors:

    def test_page_number_starts_at_zero(self, queue):
        assert queue.get_page_number() == 0

    def test_page_number_is_never_advanced_by_commands(self, queue):
        queue.add_command(GoToPage(3))
        assert queue.get_page_number() == 0

    def test_increment_page_number(self, queue):
        queue.set_page_number(2)
        assert queue.increment_page_number() == 3
        assert queue.increment_page_number(2) == 5

    def test_page_number_type(self, queue):
        with pytest.raises(TypeError):
            queue.set_page_number("2")
        with pytest.raises(TypeError):
            queue.increment_page_number(1.5)

    def test_y_pos(self, queue):
        assert queue.get_y_pos() == 0
        queue.set_y_pos(12.5)
        assert queue.get_y_pos() == 12.5
        assert len(queue) == 0

    def test_increment_y_pos_emits_variable(self, queue):
        queue.set_y_pos(5)
        assert queue.increment_y_pos(10, emit=True) == 15
        assert queue.get_y_pos() == 15
        last = queue.get_commands()[-1]
        assert last["cmd"] == "variable"
        assert last["params"]["name"] == "yPos"
        assert last["params"]["value"] == 15
        assert queue.is_variable_registered("yPos")

    def test_emitted_y_pos_can_be_referenced(self, queue):
        queue.set_y_pos(40, emit=True)
        queue.add_command(TextBox("title").set_top_relative("yPos", 5))
        assert queue.get_commands()[-1]["params"]["top"] == "=[yPos] + 5"

    def test_y_pos_type(self, queue):
        with pytest.raises(TypeError):
            queue.set_y_pos("10")
        with pytest.raises(TypeError):
            queue.increment_y_pos(True)

    def test_configured_y_position_variable(self):
        queue = CommandQueue(QueueConfig(y_position_variable="cursorY"))
        queue.set_y_pos(1, emit=True)
        assert queue.get_commands()[-1]["params"]["name"] == "cursorY"


class TestAssets:

    def test_image_assets_are_registered(self, queue):
        queue.add_command(ImageBox("img", asset_id=7, src="a.jpg"))
        queue.add_command(ImageBox("img", asset_id=8, src="b.jpg"))
        assert queue.get_registered_assets() == {
            7: {"id": 7, "src": "a.jpg"},
            8: {"id": 8, "src": "b.jpg"},
        }

    def test_duplicate_assets_are_ignored(self, queue):
        queue.add_command(ImageBox("img", asset_id=7, src="a.jpg"))
        queue.add_command(ImageBox("img", asset_id=7, src="other.jpg"))
        assert queue.get_registered_assets() == {7: {"id": 7, "src": "a.jpg"}}

    def test_only_top_level_command_is_harvested(self, queue):
        queue.add_command(TextBox("title"))
        assert queue.get_registered_assets() == {}

    def test_rejected_image_is_not_registered(self, queue):
        with pytest.raises(UndeclaredVariableError):
            queue.add_command(ImageBox("img", asset_id=7, src="a.jpg").set_top_relative("nope"))
        assert queue.get_registered_assets() == {}

    def test_missing_asset_counter(self, queue):
        for _ in range(3):
            queue.increment_missing_asset_counter(42)
        queue.increment_missing_asset_counter(7)
        assert queue.get_missing_assets() == {"assetIds": {42: 3, 7: 1}, "elements": 4}

    def test_missing_assets_start_empty(self, queue):
        assert queue.get_missing_assets() == {"assetIds": {}, "elements": 0}


class TestEndToEnd:

    def test_relative_placement_on_page_one(self, queue):
        queue.set_page_number(1)
        queue.add_command(Variable("GENERATED_AT", 1000))

        box = TextBox("title")
        box.add_component(CheckNewPage(250, 20))
        queue.add_command(box.set_left_relative("GENERATED_AT", 3))
        assert queue.get_commands()[-1]["params"]["left"] == "=[GENERATED_AT] + 3"

        with pytest.raises(UndeclaredVariableError) as excinfo:
            queue.add_command(TextBox("other").set_left_relative("MISSING", 0))
        assert excinfo.value.variables == ["MISSING"]
        assert len(queue.get_commands()) == 2
