"""
Position capability shared by placement commands.

Placement commands hold a RelativePosition helper and delegate to it.
The helper tracks which axis is bound to which declared variable.

A binding exists only while its axis holds a formula.
Setting a literal on the axis clears it.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from dtpcmd.errors import InvalidAxisError
from dtpcmd.formulas import is_formula, relative_formula

POSITION_LEFT = "left"
POSITION_RIGHT = "right"
POSITION_TOP = "top"
POSITION_BOTTOM = "bottom"

# Only these axes can be placed relative to a variable.
RELATIVE_AXES = (POSITION_LEFT, POSITION_TOP)


@dataclass(frozen=True)
class PositionBinding:
    """
    Binds one axis of a placed element to a declared variable.

    Properties:
        axis: "left" or "top"
        variable: Name of the variable the axis is relative to
        margin: Offset in mm added by the renderer
    """

    axis: str
    variable: str
    margin: Union[int, float] = 0

    def formula(self) -> str:
        return relative_formula(self.variable, self.margin)


def validate_axis(axis: str) -> None:
    """
    Raises:
        InvalidAxisError: If `axis` is not left or top
    """
    if axis not in RELATIVE_AXES:
        raise InvalidAxisError(
            f"Invalid position '{axis}' for relative positioning. "
            f"Use '{POSITION_LEFT}' or '{POSITION_TOP}'."
        )


class RelativePosition:
    """Relative position bindings of one placed element."""

    def __init__(self) -> None:
        self._bindings: Dict[str, PositionBinding] = {}

    def bind(self, axis: str, variable: str, margin: Union[int, float] = 0) -> PositionBinding:
        validate_axis(axis)
        binding = PositionBinding(axis=axis, variable=variable, margin=margin)
        self._bindings[axis] = binding
        return binding

    def update(self, axis: str, value: Any) -> None:
        """Drop the binding of `axis` unless `value` is a formula."""
        if not is_formula(value):
            self._bindings.pop(axis, None)

    def get_binding(self, axis: str) -> Optional[PositionBinding]:
        return self._bindings.get(axis)

    def is_relative_positioned(self) -> bool:
        return bool(self._bindings)

    def is_relative_positioned_to_variable(self, variable: str) -> bool:
        return any(b.variable == variable for b in self._bindings.values())

    def get_variables(self) -> Dict[str, str]:
        """Return axis -> variable name for every bound axis."""
        return {axis: b.variable for axis, b in self._bindings.items()}

    def get_dependent_variables(self) -> List[str]:
        names: List[str] = []
        for binding in self._bindings.values():
            if binding.variable not in names:
                names.append(binding.variable)
        return names
