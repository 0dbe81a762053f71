"""
Variable declaration commands.

Variables publish named values to the renderer. Later commands
place elements relative to them with `=[name] + margin` formulas.

Two kinds of declarations exist:
    - Variable: name bound to a literal (or a verbatim formula)
    - AbstractMath subclasses: name bound to a computed expression

Both can be sent standalone or nested as components of a
placement command. The queue finds them by type at any depth.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Union

from dtpcmd.command import ComponentCommand
from dtpcmd.errors import ValidationError
from dtpcmd.formulas import referenced_variables


class Variable(ComponentCommand):
    """
    Declares a named value in the renderer.

    As a component of a placement command, `value` may name an edge of
    the placed element (see dtpcmd.position POSITION_* constants) so the
    variable captures where the element ended up.

    Redeclaring a name overwrites it. That is not an error.
    """

    CMD = "variable"
    COMPONENT_IDENT = "variables"
    MULTIPLE = True
    AVAILABLE_PARAMS = {
        "name": "",
        "value": "",
    }

    VARIABLE_Y_POSITION = "yPos"
    VARIABLE_X_POSITION = "xPos"

    def __init__(self, name: str = "", value: Union[int, float, str] = ""):
        super().__init__()
        self.set_name(name)
        self.set_value(value)

    def set_name(self, name: str) -> Variable:
        self.set_param("name", name)
        return self

    def get_name(self) -> str:
        return self.get_param("name")

    def set_value(self, value: Union[int, float, str]) -> Variable:
        self.set_param("value", value)
        return self

    def get_value(self) -> Union[int, float, str]:
        return self.get_param("value")

    def validate(self) -> None:
        self.validate_empty_param("name")


class AbstractMath(ComponentCommand, ABC):
    """
    Declares a named variable computed by the renderer.

    Subclasses report the variables their expression reads through
    get_dependent_variables(), so the queue rejects them when an
    operand was never declared.
    """

    COMPONENT_IDENT = "variables"
    MULTIPLE = True
    AVAILABLE_PARAMS = {"name": ""}

    def __init__(self, name: str = ""):
        super().__init__()
        self.set_name(name)

    def set_name(self, name: str) -> AbstractMath:
        self.set_param("name", name)
        return self

    def get_name(self) -> str:
        return self.get_param("name")

    @abstractmethod
    def get_dependent_variables(self) -> List[str]:
        """Names of the variables the computed expression reads."""

    def validate(self) -> None:
        self.validate_empty_param("name")


class MathFormula(AbstractMath):
    """
    Binds a name to a free formula, e.g. `=[yPos] + [headerHeight]`.

    The formula is sent verbatim. Every `[name]` in it is a dependency.
    """

    CMD = "math"
    AVAILABLE_PARAMS = {
        "name": "",
        "formula": "",
    }

    def __init__(self, name: str = "", formula: str = ""):
        super().__init__(name)
        self.set_formula(formula)

    def set_formula(self, formula: str) -> MathFormula:
        self.set_param("formula", formula)
        return self

    def get_dependent_variables(self) -> List[str]:
        return referenced_variables(self.get_param("formula"))

    def validate(self) -> None:
        super().validate()
        self.validate_empty_param("formula")


class _Aggregate(AbstractMath):
    AVAILABLE_PARAMS = {
        "name": "",
        "operands": [],
    }

    def __init__(self, name: str = "", variables: Iterable[str] = ()):
        super().__init__(name)
        for variable in variables:
            self.add_variable(variable)

    def add_variable(self, variable: str) -> _Aggregate:
        if not variable:
            raise ValidationError(f"Empty operand in '{self.CMD}' command.")
        operands = self.get_param("operands")
        if variable not in operands:
            self.set_param("operands", operands + [variable])
        return self

    def get_dependent_variables(self) -> List[str]:
        return list(self.get_param("operands"))

    def validate(self) -> None:
        super().validate()
        self.validate_empty_param("operands")


class Max(_Aggregate):
    """Binds a name to the largest value of the operand variables."""

    CMD = "max"


class Min(_Aggregate):
    """Binds a name to the smallest value of the operand variables."""

    CMD = "min"
