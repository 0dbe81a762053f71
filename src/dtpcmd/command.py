"""
Core Command Objects

Defines the base of every renderer operation:
    - AbstractCommand (one renderer operation with a fixed parameter schema)
    - ComponentCommand (a command nestable as a named field of another command)
    - Capability protocols (VariableDependent, ImageCollector)

ARCHITECTURAL RULE:
    Commands:
        - Validate themselves
        - Serialize themselves
        - Never evaluate formulas
        - Know nothing about the queue they are added to

Capabilities are structural. The queue asks "does this node expose
get_dependent_variables()?" and never which base class it has.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional, Protocol, Tuple, Union, runtime_checkable

from dtpcmd.errors import UnknownParameterError, ValidationError


@runtime_checkable
class VariableDependent(Protocol):
    """A command whose output depends on previously declared variables."""

    def get_dependent_variables(self) -> List[str]:
        ...


@runtime_checkable
class ImageCollector(Protocol):
    """A command that references assets (asset id -> asset entry)."""

    def get_collected_images(self) -> Dict[int, Dict[str, Any]]:
        ...


class AbstractCommand:
    """
    Base class for all renderer commands.

    Subclasses declare:
        CMD:
            Identifier tag sent to the renderer (e.g. "textbox")

        AVAILABLE_PARAMS:
            Parameter schema, name -> default value

        ALLOWED_COMPONENTS:
            ComponentCommand classes accepted by add_component()

    Built record shape:
        {"cmd": CMD, "params": {...}, "tid": box ident}

        Components are inlined in "params" under their component ident:
            - single slot: the component's record
            - multiple slot: list of component records, insertion order

        "tid" is only present once a box ident is attached.
    """

    CMD: str = ""
    AVAILABLE_PARAMS: Dict[str, Any] = {}
    ALLOWED_COMPONENTS: Tuple[type, ...] = ()

    def __init__(self) -> None:
        self._available_params: Dict[str, Any] = {}
        self._params: Dict[str, Any] = {}
        self._components: Dict[str, Union[ComponentCommand, List[ComponentCommand]]] = {}
        self._box_ident: Optional[str] = None
        self._box_ident_reference: str = ""
        self.init_params(self.AVAILABLE_PARAMS)

    def init_params(self, params: Dict[str, Any]) -> None:
        """Extend the parameter schema with `params` (name -> default)."""
        for name, default in params.items():
            self._available_params[name] = default
            self._params[name] = copy.deepcopy(default)

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def has_param(self, name: str) -> bool:
        return name in self._available_params

    def set_param(self, name: str, value: Any) -> AbstractCommand:
        """
        Store `value` for parameter `name`.

        Values are stored raw. Formulas are kept verbatim.

        Raises:
            UnknownParameterError: If `name` is not in the schema
        """
        if not self.has_param(name):
            raise UnknownParameterError(
                f"Parameter '{name}' not available in '{self.CMD}' command."
            )
        self._params[name] = value
        return self

    def get_param(self, name: str) -> Any:
        """
        Raises:
            UnknownParameterError: If `name` is not in the schema
        """
        if not self.has_param(name):
            raise UnknownParameterError(
                f"Parameter '{name}' not available in '{self.CMD}' command."
            )
        return self._params[name]

    def get_params(self) -> Dict[str, Any]:
        return copy.deepcopy(self._params)

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def add_component(self, component: ComponentCommand) -> AbstractCommand:
        """
        Nest `component` under its component ident.

        Single components replace the existing one.
        Multiple components are appended.

        Raises:
            UnknownParameterError: If the component type is not allowed here
        """
        if not isinstance(component, ComponentCommand) or not isinstance(
            component, self.ALLOWED_COMPONENTS
        ):
            raise UnknownParameterError(
                f"Component '{type(component).__name__}' not allowed in '{self.CMD}' command."
            )
        ident = component.get_component_ident()
        if self.has_param(ident):
            raise UnknownParameterError(
                f"Component ident '{ident}' collides with a parameter of '{self.CMD}' command."
            )
        if component.is_multiple_component():
            slot = self._components.setdefault(ident, [])
            slot.append(component)
        else:
            self._components[ident] = component
        return self

    def get_components(self) -> List[ComponentCommand]:
        """Return direct components in slot order, list order within a slot."""
        components: List[ComponentCommand] = []
        for slot in self._components.values():
            if isinstance(slot, list):
                components.extend(slot)
            else:
                components.append(slot)
        return components

    # ------------------------------------------------------------------
    # Box ident
    # ------------------------------------------------------------------

    @property
    def box_ident(self) -> Optional[str]:
        return self._box_ident

    def set_box_ident(self, ident: Optional[str]) -> AbstractCommand:
        self._box_ident = ident
        return self

    @property
    def box_ident_reference(self) -> str:
        return self._box_ident_reference

    def set_box_ident_reference(self, reference: str) -> AbstractCommand:
        """Declare a content reference used for this command's box ident."""
        self._box_ident_reference = str(reference)
        return self

    # ------------------------------------------------------------------
    # Validation and build
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """Override for command specific checks. Raise ValidationError on failure."""
        pass

    def validate_empty_param(self, name: str, label: Optional[str] = None) -> None:
        value = self.get_param(name)
        if value is None or value == "" or value == []:
            raise ValidationError(
                f"Parameter '{label or name}' in '{self.CMD}' command must not be empty."
            )

    def build(self) -> Dict[str, Any]:
        """
        Validate and serialize this command and its components.

        Idempotent: builds never mutate the command.

        Raises:
            ValidationError: If this command or a component is invalid
        """
        self.validate()
        params = copy.deepcopy(self._params)
        for ident, slot in self._components.items():
            if isinstance(slot, list):
                params[ident] = [component.build() for component in slot]
            else:
                params[ident] = slot.build()
        record: Dict[str, Any] = {"cmd": self.CMD, "params": params}
        if self._box_ident is not None:
            record["tid"] = self._box_ident
        return record

    def __repr__(self) -> str:
        return f"{type(self).__name__}(cmd={self.CMD!r})"


class ComponentCommand(AbstractCommand):
    """
    A command usable as a named nested field inside another command.

    Subclasses declare:
        COMPONENT_IDENT: Key under the parent's params
        MULTIPLE: True to append to a list slot, False to replace a single slot
    """

    COMPONENT_IDENT: str = ""
    MULTIPLE: bool = False

    def get_component_ident(self) -> str:
        return self.COMPONENT_IDENT or self.CMD

    def is_multiple_component(self) -> bool:
        return self.MULTIPLE
