"""
Command Queue — the ordered, validated command stream of one run.

The queue owns:
    - Emission order (append-only list of built records)
    - Cursor state (page number, vertical position in mm)
    - The variable symbol table
    - Asset and missing-asset registries

add_command() is the only way commands enter the stream:
    1. Register variables declared anywhere in the command tree
    2. Validate every variable the command tree depends on
    3. Attach the box ident
    4. Build and append
    5. Harvest assets of the top-level command

ARCHITECTURAL RULE:
    add_command() is all-or-nothing.
    If validation or build fails, nothing is appended and no variable
    registered by that call is kept.

The queue is instance-scoped. One queue per run, never shared.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Optional, Set

from dtpcmd.box_ident import ROLE_CONTENT, ROLE_QUEUE, BoxIdentBuilder
from dtpcmd.command import AbstractCommand, ImageCollector, VariableDependent
from dtpcmd.commands.page import PageMessage
from dtpcmd.commands.variable import AbstractMath, Variable
from dtpcmd.config import QueueConfig
from dtpcmd.errors import CommandError, UndeclaredVariableError

logger = logging.getLogger(__name__)


def _check_number(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a number, got {type(value).__name__}")


def _check_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")


class CommandQueue:
    """Accumulates and validates the commands sent to the renderer."""

    def __init__(self, config: Optional[QueueConfig] = None):
        self.config = config or QueueConfig()
        self.box_idents = BoxIdentBuilder(
            queue_prefix=self.config.queue_ident_prefix,
            content_prefix=self.config.content_ident_prefix,
        )
        self._commands: List[Dict[str, Any]] = []
        self._y_pos: float = 0.0
        self._page_number: int = 0
        self._registered_variables: Set[str] = set()
        self._registered_assets: Dict[int, Dict[str, Any]] = {}
        self._missing_assets: Dict[str, Any] = {"assetIds": {}, "elements": 0}

    # =========================================================================
    # Page cursor
    # =========================================================================

    def get_page_number(self) -> int:
        return self._page_number

    def set_page_number(self, page_number: int) -> CommandQueue:
        """
        Set the page cursor. Handle with care: the queue never moves it
        by itself, callers keep it in step with the GoToPage commands they send.
        """
        _check_int("page_number", page_number)
        self._page_number = page_number
        return self

    def increment_page_number(self, by: int = 1) -> int:
        _check_int("by", by)
        self._page_number += by
        return self._page_number

    # =========================================================================
    # Vertical cursor
    # =========================================================================

    def get_y_pos(self) -> float:
        return self._y_pos

    def set_y_pos(self, value: float, emit: bool = False) -> CommandQueue:
        """
        Set the vertical cursor in mm.

        With `emit`, a Variable command publishing the cursor under the
        reserved y position name is added, so later formulas can use it.
        """
        _check_number("y_pos", value)
        self._y_pos = float(value)
        if emit:
            self._add_command(Variable(self.config.y_position_variable, self._y_pos), ROLE_QUEUE)
        return self

    def increment_y_pos(self, delta: float, emit: bool = False) -> float:
        _check_number("delta", delta)
        self.set_y_pos(self._y_pos + delta, emit)
        return self._y_pos

    # =========================================================================
    # Commands
    # =========================================================================

    def add_command(self, command: AbstractCommand) -> CommandQueue:
        """
        Validate, identify, build and append `command`.

        Raises:
            UndeclaredVariableError: If the command tree reads an undeclared variable
            ValidationError: If the command or one of its components is invalid
        """
        return self._add_command(command, ROLE_CONTENT)

    def _add_command(self, command: AbstractCommand, role: str) -> CommandQueue:
        declared = self._collect_declared_variables(command)
        registered = self._registered_variables | set(declared)
        self._validate_variables(command, registered)

        previous_ident = command.box_ident
        command.set_box_ident(
            self.box_idents.create(command, self._page_number, len(self._commands), role)
        )
        try:
            record = command.build()
        except CommandError:
            command.set_box_ident(previous_ident)
            raise

        new_variables = [name for name in declared if name not in self._registered_variables]
        self._registered_variables = registered
        self._commands.append(record)
        self._register_assets(command)

        if new_variables:
            logger.debug("Registered variables: %s", ", ".join(new_variables))
        logger.debug("Added '%s' command %s on page %d", command.CMD, command.box_ident, self._page_number)
        return self

    def add_page_message(self, message: str, on_page: bool = False) -> CommandQueue:
        return self._add_command(PageMessage(message, on_page), ROLE_QUEUE)

    def get_commands(self) -> List[Dict[str, Any]]:
        """Return built records in the order they were added."""
        return copy.deepcopy(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    # =========================================================================
    # Variables
    # =========================================================================

    def get_registered_variables(self) -> Set[str]:
        return set(self._registered_variables)

    def is_variable_registered(self, name: str) -> bool:
        return name in self._registered_variables

    def _collect_declared_variables(self, command: AbstractCommand) -> List[str]:
        """
        Depth-first pre-order walk collecting declared variable names.

        Declarations are leaves of the walk.
        """
        if isinstance(command, Variable):
            return [command.get_name()]
        if isinstance(command, AbstractMath):
            return [command.get_name()]
        names: List[str] = []
        for component in command.get_components():
            names.extend(self._collect_declared_variables(component))
        return names

    def _validate_variables(self, command: AbstractCommand, registered: Set[str]) -> None:
        missing: List[str] = []
        self._collect_missing_variables(command, registered, missing)
        if missing:
            raise UndeclaredVariableError(missing)

    def _collect_missing_variables(self, command: AbstractCommand, registered: Set[str],
                                   missing: List[str]) -> None:
        if isinstance(command, VariableDependent):
            for name in command.get_dependent_variables():
                if name not in registered and name not in missing:
                    missing.append(name)
        for component in command.get_components():
            self._collect_missing_variables(component, registered, missing)

    # =========================================================================
    # Assets
    # =========================================================================

    def _register_assets(self, command: AbstractCommand) -> None:
        if not isinstance(command, ImageCollector):
            return
        for asset_id, entry in command.get_collected_images().items():
            if asset_id not in self._registered_assets:
                self._registered_assets[asset_id] = copy.deepcopy(entry)

    def get_registered_assets(self) -> Dict[int, Dict[str, Any]]:
        return copy.deepcopy(self._registered_assets)

    def increment_missing_asset_counter(self, asset_id: int) -> None:
        """
        Count one placed element whose asset could not be resolved.

        This never aborts generation.
        """
        _check_int("asset_id", asset_id)
        asset_ids = self._missing_assets["assetIds"]
        asset_ids[asset_id] = asset_ids.get(asset_id, 0) + 1
        self._missing_assets["elements"] += 1
        logger.warning("Missing asset %d (%d occurrences)", asset_id, asset_ids[asset_id])

    def get_missing_assets(self) -> Dict[str, Any]:
        return copy.deepcopy(self._missing_assets)
