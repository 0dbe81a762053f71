"""
Rendering context — the lifecycle of one publication run.

A RenderingContext is created at run start, threaded through the
content-producing code, read out at run end and discarded. It replaces
project-wide state: nothing here is global or shared between runs.

Typical use:

    def build(context):
        context.start_rendering()
        context.set_box_ident_reference(str(product_id))
        context.add_command(TextBox("title", 10, 20, content="..."))
        context.stop_rendering()

    commands = RenderingContext(template="catalog.indd").run(build)
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from dtpcmd.command import AbstractCommand
from dtpcmd.commands.page import GoToPage, OpenDocument, RemoveEmptyLayers
from dtpcmd.commands.variable import Variable
from dtpcmd.config import QueueConfig
from dtpcmd.queue import CommandQueue

logger = logging.getLogger(__name__)

GENERATED_AT_VARIABLE = "GENERATED_AT"


class RenderingContext:
    """
    Per-run state around one CommandQueue.

    Properties:
        config: Run configuration
        template: Template document loaded by start_rendering()
        language: Language the publication is rendered in
        queue: The run's command queue
    """

    def __init__(self, config: Optional[QueueConfig] = None, template: str = "", language: str = ""):
        self.config = config or QueueConfig()
        self.template = template
        self.language = language
        self.queue = CommandQueue(self.config)
        self._generation_active = False
        self._pre_messages: List[str] = []

    def run(self, build_publication: Callable[[RenderingContext], Any]) -> List[Dict[str, Any]]:
        """Call `build_publication` with this context and return the built commands."""
        self._generation_active = True
        logger.info("Generating publication from template '%s'", self.template)
        build_publication(self)
        commands = self.queue.get_commands()
        logger.info("Generated %d commands", len(commands))
        return commands

    def is_generation_active(self) -> bool:
        return self._generation_active

    def add_command(self, command: AbstractCommand) -> RenderingContext:
        self.queue.add_command(command)
        return self

    # =========================================================================
    # Box ident reference
    # =========================================================================

    def get_box_ident_reference(self) -> str:
        return self.queue.box_idents.reference

    def set_box_ident_reference(self, reference: str) -> None:
        """Tie the following commands to CMS content (typically an object id)."""
        self.queue.box_idents.set_reference(reference)

    def append_to_box_ident_reference(self, reference: str) -> None:
        self.queue.box_idents.append_to_reference(reference)

    def get_box_ident_generic_postfix(self) -> str:
        return self.queue.box_idents.generic_postfix

    def set_box_ident_generic_postfix(self, postfix: str) -> None:
        self.queue.box_idents.set_generic_postfix(postfix)

    # =========================================================================
    # Lifecycle commands
    # =========================================================================

    def start_rendering(self, open_first_page: bool = True, generated_at: Optional[int] = None) -> RenderingContext:
        """
        Open the target document, load the template, publish GENERATED_AT
        and optionally jump to the first page.
        """
        if generated_at is None:
            generated_at = int(time.time())
        self.add_command(OpenDocument(OpenDocument.TYPE_USECURRENT, self.language))
        self.add_command(OpenDocument(OpenDocument.TYPE_TEMPLATE, self.language, self.template))
        self.add_command(Variable(GENERATED_AT_VARIABLE, generated_at))
        if open_first_page:
            self.queue.set_page_number(1)
            self.add_command(GoToPage(1, False))
        return self

    def stop_rendering(self) -> RenderingContext:
        self.add_command(RemoveEmptyLayers())
        return self

    # =========================================================================
    # Messages
    # =========================================================================

    def add_pre_message(self, message: str) -> None:
        """Collect a message shown to the user before the generated commands run."""
        if message not in self._pre_messages:
            self._pre_messages.append(message)

    def get_pre_messages(self) -> List[str]:
        return list(self._pre_messages)
