"""
Document and page flow commands.
"""

from __future__ import annotations

from typing import Optional, Union

from dtpcmd.command import AbstractCommand, ComponentCommand
from dtpcmd.errors import ValidationError

Number = Union[int, float, str]


class OpenDocument(AbstractCommand):
    """
    Opens the document the publication is generated in.

    TYPE_USECURRENT declares the document open in the renderer as target.
    TYPE_TEMPLATE loads the template file `name` to copy elements from.
    """

    CMD = "opendoc"
    AVAILABLE_PARAMS = {
        "type": "",
        "language": "",
        "name": "",
    }

    TYPE_USECURRENT = "usecurrent"
    TYPE_TEMPLATE = "template"

    allowed_types = (TYPE_USECURRENT, TYPE_TEMPLATE)

    def __init__(self, doc_type: str = TYPE_USECURRENT, language: str = "", name: str = ""):
        super().__init__()
        self.set_param("type", doc_type)
        self.set_param("language", language)
        self.set_param("name", name)

    def validate(self) -> None:
        doc_type = self.get_param("type")
        if doc_type not in self.allowed_types:
            raise ValidationError(f"Invalid document type '{doc_type}' in '{self.CMD}' command.")
        if doc_type == self.TYPE_TEMPLATE:
            self.validate_empty_param("name", "template name")


class GoToPage(AbstractCommand):
    """
    Jumps to `page`. With `check_existence` the renderer creates missing pages.

    The queue's page cursor is not touched. Callers keep it in step.
    """

    CMD = "gotopage"
    AVAILABLE_PARAMS = {
        "page": 1,
        "check_existence": True,
    }

    def __init__(self, page: int = 1, check_existence: bool = True):
        super().__init__()
        self.set_param("page", page)
        self.set_param("check_existence", check_existence)

    def validate(self) -> None:
        page = self.get_param("page")
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise ValidationError(f"Invalid page '{page}' in '{self.CMD}' command.")


class PageMessage(AbstractCommand):
    """Message shown in the renderer, optionally attached to the current page."""

    CMD = "pagemessage"
    AVAILABLE_PARAMS = {
        "message": "",
        "onpage": False,
    }

    def __init__(self, message: str = "", on_page: bool = False):
        super().__init__()
        self.set_param("message", message)
        self.set_param("onpage", on_page)

    def validate(self) -> None:
        self.validate_empty_param("message")


class RemoveEmptyLayers(AbstractCommand):
    """Removes all layers without elements. Sent as the last command of a run."""

    CMD = "removeemptylayers"


class CheckNewPage(ComponentCommand):
    """
    Component for placement commands.

    If the placed element ends below `pos` (mm), the renderer moves it
    to the next page at `newpos` (and `newpos_x` if given).
    """

    CMD = "checknewpage"
    MULTIPLE = False
    AVAILABLE_PARAMS = {
        "pos": "",
        "newpos": "",
        "newpos_x": None,
    }

    def __init__(self, max_y_pos: Number = "", new_y_pos: Number = "", new_x_pos: Optional[Number] = None):
        super().__init__()
        self.set_max_y_pos(max_y_pos)
        self.set_new_y_pos(new_y_pos)
        self.set_new_x_pos(new_x_pos)

    def set_max_y_pos(self, max_y_pos: Number) -> CheckNewPage:
        self.set_param("pos", max_y_pos)
        return self

    def set_new_y_pos(self, new_y_pos: Number) -> CheckNewPage:
        self.set_param("newpos", new_y_pos)
        return self

    def set_new_x_pos(self, new_x_pos: Optional[Number]) -> CheckNewPage:
        self.set_param("newpos_x", new_x_pos)
        return self

    def validate(self) -> None:
        self.validate_empty_param("pos", "max y position")
        self.validate_empty_param("newpos", "new y position")
