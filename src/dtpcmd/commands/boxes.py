"""
Placement commands.

Boxes copy a template element into the document at a left/top
position in mm. Positions are either literals or formulas relative
to declared variables.

Placement commands accept components:
    - Variable / MathFormula / Max / Min (publish edges of the placed box)
    - CheckNewPage (move the box to the next page when it overflows)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from dtpcmd.command import AbstractCommand
from dtpcmd.commands.page import CheckNewPage
from dtpcmd.commands.variable import AbstractMath, Variable
from dtpcmd.formulas import is_formula, referenced_variables
from dtpcmd.position import POSITION_LEFT, POSITION_TOP, RelativePosition

Coordinate = Union[int, float, str, None]


class AbstractBox(AbstractCommand):
    """
    Base of all placement commands.

    Adds the position capability (left/top, relative positioning) and
    the target layer. Position logic lives in RelativePosition.
    """

    ALLOWED_COMPONENTS = (Variable, AbstractMath, CheckNewPage)

    def __init__(self, element: str = "", left: Coordinate = 0, top: Coordinate = 0):
        super().__init__()
        self._position = RelativePosition()
        self.init_params(
            {
                "element": "",
                "layer": None,
                "left": 0,
                "top": 0,
                "width": None,
                "height": None,
            }
        )
        self.set_element(element)
        self.set_left(left)
        self.set_top(top)

    def set_element(self, element: str) -> AbstractBox:
        """Name of the template element copied by this box."""
        self.set_param("element", element)
        return self

    def set_layer(self, layer: str) -> AbstractBox:
        """Layer the placed element is put on."""
        self.set_param("layer", layer)
        return self

    def set_width(self, width: Coordinate) -> AbstractBox:
        self.set_param("width", width)
        return self

    def set_height(self, height: Coordinate) -> AbstractBox:
        self.set_param("height", height)
        return self

    def set_size(self, width: Coordinate, height: Coordinate) -> AbstractBox:
        return self.set_width(width).set_height(height)

    # ------------------------------------------------------------------
    # Position
    # ------------------------------------------------------------------

    def set_left(self, left: Coordinate) -> AbstractBox:
        self.set_param(POSITION_LEFT, left)
        self._position.update(POSITION_LEFT, left)
        return self

    def set_top(self, top: Coordinate) -> AbstractBox:
        self.set_param(POSITION_TOP, top)
        self._position.update(POSITION_TOP, top)
        return self

    def set_relative_position(self, axis: str, variable: str, margin: Union[int, float] = 0) -> AbstractBox:
        """
        Place `axis` at `variable` + `margin` mm.

        Raises:
            InvalidAxisError: If `axis` is not left or top
        """
        binding = self._position.bind(axis, variable, margin)
        self.set_param(axis, binding.formula())
        return self

    def set_left_relative(self, variable: str, margin: Union[int, float] = 0) -> AbstractBox:
        return self.set_relative_position(POSITION_LEFT, variable, margin)

    def set_top_relative(self, variable: str, margin: Union[int, float] = 0) -> AbstractBox:
        return self.set_relative_position(POSITION_TOP, variable, margin)

    def is_relative_positioned(self) -> bool:
        return self._position.is_relative_positioned()

    def is_relative_positioned_to_variable(self, variable: str) -> bool:
        return self._position.is_relative_positioned_to_variable(variable)

    def get_relative_position_variables(self) -> Dict[str, str]:
        return self._position.get_variables()

    def get_dependent_variables(self) -> List[str]:
        """
        Variables this box reads: bound axes first, then any other
        `[name]` in formulas set directly on left/top.
        """
        names = self._position.get_dependent_variables()
        for axis in (POSITION_LEFT, POSITION_TOP):
            value = self.get_param(axis)
            if not is_formula(value):
                continue
            for name in referenced_variables(value):
                if name not in names:
                    names.append(name)
        return names

    def validate(self) -> None:
        self.validate_empty_param("element", "template element")


class TextBox(AbstractBox):
    """Places a text frame and fills it with `content`."""

    CMD = "textbox"

    def __init__(self, element: str = "", left: Coordinate = 0, top: Coordinate = 0,
                 width: Coordinate = None, height: Coordinate = None, content: str = ""):
        super().__init__(element, left, top)
        self.init_params({"content": ""})
        self.set_size(width, height)
        self.set_content(content)

    def set_content(self, content: str) -> TextBox:
        self.set_param("content", content)
        return self


class ImageBox(AbstractBox):
    """
    Places an image frame showing asset `asset_id` loaded from `src`.

    Reports the asset through get_collected_images() so the queue can
    register it for download by the renderer.
    """

    CMD = "imagebox"

    FIT_PROPORTIONALLY = "proportionally"
    FIT_FILL = "fill"
    FIT_FRAME_TO_CONTENT = "frame"

    def __init__(self, element: str = "", left: Coordinate = 0, top: Coordinate = 0,
                 width: Coordinate = None, height: Coordinate = None,
                 asset_id: Optional[int] = None, src: str = "", fit: str = FIT_PROPORTIONALLY):
        super().__init__(element, left, top)
        self.init_params(
            {
                "asset_id": None,
                "src": "",
                "fit": self.FIT_PROPORTIONALLY,
            }
        )
        self.set_size(width, height)
        self.set_image(asset_id, src)
        self.set_fit(fit)

    def set_image(self, asset_id: Optional[int], src: str) -> ImageBox:
        self.set_param("asset_id", asset_id)
        self.set_param("src", src)
        return self

    def set_fit(self, fit: str) -> ImageBox:
        self.set_param("fit", fit)
        return self

    def get_collected_images(self) -> Dict[int, Dict[str, Any]]:
        asset_id = self.get_param("asset_id")
        if asset_id is None:
            return {}
        return {asset_id: {"id": asset_id, "src": self.get_param("src")}}

    def validate(self) -> None:
        super().validate()
        self.validate_empty_param("src", "image source")
