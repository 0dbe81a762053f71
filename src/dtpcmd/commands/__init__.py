"""Concrete renderer commands (variables, page flow, placement boxes)."""

from .boxes import AbstractBox, ImageBox, TextBox
from .page import CheckNewPage, GoToPage, OpenDocument, PageMessage, RemoveEmptyLayers
from .variable import AbstractMath, MathFormula, Max, Min, Variable

__all__ = [
    "AbstractBox",
    "AbstractMath",
    "CheckNewPage",
    "GoToPage",
    "ImageBox",
    "MathFormula",
    "Max",
    "Min",
    "OpenDocument",
    "PageMessage",
    "RemoveEmptyLayers",
    "TextBox",
    "Variable",
]
