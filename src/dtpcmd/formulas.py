"""
Formula helpers for relative positioning and derived variables.

A formula is any string value starting with `=[`. Formulas are
passed to the renderer verbatim.

ARCHITECTURAL RULE:
    No arithmetic is ever performed on a formula here.
    Evaluation belongs to the renderer.

    This module only:
        - Detects formulas
        - Renders relative references (`=[name] + margin`)
        - Extracts the variable names a formula reads
"""

import re
from typing import Any, List, Union

FORMULA_PREFIX = "=["

_REFERENCE_RE = re.compile(r"\[([^\[\]]+)\]")


def is_formula(value: Any) -> bool:
    """Return True if `value` is a formula string."""
    return isinstance(value, str) and value.startswith(FORMULA_PREFIX)


def format_margin(margin: Union[int, float]) -> str:
    """
    Render a margin for a relative formula.

    The sign is kept as given (`-3` renders as `-3`, so the formula
    reads `=[x] + -3`). Integral floats drop their fractional part.
    """
    if isinstance(margin, float) and margin.is_integer():
        return str(int(margin))
    return str(margin)


def relative_formula(variable: str, margin: Union[int, float] = 0) -> str:
    """
    Build the formula placing a value relative to `variable`.

    Example:
        relative_formula("GENERATED_AT", 3) -> "=[GENERATED_AT] + 3"
    """
    return f"=[{variable}] + {format_margin(margin)}"


def referenced_variables(formula: Any) -> List[str]:
    """
    Return `[name]` references found in `formula`, first occurrence order.

    Non-string values reference nothing.
    """
    if not isinstance(formula, str):
        return []
    names: List[str] = []
    for match in _REFERENCE_RE.finditer(formula):
        name = match.group(1).strip()
        if name and name not in names:
            names.append(name)
    return names
