"""
Desktop-Publishing Command Stream (dtpcmd) Package

Builds the ordered, validated stream of commands an external layout
renderer consumes to assemble multi-page publications.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - How the renderer evaluates formulas or lays out boxes
    - Network transport
    - CMS content loading

This package defines the COMMAND STREAM only.

Callers decide WHAT to place. The queue guarantees the order,
the variable dependencies and the identity of every emitted command.
"""

__version__ = "0.1.0"
