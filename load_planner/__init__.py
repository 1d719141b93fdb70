"""Top-level package for the Load Planner decision core.

The package turns an unstructured freight request into a structured
load, ranks the trailer configurations able to carry it, splits a
route into per-jurisdiction distances and prices the oversize/overweight
permits and escorts that route requires.

Entry points live in :mod:`load_planner.pipeline`; the engines are
wired together by :mod:`load_planner.container`.
"""

__version__ = "0.1.0"
