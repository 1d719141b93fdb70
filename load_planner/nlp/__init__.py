"""Natural language processing components for the Load Planner.

This subpackage groups the heuristic extraction of structured load
data (dimensions, weight, itemized cargo, shipment details) from
free-text freight requests.
"""

from .extract_load import extract_items, extract_load, validate_parsed_load

__all__ = ["extract_load", "extract_items", "validate_parsed_load"]
