"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces:
- Load extraction (ordered regex rules)
- Trailer matching (legal-limit constraints)
- Boundary resolution (jurisdiction polygons)
- Permit pricing (static fee schedules)
- Reference tables (CSV, JSON and GeoJSON files)
"""
