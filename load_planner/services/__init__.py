"""Services layer - Application orchestration.

This module contains the application services that orchestrate
the engines to fulfill the two use cases.

Available services:
- LoadAnalysisService: Extraction, validation and trailer matching
- RoutePricingService: Boundary resolution and permit pricing
"""

from .load_analysis import LoadAnalysisService
from .route_pricing import RoutePricingService, format_permit_summary

__all__ = ["LoadAnalysisService", "RoutePricingService", "format_permit_summary"]
