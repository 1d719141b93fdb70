"""Permit adapters - Implementations of the permit pricing port.

Available implementations:
- SchedulePermitPricer: Static per-jurisdiction fee schedules with fallback
"""

from .schedule_pricer import SchedulePermitPricer

__all__ = ["SchedulePermitPricer"]
