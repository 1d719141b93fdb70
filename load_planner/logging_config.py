"""Logging setup for entry points.

The library never configures logging on import; entry points call
configure_logging() once with the observability settings.
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import ObservabilityConfig, get_config

_configured = False


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Apply the observability settings to the root logger.

    Calling this more than once has no further effect.

    Args:
        config: Observability settings, defaults to the application config.
    """
    global _configured
    if _configured:
        return

    config = config or get_config().observability
    logging.basicConfig(
        level=getattr(logging, config.level.upper(), logging.INFO),
        format=config.format,
    )
    _configured = True
