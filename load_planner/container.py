"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It allows registering and resolving dependencies for the application.

Design principles:
1. No magic - explicit registration and resolution
2. Testable - easy to swap implementations and reference tables
3. Lazy loading - adapters instantiated on first use
4. Thread-safe - for web server contexts
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config
from .domain.errors import ConfigurationError


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        service = container.resolve(LoadAnalysisService)

        # Testing
        container = Container()
        container.register(TrailerRepositoryPort, lambda: StubRepository())
        repository = container.resolve(TrailerRepositoryPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)
            self._singletons.pop(port_type, None)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Args:
            port_type: The type to resolve.

        Returns:
            An instance of the requested type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Clear all cached singletons.

        Call this in tests to ensure fresh instances.
        """
        with self._lock:
            self._singletons.clear()

    def clear_all(self) -> None:
        """Clear all registrations and singletons."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Reference repositories are registered as singletons; the engines
        load their tables through them on first resolution, so a bad
        table surfaces as ReferenceDataError at that point.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.

        Raises:
            ConfigurationError: If the configured extraction strategy is
                unknown (raised when the extractor is resolved).
        """
        from .adapters.geo import PolygonBoundaryResolver
        from .adapters.matching import ConstraintTrailerMatcher
        from .adapters.nlp import RuleBasedLoadExtractor
        from .adapters.permits import SchedulePermitPricer
        from .adapters.reference import (
            CSVTrailerRepository,
            GeoJSONBoundaryRepository,
            JSONFeeScheduleRepository,
        )
        from .ports.extraction import LoadExtractorPort
        from .ports.geo import BoundaryResolverPort
        from .ports.matching import TrailerMatcherPort
        from .ports.permits import PermitPricerPort
        from .ports.reference import (
            BoundaryRepositoryPort,
            FeeScheduleRepositoryPort,
            TrailerRepositoryPort,
        )
        from .services import LoadAnalysisService, RoutePricingService

        config = config or get_config()
        container = cls(config=config)

        # Reference tables
        container.register(
            TrailerRepositoryPort,
            lambda: CSVTrailerRepository(config.data),
        )
        container.register(
            FeeScheduleRepositoryPort,
            lambda: JSONFeeScheduleRepository(config.data),
        )
        container.register(
            BoundaryRepositoryPort,
            lambda: GeoJSONBoundaryRepository(config.data),
        )

        # Extractor based on config
        def create_load_extractor() -> LoadExtractorPort:
            strategy = config.extraction.default_strategy
            if strategy == "rule_based":
                return RuleBasedLoadExtractor(config.extraction)
            raise ConfigurationError(
                f"Unknown extraction strategy: {strategy}",
                setting_name="extraction.default_strategy",
                expected_type="rule_based",
            )

        container.register(LoadExtractorPort, create_load_extractor)

        # Engines
        container.register(
            TrailerMatcherPort,
            lambda: ConstraintTrailerMatcher(
                profiles=container.resolve(TrailerRepositoryPort).load(),
                config=config.matching,
            ),
        )
        container.register(
            BoundaryResolverPort,
            lambda: PolygonBoundaryResolver(
                boundaries=container.resolve(BoundaryRepositoryPort).load(),
            ),
        )
        container.register(
            PermitPricerPort,
            lambda: SchedulePermitPricer(
                schedules=container.resolve(FeeScheduleRepositoryPort).load(),
                config=config.permits,
            ),
        )

        # Services
        container.register(
            LoadAnalysisService,
            lambda: LoadAnalysisService(
                extractor=container.resolve(LoadExtractorPort),
                matcher=container.resolve(TrailerMatcherPort),
                config=config.extraction,
            ),
        )
        container.register(
            RoutePricingService,
            lambda: RoutePricingService(
                resolver=container.resolve(BoundaryResolverPort),
                pricer=container.resolve(PermitPricerPort),
            ),
        )

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container.

    Returns:
        The default Container instance (creates one if needed).
    """
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container.

    Call this in tests to ensure a fresh container.
    """
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None
