"""Tests for configuration and dependency wiring."""

import pytest

from load_planner.config import (
    AppConfig,
    ExtractionConfig,
    MatchingConfig,
    ReferenceDataConfig,
    get_config,
    reset_config,
)
from load_planner.container import Container, get_container, reset_container
from load_planner.domain import ConfigurationError, ReferenceDataError
from load_planner.ports import LoadExtractorPort, TrailerMatcherPort, TrailerRepositoryPort
from load_planner.services import LoadAnalysisService, RoutePricingService


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LP_PERMIT_FALLBACK_FEE", "300")
    monkeypatch.setenv("LP_EXTRACT_ITEM_BONUS", "0.2")
    reset_config()

    config = get_config()

    assert config.permits.fallback_fee == 300
    assert config.extraction.item_bonus == 0.2
    assert get_config() is config


def test_default_data_paths_point_to_bundled_tables():
    data = ReferenceDataConfig()

    assert data.trailers_path.name == "trailers.csv"
    assert data.trailers_path.exists()
    assert data.fee_schedules_path.exists()
    assert data.boundaries_path.exists()


def test_default_container_wires_services():
    container = Container.create_default(AppConfig())

    analysis = container.resolve(LoadAnalysisService)
    pricing = container.resolve(RoutePricingService)

    assert container.resolve(LoadAnalysisService) is analysis
    assert isinstance(pricing, RoutePricingService)
    assert len(container.resolve(TrailerMatcherPort).profiles) == 12


def test_unknown_extraction_strategy():
    config = AppConfig(extraction=ExtractionConfig(default_strategy="spacy"))
    container = Container.create_default(config)

    with pytest.raises(ConfigurationError) as excinfo:
        container.resolve(LoadExtractorPort)

    assert excinfo.value.setting_name == "extraction.default_strategy"


def test_bad_reference_table_surfaces_on_resolution(tmp_path):
    config = AppConfig(data=ReferenceDataConfig(data_dir=tmp_path))
    container = Container.create_default(config)

    with pytest.raises(ReferenceDataError):
        container.resolve(LoadAnalysisService)


def test_registrations_can_be_replaced():
    class StubRepository:
        def load(self):
            return []

        def get(self, trailer_id):
            return None

    container = Container.create_default(AppConfig())
    container.register(TrailerRepositoryPort, StubRepository)

    assert container.resolve(TrailerMatcherPort).profiles == []


def test_unregistered_type_raises():
    with pytest.raises(KeyError):
        Container(config=AppConfig()).resolve(LoadAnalysisService)


def test_global_container_is_reset():
    first = get_container()

    assert get_container() is first
    reset_container()
    assert get_container() is not first


def test_matching_settings_surface():
    assert set(MatchingConfig.model_fields) == {
        "tractor_weight_lbs",
        "escort_width_in",
        "escort_height_in",
        "escort_length_in",
        "superload_width_in",
        "superload_height_in",
        "superload_length_in",
        "superload_weight_lbs",
    }
