"""Shared fixtures: an explicit engine configuration and strand library.

Tests build their own tables instead of reading the packaged file so the
expected numbers do not move when the shipped tables are revised.
"""

import pytest

from precast_camber.codes.pci import PCIHandbook
from precast_camber.config import EngineConfig
from precast_camber.core.camber_engine import CamberEngine
from precast_camber.models import (
    CamberInputs, StrandCoordinate, StrandGrade, StrandLibrary, StrandPattern, StrandSize
)


TABLES = {
    "code_name": "PCI Design Handbook (test tables)",
    "elastic_modulus": {"coefficient": 57000.0, "exponent": 0.5, "source": "test"},
    "multipliers": {
        "source": "test",
        "non_composite": {
            "erection": {"prestress": 1.80, "self_weight": 1.85},
            "final": {"prestress": 2.45, "self_weight": 2.70},
        },
        "composite": {
            "erection": {"prestress": 1.80, "self_weight": 1.85},
            "final": {"prestress": 2.20, "self_weight": 2.40},
        },
    },
    "cut_width_tolerance": 0.01,
}


def _grade(size, grade, area, strength):
    return StrandGrade(
        name=f'{size}" Grade {grade}',
        size=size,
        grade=grade,
        diameter=StrandSize(size).diameter,
        area=area,
        elastic_modulus=28600,
        breaking_strength=strength,
    )


def full_width_pattern(pattern_id="101-75", y=1.75, count=6, spacing=8.0):
    """Six 1/2" Grade 270 strands at x = 4, 12, ..., 44 in."""
    coords = tuple(
        StrandCoordinate(size="1/2", order=i + 1, x=4.0 + spacing * i, y=y)
        for i in range(count)
    )
    return StrandPattern(
        pattern_id=pattern_id,
        counts_by_size={"1/2": count},
        grade_counts={"1/2": {"270": count}},
        coordinates=coords,
    )


@pytest.fixture(scope="module")
def engine_config():
    return EngineConfig.from_tables(TABLES)


@pytest.fixture(scope="module")
def code(engine_config):
    return PCIHandbook(engine_config)


@pytest.fixture(scope="module")
def library():
    return StrandLibrary(grades=(
        _grade("3/8", "250", 0.080, 20.0),
        _grade("1/2", "250", 0.144, 36.0),
        _grade("3/8", "270", 0.085, 23.0),
        _grade("1/2", "270", 0.153, 41.3),
        _grade("0.6", "270", 0.217, 58.6),
    ))


@pytest.fixture(scope="module")
def engine(code, library):
    return CamberEngine(code, library)


@pytest.fixture
def pattern():
    return full_width_pattern()


@pytest.fixture
def base_inputs():
    """40 ft hollow-core plank, 3500/9000 psi, I = 12000 in^4, 450 lb/ft."""
    return CamberInputs(
        span=40.0,
        member_type="hollow-core",
        release_strength=3500.0,
        concrete_strength=9000.0,
        moment_of_inertia=12000.0,
        dead_load=450.0,
    )


def updated(inputs, changes):
    """Re-validated copy of *inputs* with *changes* applied."""
    return CamberInputs.model_validate({**inputs.model_dump(), **changes})
