"""Typed engine configuration built from the tables file.

Nothing here has a built-in default: a coefficient or multiplier that is not
in the tables is a :class:`ConfigurationError`, so results can always be
traced back to a version-controlled table.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .models.strands import StrandLibrary
from .utils.tables import ConfigurationError, load_tables


class ElasticModulusConfig(BaseModel):
    """``Ec = coefficient * fc ** exponent`` with fc and Ec in psi."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    coefficient: float = Field(..., gt=0)
    exponent: float = Field(..., gt=0)
    source: str = ""


class StageMultipliers(BaseModel):
    """Multipliers applied to the elastic components at release."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    prestress: float = Field(..., gt=0)
    self_weight: float = Field(..., gt=0)


class MultiplierSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    erection: StageMultipliers
    final: StageMultipliers


class MultiplierTable(BaseModel):
    model_config = ConfigDict(frozen=True)

    non_composite: MultiplierSet
    composite: MultiplierSet
    source: str = ""

    def for_member(self, composite_topping: bool) -> MultiplierSet:
        return self.composite if composite_topping else self.non_composite


class EngineConfig(BaseModel):
    """Everything the camber engine needs besides the member inputs."""
    model_config = ConfigDict(frozen=True)

    code_name: str = "PCI Design Handbook"
    elastic_modulus: ElasticModulusConfig
    multipliers: MultiplierTable
    cut_width_tolerance: float = Field(0.01, ge=0)

    @classmethod
    def from_tables(cls, tables: dict[str, Any]) -> "EngineConfig":
        """Validate the raw tables mapping into an :class:`EngineConfig`.

        Raises
        ------
        ConfigurationError
            Listing every missing or invalid entry.
        """
        missing = [key for key in ("elastic_modulus", "multipliers") if key not in tables]
        if missing:
            raise ConfigurationError(f"Tables are missing required section(s): {', '.join(missing)}")
        payload = {
            key: tables[key]
            for key in ("code_name", "elastic_modulus", "multipliers", "cut_width_tolerance")
            if key in tables
        }
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise ConfigurationError(_format_errors("engine tables", exc)) from exc

    def with_elastic_modulus(
        self, coefficient: float, exponent: float | None = None
    ) -> "EngineConfig":
        """Copy of this configuration with an overridden Ec formula."""
        try:
            ec = ElasticModulusConfig(
                coefficient=coefficient,
                exponent=self.elastic_modulus.exponent if exponent is None else exponent,
                source="override",
            )
        except ValidationError as exc:
            raise ConfigurationError(_format_errors("elastic modulus override", exc)) from exc
        return self.model_copy(update={"elastic_modulus": ec})


def load_engine_config(path: str | Path | None = None) -> EngineConfig:
    """Read the tables file and build an :class:`EngineConfig`."""
    return EngineConfig.from_tables(load_tables(path))


def load_strand_library(path: str | Path | None = None) -> StrandLibrary:
    """Read the ``strand_library`` section of the tables file."""
    tables = load_tables(path)
    entries = tables.get("strand_library")
    if not entries:
        raise ConfigurationError("Tables are missing the strand_library section")
    try:
        return StrandLibrary(grades=tuple(entries))
    except ValidationError as exc:
        raise ConfigurationError(_format_errors("strand library", exc)) from exc


def _format_errors(what: str, exc: ValidationError) -> str:
    problems = [
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    bullet_list = "\n  - ".join(problems)
    return f"Invalid {what} ({len(problems)} problem(s)):\n  - {bullet_list}"
