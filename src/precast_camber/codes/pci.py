"""
PCI Design Handbook provisions for camber of pretensioned members.

Key provisions:
- Elastic modulus of concrete from compressive strength (ACI 318 form)
- Table 5.8.2: Long-time camber/deflection multipliers (erection and final,
  with and without composite topping)

The numeric values are read from the tables file; this class only exposes them
through the :class:`DesignCode` interface.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

from precast_camber.config import EngineConfig, MultiplierSet, load_engine_config
from .base_code import DesignCode


class PCIHandbook(DesignCode):
    """Camber provisions backed by an :class:`EngineConfig`."""

    def __init__(self, config: EngineConfig):
        self.config = config

    @classmethod
    def from_tables(cls, path: Optional[Union[str, Path]] = None) -> "PCIHandbook":
        """Build from a tables file (packaged default when *path* is None)."""
        return cls(load_engine_config(path))

    @property
    def code_name(self) -> str:
        return self.config.code_name

    def get_elastic_modulus_parameters(self) -> Tuple[float, float]:
        ec = self.config.elastic_modulus
        return ec.coefficient, ec.exponent

    def get_multipliers(self, composite_topping: bool) -> MultiplierSet:
        """
        Multipliers per Table 5.8.2.

        Without topping the final stage uses the larger growth factors;
        with composite topping the topping stiffens the section and the final
        prestress/self-weight factors drop.
        """
        return self.config.multipliers.for_member(composite_topping)

    def get_cut_width_tolerance(self) -> float:
        return self.config.cut_width_tolerance

    def with_elastic_modulus(
        self, coefficient: float, exponent: Optional[float] = None
    ) -> "PCIHandbook":
        """Same provisions with an overridden Ec coefficient (and exponent)."""
        return PCIHandbook(self.config.with_elastic_modulus(coefficient, exponent))
