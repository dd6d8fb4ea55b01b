"""
Abstract base class for camber design provisions.
Enables switching between handbook editions or plant-calibrated tables.
"""

from abc import ABC, abstractmethod
from typing import Tuple

from precast_camber.config import MultiplierSet


class DesignCode(ABC):
    """
    Abstract base class for camber provisions.

    Purpose:
    - Define the interface the camber engine calculates against
    - Keep every empirical coefficient out of the algorithm itself
    - Centralize source references for audit
    """

    @property
    @abstractmethod
    def code_name(self) -> str:
        """Return the code name/edition."""
        pass

    @abstractmethod
    def get_elastic_modulus_parameters(self) -> Tuple[float, float]:
        """Return (coefficient, exponent) of the Ec formula, psi units."""
        pass

    @abstractmethod
    def get_multipliers(self, composite_topping: bool) -> MultiplierSet:
        """Return the erection and final long-time multipliers."""
        pass

    @abstractmethod
    def get_cut_width_tolerance(self) -> float:
        """Return the width difference (in) below which a product is not cut."""
        pass
