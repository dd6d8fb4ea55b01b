"""
Input data model for a camber calculation.

Field types, enum membership and finiteness are checked by Pydantic when the
model is built.  Domain ranges (span > 0, f'c > f'ci, ...) are deliberately
left to :mod:`precast_camber.core.validator` so that every violation can be
reported to the user in one pass.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .strands import StrandPattern


class MemberType(str, Enum):
    """Precast product families produced on the casting beds."""
    BEAM = "beam"
    DOUBLE_TEE = "double-tee"
    HOLLOW_CORE = "hollow-core"
    SINGLE_TEE = "single-tee"
    SOLID_SLAB = "solid-slab"
    WALL_PANEL = "wall-panel"
    STADIA = "stadia"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").title()


class OffcutSide(str, Enum):
    """Which side of a cut-width product was sawn off."""
    L1 = "L1"  # left removed
    L2 = "L2"  # right removed

    @property
    def description(self) -> str:
        return "left removed" if self is OffcutSide.L1 else "right removed"


class CamberInputs(BaseModel):
    """Everything needed to predict camber for one member.

    Units follow plant practice: span in feet, strengths in psi, section
    properties in inches, line loads in lb/ft.
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    span: float = Field(..., description="Simple span in feet")
    member_type: MemberType = MemberType.HOLLOW_CORE
    release_strength: float = Field(..., description="f'ci at detensioning (psi)")
    concrete_strength: float = Field(..., description="28-day f'c (psi)")
    moment_of_inertia: float = Field(..., description="Gross moment of inertia (in^4)")
    dead_load: float = Field(..., description="Self weight (lb/ft)")
    live_load: Optional[float] = Field(None, description="Superimposed live load (lb/ft)")

    centroid_height: Optional[float] = Field(
        None, description="Neutral axis height above the bottom, yb (in)"
    )
    strand_pattern: Optional[StrandPattern] = None
    top_strand_pattern: Optional[StrandPattern] = None
    product_width: Optional[float] = Field(None, description="Finished product width (in)")
    offcut_side: Optional[OffcutSide] = None
    composite_topping: bool = False

    # Carried through to the history layer; never used in the calculation
    project_name: Optional[str] = None
    project_number: Optional[str] = None
    mark_number: Optional[str] = None
    id_number: Optional[str] = None
    notes: Optional[str] = None

    @property
    def span_inches(self) -> float:
        return self.span * 12.0

    @property
    def has_strands(self) -> bool:
        return self.strand_pattern is not None or self.top_strand_pattern is not None
