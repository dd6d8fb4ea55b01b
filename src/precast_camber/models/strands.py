"""
Strand pattern and strand library data models.

A strand pattern is owned by the plant's pattern library; the engine only
reads an immutable snapshot of it.  Shape invariants (counts agree with the
coordinate list, grade counts agree with the per-size counts) are enforced at
construction so a corrupt pattern never reaches the calculation.
"""

import math
import re
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class StrandSize(str, Enum):
    """Nominal seven-wire strand sizes stocked by the plant."""
    SIZE_3_8 = "3/8"
    SIZE_1_2 = "1/2"
    SIZE_0_6 = "0.6"

    @property
    def diameter(self) -> float:
        """Nominal diameter in inches."""
        return _SIZE_DIAMETERS[self.value]


_SIZE_DIAMETERS = {"3/8": 0.375, "1/2": 0.5, "0.6": 0.6}

# Storage payload field holding the strand count of each size
_PAYLOAD_COUNT_KEYS = {
    StrandSize.SIZE_3_8: "strand_3_8",
    StrandSize.SIZE_1_2: "strand_1_2",
    StrandSize.SIZE_0_6: "strand_0_6",
}

# Pattern labels look like "101-75": pattern number, then pulling force %
_PATTERN_LABEL_RE = re.compile(r"^\s*[^-]+-\s*(\d+(?:\.\d+)?)\s*$")


class StrandPosition(str, Enum):
    """Where a pattern's strands sit in the section."""
    TOP = "Top"
    BOTTOM = "Bottom"
    BOTH = "Both"


class StrandCoordinate(BaseModel):
    """Location of one strand, measured from the bottom-left corner (inches)."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    size: StrandSize
    order: int = 0
    x: float
    y: float


class StrandGrade(BaseModel):
    """One strand library entry, e.g. 1/2" Grade 270."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str
    size: StrandSize
    grade: str
    diameter: float = Field(..., gt=0, description="Nominal diameter in inches")
    area: float = Field(..., gt=0, description="Strand area in in^2")
    elastic_modulus: float = Field(..., gt=0, description="Strand modulus in ksi")
    breaking_strength: float = Field(..., gt=0, description="Minimum breaking strength in kips")

    @field_validator("grade", mode="before")
    @classmethod
    def _grade_as_text(cls, value: Any) -> str:
        # YAML reads an unquoted 270 as an int
        return str(value).strip()


class StrandLibrary(BaseModel):
    """Read-only snapshot of the plant's strand grade table."""
    model_config = ConfigDict(frozen=True)

    grades: Tuple[StrandGrade, ...]

    def grades_for(self, size: StrandSize) -> Tuple[StrandGrade, ...]:
        """All grades configured for *size*, in library order."""
        return tuple(g for g in self.grades if g.size == StrandSize(size))

    def first_grade(self, size: StrandSize) -> Optional[StrandGrade]:
        """Fallback grade for a size whose pattern does not name one."""
        matches = self.grades_for(size)
        return matches[0] if matches else None

    def lookup(self, size: StrandSize, grade: str) -> Optional[StrandGrade]:
        label = str(grade).strip()
        for entry in self.grades_for(size):
            if entry.grade == label:
                return entry
        return None


class StrandPattern(BaseModel):
    """Snapshot of a saved strand pattern.

    ``counts_by_size`` is the declared number of strands of each size;
    ``grade_counts`` optionally splits those counts by grade label;
    ``coordinates`` lists every strand's position.
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str = ""
    pattern_id: str
    position: StrandPosition = StrandPosition.BOTTOM
    counts_by_size: Dict[StrandSize, int] = Field(default_factory=dict)
    grade_counts: Dict[StrandSize, Dict[str, int]] = Field(default_factory=dict)
    coordinates: Tuple[StrandCoordinate, ...] = ()
    total_area: Optional[float] = Field(None, ge=0)
    pulling_force_percent: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def _pulling_force_default(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("pulling_force_percent") is None:
            percent = pulling_force_from_label(str(data.get("pattern_id", "")))
            if percent is not None:
                data = {**data, "pulling_force_percent": percent}
        return data

    @model_validator(mode="after")
    def _check_pattern(self) -> "StrandPattern":
        for size, count in self.counts_by_size.items():
            if count < 0:
                raise ValueError(f"Strand count for {size.value}\" cannot be negative ({count})")

        if self.coordinates:
            placed: Dict[StrandSize, int] = {}
            for coord in self.coordinates:
                placed[coord.size] = placed.get(coord.size, 0) + 1
            for size in StrandSize:
                declared = self.counts_by_size.get(size, 0)
                if placed.get(size, 0) != declared:
                    raise ValueError(
                        f"Pattern {self.pattern_id}: {placed.get(size, 0)} coordinates "
                        f"for {size.value}\" strands but {declared} declared"
                    )

        for size, grades in self.grade_counts.items():
            if any(n < 0 for n in grades.values()):
                raise ValueError(f"Grade counts for {size.value}\" strands cannot be negative")
            if grades and sum(grades.values()) != self.counts_by_size.get(size, 0):
                raise ValueError(
                    f"Pattern {self.pattern_id}: grade counts for {size.value}\" strands "
                    f"sum to {sum(grades.values())}, expected {self.counts_by_size.get(size, 0)}"
                )

        if self.pulling_force_percent is None:
            raise ValueError(
                f"Pattern {self.pattern_id}: pulling force percent is required"
            )

        if not (0 < self.pulling_force_percent <= 100):
            raise ValueError(
                f"Pattern {self.pattern_id}: pulling force must be between 0 and 100 "
                f"(got {self.pulling_force_percent})"
            )
        return self

    @property
    def strand_count(self) -> int:
        return sum(self.counts_by_size.values())

    @property
    def full_width(self) -> Optional[float]:
        """Widest strand x-coordinate, or None when no coordinates are stored."""
        if not self.coordinates:
            return None
        return max(c.x for c in self.coordinates)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "StrandPattern":
        """Build a pattern from the pattern store's camelCase payload.

        Malformed coordinates (unknown size, non-numeric position) and
        zero or negative grade counts are dropped, matching how the store
        normalises submissions.  Per-size counts missing from the payload are
        the sum of that size's grade counts.  A non-integer ``order`` falls
        back to the coordinate's position in the list.
        """
        coordinates = []
        for index, raw in enumerate(payload.get("strandCoordinates") or []):
            if not isinstance(raw, dict):
                continue
            size = str(raw.get("size", "")).strip()
            if size not in _SIZE_DIAMETERS:
                continue
            try:
                x = float(raw.get("x"))
                y = float(raw.get("y"))
            except (TypeError, ValueError):
                continue
            if not (math.isfinite(x) and math.isfinite(y)):
                continue
            order = raw.get("order")
            if isinstance(order, float) and order.is_integer():
                order = int(order)
            if isinstance(order, bool) or not isinstance(order, int):
                order = index
            coordinates.append(StrandCoordinate(
                size=StrandSize(size),
                order=order,
                x=x,
                y=y,
            ))

        grade_counts: Dict[StrandSize, Dict[str, int]] = {}
        for size, grades in (payload.get("strandGradeCounts") or {}).items():
            if size not in _SIZE_DIAMETERS or not isinstance(grades, dict):
                continue
            normalized = {}
            for label, raw_count in grades.items():
                try:
                    count = float(raw_count)
                except (TypeError, ValueError):
                    continue
                if not str(label).strip() or not math.isfinite(count) or count <= 0:
                    continue
                normalized[str(label).strip()] = int(count)
            if normalized:
                grade_counts[StrandSize(size)] = normalized

        counts: Dict[StrandSize, int] = {}
        for size, key in _PAYLOAD_COUNT_KEYS.items():
            if payload.get(key) is not None:
                counts[size] = int(payload[key])
            else:
                counts[size] = sum(grade_counts.get(size, {}).values())

        return cls(
            id=str(payload.get("id", "")),
            pattern_id=str(payload.get("patternId", "")).strip(),
            position=payload.get("position") or StrandPosition.BOTTOM,
            counts_by_size=counts,
            grade_counts=grade_counts,
            coordinates=tuple(coordinates),
            total_area=payload.get("totalArea"),
            pulling_force_percent=payload.get("pullingForcePercent"),
        )


def pulling_force_from_label(pattern_id: str) -> Optional[float]:
    """Pulling force percent encoded in a pattern label such as ``"101-75"``."""
    match = _PATTERN_LABEL_RE.match(pattern_id or "")
    if not match:
        return None
    return float(match.group(1))
