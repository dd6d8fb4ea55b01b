# Data models for precast camber calculations
from .strands import (
    StrandSize, StrandPosition, StrandCoordinate, StrandGrade,
    StrandLibrary, StrandPattern, pulling_force_from_label
)
from .inputs import CamberInputs, MemberType, OffcutSide
from .outputs import (
    CalculationStep, CamberResults, CamberOutcome, CamberValidationError
)
