"""Camber prediction for precast, pretensioned concrete members (PCI method)."""

from loguru import logger

from .models import (
    CamberInputs, CamberResults, CamberOutcome, CamberValidationError,
    MemberType, OffcutSide, StrandLibrary, StrandPattern, StrandSize,
)
from .codes import DesignCode, PCIHandbook
from .core import CamberEngine, calculate_camber
from .utils.tables import ConfigurationError

__version__ = "0.1.0"

# Silent as a library; the CLI enables output via configure_logging()
logger.disable("precast_camber")
