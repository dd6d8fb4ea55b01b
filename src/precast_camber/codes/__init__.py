# Camber design provisions
from .base_code import DesignCode
from .pci import PCIHandbook
