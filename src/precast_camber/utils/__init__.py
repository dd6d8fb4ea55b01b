# Shared helpers: tables loading, measurements, constants
from .tables import ConfigurationError, load_tables, DEFAULT_TABLES_PATH
from .measurements import (
    parse_measurement, combine_span_parts,
    format_span_display, format_inches_fraction
)
