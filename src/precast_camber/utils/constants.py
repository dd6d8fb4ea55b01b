"""
Unit conversions and fixed values for camber calculations.
"""

# Length
INCHES_PER_FOOT = 12.0

# Force
LB_PER_KIP = 1000.0

# Span entry fractions (eighths of an inch)
SPAN_FRACTIONS = ["0", "1/8", "1/4", "3/8", "1/2", "5/8", "3/4", "7/8"]

# Span display rounds to the nearest 1/16"
SPAN_DISPLAY_DENOMINATOR = 16

# Offcut-side prompt shown when a cut-width product has no side selected
OFFCUT_SIDE_REQUIRED = "Select which side was removed for cut-width products."
