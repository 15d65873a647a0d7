"""
Project settings (constants + small helpers).
Phase coordinates: (x, xp, y, yp, z, zp, 1), positions and momenta in caller units.
"""
from __future__ import annotations

# Run
VALIDATE_ON_IMPORT = False

# Logging (used by entry points only, library modules never configure handlers)
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s  %(levelname)-7s  %(message)s"
LOG_DATEFMT = "%H:%M:%S"

# Phase space geometry
PHASE_DIM = 7           # homogeneous dimension
PHASE_COORDS = 6        # physical coordinates x..zp
HOMOGENEOUS_INDEX = 6
HOMOGENEOUS_VALUE = 1.0
R3_DIM = 3

# Archive
ATTR_DATA = "values"
DATA_LABEL = "PhaseVector"

# Text grammar
TOKEN_DELIMITERS = " ,()"
MIN_PARSE_TOKENS = 6
PARSED_TOKENS = 5       # tokens actually consumed by the parser (x..z)

# Hashing (31-multiplier over 64-bit patterns)
HASH_MULTIPLIER = 31

# Column printing
PRINT_WIDTH = 10
PRINT_DIGITS = 5


def validate_settings() -> None:
    if PHASE_DIM != PHASE_COORDS + 1:
        raise ValueError("PHASE_DIM must be PHASE_COORDS + 1")
    if HOMOGENEOUS_INDEX != PHASE_DIM - 1:
        raise ValueError("HOMOGENEOUS_INDEX must be the last slot")
    if HOMOGENEOUS_VALUE != 1.0:
        raise ValueError("HOMOGENEOUS_VALUE must be 1.0")
    if not ATTR_DATA:
        raise ValueError("ATTR_DATA must be non-empty")
    if not TOKEN_DELIMITERS:
        raise ValueError("TOKEN_DELIMITERS must be non-empty")
    if PARSED_TOKENS > MIN_PARSE_TOKENS:
        raise ValueError("PARSED_TOKENS must be <= MIN_PARSE_TOKENS")
    if MIN_PARSE_TOKENS > PHASE_DIM:
        raise ValueError("MIN_PARSE_TOKENS must be <= PHASE_DIM")
    if PRINT_WIDTH <= 0:
        raise ValueError("PRINT_WIDTH must be > 0")
    if PRINT_DIGITS < 0:
        raise ValueError("PRINT_DIGITS must be >= 0")


if VALIDATE_ON_IMPORT:
    validate_settings()
