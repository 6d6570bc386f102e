# simdcheck/utils/constants.py
# Configuration constants for recording, comparison and diagnostics.
#
# Standard import pattern:
#   from simdcheck.utils.constants import (
#       SEPARATOR_LINE,
#       UNKNOWN_FILE,
#       DEFAULT_TOLERANCE_ULP,
#       FIRST_SEQUENCE_NUMBER,
#   )
#
# No config files. No environment variables. Changing any value below
# changes diagnostic output and requires a HARNESS_VERSION increment.


# ---------------------------------------------------------------------------
# RECORDING DEFAULTS
# ---------------------------------------------------------------------------

DEFAULT_TOLERANCE_ULP:  int  = 0       # exact comparison
DEFAULT_ZERO_EQUAL:     bool = False   # +0.0 and -0.0 are distinct
FIRST_SEQUENCE_NUMBER:  int  = 1       # sequence numbers are 1-based
FIRST_SECTION_INDEX:    int  = 0


# ---------------------------------------------------------------------------
# DIAGNOSTIC LAYOUT
# ---------------------------------------------------------------------------

SEPARATOR_CHAR:   str = "-"
SEPARATOR_WIDTH:  int = 62
SEPARATOR_LINE:   str = SEPARATOR_CHAR * SEPARATOR_WIDTH

UNKNOWN_FILE:     str = "<unknown>"

# Prefixes for the two sides of a vector dump.
SIDE_A_PREFIX:    str = "A : "
SIDE_B_PREFIX:    str = "B : "

# Element separator inside a rendered vector: "[ x ; y ; z ]".
ELEMENT_SEPARATOR: str = " ; "


# ---------------------------------------------------------------------------
# REPORTER EXIT CODES
# ---------------------------------------------------------------------------
# Provided for the external driver. The comparison engine itself never exits.

EXIT_PASS: int = 0
EXIT_FAIL: int = 1
