# simdcheck/verification/data_models/comparison_report.py
# ComparisonIssue and ComparisonReport data classes, and the failure type
# registry used by the vector comparator and the reporter.

from dataclasses import dataclass
from typing import Dict


# ---------------------------------------------------------------------------
# FAILURE TYPE REGISTRY
# ---------------------------------------------------------------------------
# Severity:
#   FATAL -- the two stores cannot be compared further (whole pass, or the
#            current section for SECTION_LENGTH_MISMATCH).
#   ERROR -- a well-aligned entry pair disagrees; comparison continues.

SEVERITY_FATAL: str = "FATAL"
SEVERITY_ERROR: str = "ERROR"

FAILURE_TYPES: Dict[str, str] = {
    "NAME_MISMATCH":            SEVERITY_FATAL,
    "SECTION_COUNT_MISMATCH":   SEVERITY_FATAL,
    "SECTION_LENGTH_MISMATCH":  SEVERITY_FATAL,
    "ENTRY_IDENTITY_MISMATCH":  SEVERITY_FATAL,
    "VECTOR_MISMATCH":          SEVERITY_ERROR,
}


@dataclass(frozen=True)
class ComparisonIssue:
    """
    Record of a single issue raised while comparing two results sets.

    Fields:
      failure_type -- Key from FAILURE_TYPES.
      test_case    -- Test case name of side A.
      label_a      -- Backend label of side A (e.g. "sse2").
      label_b      -- Backend label of side B.
      file         -- Source file for context, or "" when unknown.
      line         -- Source line for context, or 0 when not applicable.
      section      -- Section index, or -1 when not applicable.
      index        -- Entry index within the section, or -1.
      seq          -- Sequence number of side A's entry, or 0.
      detail       -- Human-readable one-line summary.
    """
    failure_type: str
    test_case:    str
    label_a:      str
    label_b:      str
    file:         str = ""
    line:         int = 0
    section:      int = -1
    index:        int = -1
    seq:          int = 0
    detail:       str = ""

    @property
    def severity(self) -> str:
        return FAILURE_TYPES[self.failure_type]

    @property
    def is_fatal(self) -> bool:
        return self.severity == SEVERITY_FATAL


@dataclass(frozen=True)
class ComparisonReport:
    """
    Outcome of one compare_results() invocation.

    Fields:
      passed         -- True iff no check failed.
      checks_passed  -- Number of entry pairs found equivalent.
      checks_failed  -- Number of failed checks (fatal and value mismatches).
      issues         -- Tuple of ComparisonIssue in the order reported.
      aborted        -- True if a fatal condition ended the pass early.
      skipped        -- True if the comparison was vacuously skipped
                        because one side recorded nothing.
    """
    passed:        bool
    checks_passed: int
    checks_failed: int
    issues:        tuple    # tuple of ComparisonIssue, immutable
    aborted:       bool = False
    skipped:       bool = False
