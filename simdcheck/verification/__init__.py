# simdcheck/verification/__init__.py
# Recording and comparison of vectors produced by two backends running the
# same test case.
#
# Producer side (code under test, one store per backend):
#   store = TestResultsSet("test_math_fp")
#   store.record_values(VectorKind.FLOAT32, [1.0, 2.0], __file__, 42)
#
# Consumer side (suite driver):
#   reporter = TestReporter(out=sys.stderr)
#   compare_results(store_sse2, "sse2", store_avx2, "avx2", reporter)
#   sys.exit(reporter.exit_code())

from .harness_version import HARNESS_VERSION
from .exceptions import (
    ResultsComparisonError,
    ResultsError,
    ResultsValidationError,
)
from .data_models.vector_kind import VectorKind
from .data_models.recorded_entry import RecordedEntry
from .data_models.comparison_report import (
    FAILURE_TYPES,
    ComparisonIssue,
    ComparisonReport,
)
from .results_set import TestResultsSet
from .ulp_stepper import (
    arrays_equivalent,
    elements_equivalent,
    first_mismatch,
    next_after_ulps,
    step_toward,
)
from .reporter import TestReporter
from .diagnostics import DiagnosticFormatter
from .vector_comparator import VectorComparator, compare_results

__all__ = [
    # Version constants
    "HARNESS_VERSION",
    # Exceptions
    "ResultsError",
    "ResultsValidationError",
    "ResultsComparisonError",
    # Data model
    "VectorKind",
    "RecordedEntry",
    "FAILURE_TYPES",
    "ComparisonIssue",
    "ComparisonReport",
    # Recording
    "TestResultsSet",
    # ULP equivalence
    "step_toward",
    "next_after_ulps",
    "elements_equivalent",
    "first_mismatch",
    "arrays_equivalent",
    # Reporting and comparison
    "TestReporter",
    "DiagnosticFormatter",
    "VectorComparator",
    "compare_results",
]
