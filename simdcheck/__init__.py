# simdcheck/__init__.py
# Cross-backend test-vector recording and comparison.
#
# Canonical import:
#   from simdcheck.verification import TestResultsSet, TestReporter, compare_results

from simdcheck.verification.harness_version import HARNESS_VERSION

__version__ = HARNESS_VERSION
