# usage_example.py
# Minimal usage example for simdcheck.verification.
# This file is not part of the simdcheck package. For reference only.
#
# Two "backends" evaluate the same float32 kernel (a * b + c). The "split"
# backend rounds after the multiply; the "fused" backend rounds once at the
# end. Results may differ in the last place, so the kernel output is recorded
# with a 2 ULP tolerance. Integer results must match exactly.

import sys

import numpy as np

from simdcheck.verification import TestReporter, TestResultsSet, VectorKind, compare_results

_A = np.array([1.1, 2.2, 3.3, 4.4], dtype=np.float32)
_B = np.array([0.3, 0.7, 1.9, 2.9], dtype=np.float32)
_C = np.array([0.5, 0.25, 0.125, 0.0625], dtype=np.float32)


def _fma_split(a, b, c):
    return (a * b).astype(np.float32) + c


def _fma_fused(a, b, c):
    return (a.astype(np.float64) * b + c).astype(np.float32)


def run_test_case(store: TestResultsSet, backend: str) -> None:
    kernel = _fma_fused if backend == "fused" else _fma_split

    # Section 0: floating-point kernel, 2 ULP allowed.
    with store.tolerance(2):
        store.record_array(kernel(_A, _B, _C), __file__, 34)

    # Section 1: integer bookkeeping, exact.
    store.advance_section()
    store.record_values(VectorKind.INT32, [len(_A), int(_A.nbytes)], __file__, 38)


reporter = TestReporter(out=sys.stdout)
results = {}
for backend in ("split", "fused"):
    results[backend] = TestResultsSet("fma_kernel")
    run_test_case(results[backend], backend)

compare_results(results["split"], "split", results["fused"], "fused", reporter)
reporter.report_summary()

# Expected output:
# --------------------------------------------------------------
# COMPARISON RESULT: PASS
# Harness version: 1.0.0
# Checks passed:   2
# Checks failed:   0
# Issues logged:   0

sys.exit(reporter.exit_code())
