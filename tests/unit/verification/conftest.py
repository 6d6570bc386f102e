import io

import pytest

from simdcheck.verification import TestReporter, TestResultsSet, VectorKind


@pytest.fixture
def sink() -> io.StringIO:
    """Text sink capturing everything the reporter writes."""
    return io.StringIO()


@pytest.fixture
def reporter(sink: io.StringIO) -> TestReporter:
    return TestReporter(out=sink)


@pytest.fixture
def float_pair():
    """
    Two stores for test case "math_fp", each with one FLOAT32 entry recorded
    at math.cc:10. Side A holds 1.0; side B holds 1.0000001 (one ULP above).
    Returned as a factory so the caller chooses the tolerance.
    """
    def _make(tolerance: int = 0):
        a = TestResultsSet("math_fp")
        b = TestResultsSet("math_fp")
        a.set_tolerance(tolerance)
        b.set_tolerance(tolerance)
        a.record_values(VectorKind.FLOAT32, [1.0], "math.cc", 10)
        b.record_values(VectorKind.FLOAT32, [1.0000001], "math.cc", 10)
        return a, b
    return _make
