# simdcheck/verification/reporter.py
# TestReporter -- pass/fail tally, text output sink and issue log.
#
# RPT-01: add_result() is the only way checks are tallied.
# RPT-02: Writes never raise past the reporter. If the sink fails (closed
#         stream, I/O error) the text goes to sys.stderr instead.
# RPT-03: The reporter never exits the process. Translating a failing tally
#         into an exit status is left to the driver (see exit_code()).
# RPT-04: Every reported issue is kept in an in-memory log. Issue ids are
#         derived from a monotonic counter. No timestamps, no file I/O.

import sys
from typing import List, Optional, TextIO, Tuple

from simdcheck.utils.constants import EXIT_FAIL, EXIT_PASS, SEPARATOR_LINE
from simdcheck.verification.data_models.comparison_report import ComparisonIssue
from simdcheck.verification.harness_version import HARNESS_VERSION


def _make_issue_id(counter: int) -> str:
    """Format: "ISS-{counter:08d}". Zero-padded for lexicographic sort stability."""
    return "ISS-{:08d}".format(counter)


class TestReporter:
    """
    Collects check results and diagnostic text for a test run.

    Methods:
      out()               -> text sink diagnostics are written to
      write(text)         -> write to the sink, never raises
      add_result(ok)      -> tally one passed or failed check
      log_issue(issue)    -> keep a ComparisonIssue, return its id
      report_summary()    -> write the pass/fail summary block
      exit_code()         -> 0 when no check failed, else 1
    """

    __test__ = False   # not a pytest test class despite the name

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self._out:         TextIO = out if out is not None else sys.stdout
        self._num_success: int = 0
        self._num_failure: int = 0
        self._issues:      List[Tuple[str, ComparisonIssue]] = []
        self._counter:     int = 0

    # -----------------------------------------------------------------------
    # Output sink
    # -----------------------------------------------------------------------

    def out(self) -> TextIO:
        return self._out

    def write(self, text: str) -> None:
        try:
            self._out.write(text)
        except (OSError, ValueError) as exc:
            # RPT-02: fall back to stderr; the original text is not lost.
            sys.stderr.write(
                f"REPORTER_SINK_ERROR: {type(exc).__name__}: {exc}\n{text}"
            )

    # -----------------------------------------------------------------------
    # Tally
    # -----------------------------------------------------------------------

    def add_result(self, ok: bool) -> None:
        if ok:
            self._num_success += 1
        else:
            self._num_failure += 1

    @property
    def num_success(self) -> int:
        return self._num_success

    @property
    def num_failure(self) -> int:
        return self._num_failure

    @property
    def num_checks(self) -> int:
        return self._num_success + self._num_failure

    @property
    def success(self) -> bool:
        return self._num_failure == 0

    def exit_code(self) -> int:
        return EXIT_PASS if self.success else EXIT_FAIL

    # -----------------------------------------------------------------------
    # Issue log
    # -----------------------------------------------------------------------

    def log_issue(self, issue: ComparisonIssue) -> str:
        self._counter += 1
        issue_id = _make_issue_id(self._counter)
        self._issues.append((issue_id, issue))
        return issue_id

    @property
    def issues(self) -> Tuple[ComparisonIssue, ...]:
        return tuple(issue for _, issue in self._issues)

    def issue_ids(self) -> Tuple[str, ...]:
        return tuple(issue_id for issue_id, _ in self._issues)

    def issue_count(self) -> int:
        return len(self._issues)

    # -----------------------------------------------------------------------
    # Summary
    # -----------------------------------------------------------------------

    def report_summary(self) -> None:
        result = "PASS" if self.success else "FAIL"
        self.write(
            f"{SEPARATOR_LINE}\n"
            f"COMPARISON RESULT: {result}\n"
            f"Harness version: {HARNESS_VERSION}\n"
            f"Checks passed:   {self._num_success}\n"
            f"Checks failed:   {self._num_failure}\n"
            f"Issues logged:   {len(self._issues)}\n"
        )
