# simdcheck/verification/vector_comparator.py
# VectorComparator -- compares the results recorded by two backends for the
# same test case and reports every disagreement.
#
# Check order (each fatal condition is reported exactly once):
#   CMP-01  Test case names differ                 -> FATAL, stop.
#   CMP-02  Either side recorded no sections       -> skipped, nothing tallied.
#   CMP-03  Section counts differ                  -> FATAL, stop.
#   CMP-04  Either side of a section is empty      -> section skipped.
#   CMP-05  Entry counts of a section differ       -> FATAL for that section,
#                                                     continue with the next.
#   CMP-06  Line, kind or length of aligned entries
#           differ                                 -> FATAL, stop the whole pass.
#   CMP-07  Values differ beyond tolerance         -> ERROR, continue.
#
# Value equality: byte-for-byte first. Float kinds then fall back to ULP
# equivalence with max(tolerance_a, tolerance_b) and
# (zero_equal_a or zero_equal_b). Integer kinds have no tolerance path.
#
# No exception crosses compare() for well-formed stores. Every outcome is
# written to the reporter and tallied with add_result().

from typing import List, Optional

from simdcheck.verification.data_models.comparison_report import (
    ComparisonIssue,
    ComparisonReport,
)
from simdcheck.verification.data_models.recorded_entry import RecordedEntry
from simdcheck.verification.diagnostics import DiagnosticFormatter
from simdcheck.verification.reporter import TestReporter
from simdcheck.verification.results_set import TestResultsSet
from simdcheck.verification.ulp_stepper import first_mismatch


def _filename_for(a: TestResultsSet, b: TestResultsSet) -> Optional[str]:
    """File of the first recorded entry of side A, falling back to side B."""
    file = a.first_file()
    if file is not None:
        return file
    return b.first_file()


def _first_differing_element(entry_a: RecordedEntry, entry_b: RecordedEntry) -> Optional[int]:
    """Index of the first element whose bytes differ, or None."""
    size = entry_a.element_size
    data_a = entry_a.data
    data_b = entry_b.data
    for index in range(entry_a.length):
        start = index * size
        if data_a[start:start + size] != data_b[start:start + size]:
            return index
    return None


def entries_equivalent(
    entry_a:    RecordedEntry,
    entry_b:    RecordedEntry,
    precision:  int,
    zero_equal: bool,
) -> Optional[int]:
    """
    Compare the values of two aligned entries of the same kind and length.
    Returns None when equivalent, else the index of the first failing element.
    """
    if entry_a.data == entry_b.data:
        return None
    if entry_a.kind.is_float:
        return first_mismatch(
            entry_a.data, entry_b.data, entry_a.kind, precision, zero_equal,
        )
    return _first_differing_element(entry_a, entry_b)


class VectorComparator:
    """
    Compares two TestResultsSet instances recorded by different backends.

    Method:
      compare(store_a, label_a, store_b, label_b, reporter) -> ComparisonReport

    The stores are only read. Labels identify the backends in diagnostics.
    """

    def compare(
        self,
        store_a:  TestResultsSet,
        label_a:  str,
        store_b:  TestResultsSet,
        label_b:  str,
        reporter: TestReporter,
    ) -> ComparisonReport:
        fmt = DiagnosticFormatter(reporter, store_a.name, label_a, label_b)
        issues: List[ComparisonIssue] = []
        counts = {"passed": 0, "failed": 0}

        def issue(failure_type: str, **fields) -> None:
            record = ComparisonIssue(
                failure_type=failure_type,
                test_case=store_a.name,
                label_a=label_a,
                label_b=label_b,
                **fields,
            )
            issues.append(record)
            reporter.log_issue(record)

        def tally(ok: bool) -> None:
            reporter.add_result(ok)
            counts["passed" if ok else "failed"] += 1

        def finish(aborted: bool = False, skipped: bool = False) -> ComparisonReport:
            return ComparisonReport(
                passed=counts["failed"] == 0,
                checks_passed=counts["passed"],
                checks_failed=counts["failed"],
                issues=tuple(issues),
                aborted=aborted,
                skipped=skipped,
            )

        # CMP-01
        if store_a.name != store_b.name:
            file = _filename_for(store_a, store_b)
            fmt.name_mismatch(store_a.name, store_b.name, file)
            issue(
                "NAME_MISMATCH",
                file=file or "",
                detail=f"test case names differ: {store_a.name!r} / {store_b.name!r}",
            )
            tally(False)
            return finish(aborted=True)

        sections_a = store_a.sections
        sections_b = store_b.sections

        # CMP-02
        if not sections_a or not sections_b:
            return finish(skipped=True)

        # CMP-03
        if len(sections_a) != len(sections_b):
            file = _filename_for(store_a, store_b)
            fmt.section_count_mismatch(len(sections_a), len(sections_b), file)
            issue(
                "SECTION_COUNT_MISMATCH",
                file=file or "",
                detail=f"section counts differ: {len(sections_a)}/{len(sections_b)}",
            )
            tally(False)
            return finish(aborted=True)

        for section_index, (sect_a, sect_b) in enumerate(zip(sections_a, sections_b)):
            # CMP-04
            if not sect_a or not sect_b:
                continue

            # CMP-05
            if len(sect_a) != len(sect_b):
                file = sect_a[0].file
                fmt.section_length_mismatch(section_index, len(sect_a), len(sect_b), file)
                issue(
                    "SECTION_LENGTH_MISMATCH",
                    file=file,
                    section=section_index,
                    detail=f"entry counts differ in section {section_index}: "
                           f"{len(sect_a)}/{len(sect_b)}",
                )
                tally(False)
                continue

            for index, (entry_a, entry_b) in enumerate(zip(sect_a, sect_b)):
                # CMP-06
                if (
                    entry_a.line != entry_b.line
                    or entry_a.kind != entry_b.kind
                    or entry_a.length != entry_b.length
                ):
                    fmt.identity_mismatch(section_index, index, entry_a, entry_b)
                    issue(
                        "ENTRY_IDENTITY_MISMATCH",
                        file=entry_a.file,
                        line=entry_a.line,
                        section=section_index,
                        index=index,
                        seq=entry_a.seq,
                        detail=_identity_detail(entry_a, entry_b),
                    )
                    tally(False)
                    return finish(aborted=True)

                # CMP-07
                precision = max(entry_a.effective_tolerance, entry_b.effective_tolerance)
                zero_equal = entry_a.zero_equal or entry_b.zero_equal
                bad_index = entries_equivalent(entry_a, entry_b, precision, zero_equal)
                if bad_index is None:
                    tally(True)
                    continue

                fmt.vector_mismatch(entry_a, entry_b, precision, bad_index)
                issue(
                    "VECTOR_MISMATCH",
                    file=entry_a.file,
                    line=entry_a.line,
                    section=section_index,
                    index=index,
                    seq=entry_a.seq,
                    detail=f"{entry_a.kind.display_name} vectors differ at "
                           f"element {bad_index} (precision {precision} ULP)",
                )
                tally(False)

        return finish()


def _identity_detail(entry_a: RecordedEntry, entry_b: RecordedEntry) -> str:
    parts = []
    if entry_a.line != entry_b.line:
        parts.append(f"line {entry_a.line}/{entry_b.line}")
    if entry_a.kind != entry_b.kind:
        parts.append(f"type {entry_a.kind.display_name}/{entry_b.kind.display_name}")
    if entry_a.length != entry_b.length:
        parts.append(f"length {entry_a.length}/{entry_b.length}")
    return "entry identity differs: " + ", ".join(parts)


def compare_results(
    store_a:  TestResultsSet,
    label_a:  str,
    store_b:  TestResultsSet,
    label_b:  str,
    reporter: TestReporter,
) -> ComparisonReport:
    """Compare two stores with a fresh VectorComparator. See VectorComparator.compare()."""
    return VectorComparator().compare(store_a, label_a, store_b, label_b, reporter)
