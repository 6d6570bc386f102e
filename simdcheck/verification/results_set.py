# simdcheck/verification/results_set.py
# TestResultsSet -- ordered, sectioned log of vectors recorded by one backend
# while executing one test case.
#
# EEP-01: Single producer. A store is populated sequentially by the code under
#         test for one backend and is read-only while it is being compared.
# Each backend owns an independent TestResultsSet. No locking is performed.
#
# Sections are created lazily: recording into section k when fewer than k+1
# sections exist appends empty sections until index k is valid.

import contextlib
from typing import Any, Iterator, List, Optional, Tuple

import numpy as np

from simdcheck.utils.constants import (
    DEFAULT_TOLERANCE_ULP,
    DEFAULT_ZERO_EQUAL,
    FIRST_SECTION_INDEX,
    FIRST_SEQUENCE_NUMBER,
)
from simdcheck.verification.data_models.recorded_entry import RecordedEntry
from simdcheck.verification.data_models.vector_kind import VectorKind
from simdcheck.verification.exceptions import ResultsValidationError


def _check_tolerance(ulp: Any) -> int:
    if isinstance(ulp, bool) or not isinstance(ulp, (int, np.integer)):
        raise ResultsValidationError(
            "tolerance", ulp, "must be a non-negative integer number of ULPs"
        )
    if ulp < 0:
        raise ResultsValidationError(
            "tolerance", ulp, "must be a non-negative integer number of ULPs"
        )
    return int(ulp)


class TestResultsSet:
    """
    Results recorded by one backend for one test case.

    Producer interface:
      record(kind, length, file, line) -> RecordedEntry
      record_values(kind, values, file, line) -> RecordedEntry
      record_array(array, file, line) -> RecordedEntry
      advance_section()
      set_tolerance(ulp) / unset_tolerance()
      set_zero_equal(flag) / unset_zero_equal()
      tolerance(ulp), zero_equal()   -- scoped variants (context managers)

    Consumer interface (read-only):
      name, sections, section_count, entry_count, first_file()
    """

    __test__ = False   # not a pytest test class despite the name

    def __init__(self, name: str) -> None:
        if not isinstance(name, str) or not name:
            raise ResultsValidationError(
                "name", name, "test case name must be a non-empty string"
            )
        self._name:            str = name
        self._sections:        List[List[RecordedEntry]] = []
        self._seq:             int = FIRST_SEQUENCE_NUMBER
        self._curr_tolerance:  int = DEFAULT_TOLERANCE_ULP
        self._curr_zero_equal: bool = DEFAULT_ZERO_EQUAL
        self._curr_section:    int = FIRST_SECTION_INDEX

    # -----------------------------------------------------------------------
    # Recording
    # -----------------------------------------------------------------------

    def record(
        self,
        kind:   VectorKind,
        length: int,
        file:   str,
        line:   int,
    ) -> RecordedEntry:
        """
        Append a new zero-filled entry to the current section and return it.

        The entry is stamped with the next sequence number and the current
        tolerance and zero-equality settings. The caller fills its storage
        with set_bytes() or set_values() right after this call returns.
        """
        if not isinstance(kind, VectorKind):
            try:
                kind = VectorKind(kind)
            except ValueError as exc:
                raise ResultsValidationError(
                    "kind", kind, "must be a VectorKind member"
                ) from exc
        if isinstance(length, bool) or not isinstance(length, (int, np.integer)) or length < 0:
            raise ResultsValidationError(
                "length", length, "must be a non-negative integer"
            )
        if isinstance(line, bool) or not isinstance(line, (int, np.integer)) or line < 0:
            raise ResultsValidationError(
                "line", line, "must be a non-negative integer"
            )

        while len(self._sections) <= self._curr_section:
            self._sections.append([])

        entry = RecordedEntry(
            kind=kind,
            length=int(length),
            file=str(file),
            line=int(line),
            seq=self._seq,
            tolerance=self._curr_tolerance,
            zero_equal=self._curr_zero_equal,
        )
        self._seq += 1
        self._sections[self._curr_section].append(entry)
        return entry

    def record_values(
        self,
        kind:   VectorKind,
        values: Any,
        file:   str,
        line:   int,
    ) -> RecordedEntry:
        """Record and fill an entry from a sequence of numbers in one call."""
        flat = np.asarray(values).reshape(-1)
        entry = self.record(kind, int(flat.size), file, line)
        entry.set_values(flat)
        return entry

    def record_array(self, array: np.ndarray, file: str, line: int) -> RecordedEntry:
        """Record a numpy array; the kind is inferred from its dtype."""
        arr = np.asarray(array)
        kind = VectorKind.from_dtype(arr.dtype)
        return self.record_values(kind, arr, file, line)

    def advance_section(self) -> None:
        """Subsequent entries go to the next section."""
        self._curr_section += 1

    # -----------------------------------------------------------------------
    # Comparison settings for subsequently recorded entries
    # -----------------------------------------------------------------------

    def set_tolerance(self, ulp: int) -> None:
        self._curr_tolerance = _check_tolerance(ulp)

    def unset_tolerance(self) -> None:
        self._curr_tolerance = DEFAULT_TOLERANCE_ULP

    def set_zero_equal(self, flag: bool = True) -> None:
        self._curr_zero_equal = bool(flag)

    def unset_zero_equal(self) -> None:
        self._curr_zero_equal = DEFAULT_ZERO_EQUAL

    @contextlib.contextmanager
    def tolerance(self, ulp: int) -> Iterator["TestResultsSet"]:
        """Apply a ULP tolerance inside a with-block, then restore the previous one."""
        previous = self._curr_tolerance
        self.set_tolerance(ulp)
        try:
            yield self
        finally:
            self._curr_tolerance = previous

    @contextlib.contextmanager
    def zero_equal(self, flag: bool = True) -> Iterator["TestResultsSet"]:
        """Apply the zero-equality flag inside a with-block, then restore it."""
        previous = self._curr_zero_equal
        self.set_zero_equal(flag)
        try:
            yield self
        finally:
            self._curr_zero_equal = previous

    # -----------------------------------------------------------------------
    # Read accessors
    # -----------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def sections(self) -> Tuple[Tuple[RecordedEntry, ...], ...]:
        return tuple(tuple(section) for section in self._sections)

    @property
    def section_count(self) -> int:
        return len(self._sections)

    @property
    def entry_count(self) -> int:
        return sum(len(section) for section in self._sections)

    @property
    def current_section(self) -> int:
        return self._curr_section

    @property
    def current_tolerance(self) -> int:
        return self._curr_tolerance

    @property
    def current_zero_equal(self) -> bool:
        return self._curr_zero_equal

    def section(self, index: int) -> Tuple[RecordedEntry, ...]:
        return tuple(self._sections[index])

    def first_file(self) -> Optional[str]:
        """File of the first entry of the first section, or None."""
        if not self._sections or not self._sections[0]:
            return None
        return self._sections[0][0].file

    def __repr__(self) -> str:
        return (
            f"TestResultsSet(name={self._name!r}, sections={self.section_count}, "
            f"entries={self.entry_count})"
        )
