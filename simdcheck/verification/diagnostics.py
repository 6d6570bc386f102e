# simdcheck/verification/diagnostics.py
# DiagnosticFormatter -- renders comparison issues as human-readable text.
#
# Layout of one reported issue (not intended for machine parsing):
#
#   --------------------------------------------------------------
#     For architectures: <label A> and <label B> :
#     In file "<file>" at line <line> :
#     In test case "<name>" :
#     Sequence number: <seq>
#   ERROR: Vectors not equal:
#     First differing element: <index>
#   A : [ <hex> ; <hex> ]
#   A : [ <value> ; <value> ]
#   B : [ <hex> ; <hex> ]
#   B : [ <value> ; <value> ]
#     Precision: <n>ULP
#   --------------------------------------------------------------
#
# Each issue is assembled into a single string and written to the reporter
# sink in one call.

import struct
from typing import List, Optional

from simdcheck.utils.constants import (
    ELEMENT_SEPARATOR,
    SEPARATOR_LINE,
    SIDE_A_PREFIX,
    SIDE_B_PREFIX,
    UNKNOWN_FILE,
)
from simdcheck.verification.data_models.recorded_entry import RecordedEntry
from simdcheck.verification.reporter import TestReporter


# ---------------------------------------------------------------------------
# Vector rendering
# ---------------------------------------------------------------------------

def _bracket(items: List[str]) -> str:
    return "[ " + ELEMENT_SEPARATOR.join(items) + " ]"


def format_hex(entry: RecordedEntry) -> str:
    """Zero-padded lowercase hex of each element's unsigned bit pattern."""
    kind = entry.kind
    width = kind.element_size * 2
    patterns = struct.unpack(
        "<" + str(entry.length) + kind.hex_format, entry.data
    )
    return _bracket(["{:0{w}x}".format(p, w=width) for p in patterns])


def format_numbers(entry: RecordedEntry) -> str:
    """
    Typed decimal rendering of each element.
    Integer kinds (8-bit included) render as plain integers.
    Float kinds render in shortest round-trip form for their precision.
    """
    values = entry.as_array()
    if entry.kind.is_float:
        items = [str(v) for v in values]
    else:
        items = [str(int(v)) for v in values]
    return _bracket(items)


def format_vector(entry: RecordedEntry, prefix: str) -> str:
    return (
        prefix + format_hex(entry) + "\n"
        + prefix + format_numbers(entry) + "\n"
    )


# ---------------------------------------------------------------------------
# DiagnosticFormatter
# ---------------------------------------------------------------------------

class DiagnosticFormatter:
    """
    Writes diagnostic blocks for one comparison of side A against side B.

    The formatter only writes text. Tallying and issue logging are done by
    the comparator.
    """

    def __init__(
        self,
        reporter:  TestReporter,
        test_case: str,
        label_a:   str,
        label_b:   str,
    ) -> None:
        self._reporter  = reporter
        self._test_case = test_case
        self._label_a   = label_a
        self._label_b   = label_b

    # -----------------------------------------------------------------------
    # Context lines
    # -----------------------------------------------------------------------

    def _separator(self) -> str:
        return SEPARATOR_LINE + "\n"

    def _arch(self) -> str:
        return f"  For architectures: {self._label_a} and {self._label_b} :\n"

    def _file(self, file: Optional[str]) -> str:
        if not file:
            file = UNKNOWN_FILE
        return self._arch() + f"  In file \"{file}\" :\n"

    def _file_line(self, file: Optional[str], line: int) -> str:
        if not file:
            file = UNKNOWN_FILE
        return self._arch() + f"  In file \"{file}\" at line {line} :\n"

    def _test_case_line(self) -> str:
        return f"  In test case \"{self._test_case}\" :\n"

    def _emit(self, body: str) -> None:
        self._reporter.write(self._separator() + body + self._separator())

    # -----------------------------------------------------------------------
    # Fatal conditions
    # -----------------------------------------------------------------------

    def name_mismatch(self, name_a: str, name_b: str, file: Optional[str]) -> None:
        self._emit(
            self._file(file)
            + f"FATAL: Test case names do not match: \"{name_a}\" and \"{name_b}\"\n"
        )

    def section_count_mismatch(
        self,
        count_a: int,
        count_b: int,
        file:    Optional[str],
    ) -> None:
        self._emit(
            self._file(file)
            + self._test_case_line()
            + "FATAL: The number of result sections do not match: "
            + f"{count_a}/{count_b}\n"
        )

    def section_length_mismatch(
        self,
        section:  int,
        length_a: int,
        length_b: int,
        file:     Optional[str],
    ) -> None:
        self._emit(
            self._file(file)
            + self._test_case_line()
            + "FATAL: The number of results in a section do not match: "
            + f"section: {section} result count: {length_a}/{length_b}\n"
        )

    def identity_mismatch(
        self,
        section: int,
        index:   int,
        entry_a: RecordedEntry,
        entry_b: RecordedEntry,
    ) -> None:
        lines = []
        if entry_a.line != entry_b.line:
            lines.append(
                "FATAL: Line numbers do not match for items with the same "
                f"sequence number: section: {section} id: {index} "
                f"line_A: {entry_a.line} line_B: {entry_b.line}\n"
            )
        if entry_a.kind != entry_b.kind:
            lines.append(
                "FATAL: Types do not match for items with the same "
                f"sequence number: id: {index} "
                f"type_A: {entry_a.kind.display_name} "
                f"type_B: {entry_b.kind.display_name}\n"
            )
        if entry_a.length != entry_b.length:
            lines.append(
                "FATAL: Number of elements do not match for items with the "
                f"same sequence number: id: {index} "
                f"length_A: {entry_a.length} length_B: {entry_b.length}\n"
            )
        self._emit(
            self._file_line(entry_a.file, entry_a.line)
            + self._test_case_line()
            + "".join(lines)
        )

    # -----------------------------------------------------------------------
    # Value mismatch
    # -----------------------------------------------------------------------

    def vector_mismatch(
        self,
        entry_a:      RecordedEntry,
        entry_b:      RecordedEntry,
        precision:    int,
        first_index:  Optional[int] = None,
    ) -> None:
        body = (
            self._file_line(entry_a.file, entry_a.line)
            + self._test_case_line()
            + f"  Sequence number: {entry_a.seq}\n"
            + "ERROR: Vectors not equal:\n"
        )
        if first_index is not None:
            body += f"  First differing element: {first_index}\n"
        body += format_vector(entry_a, SIDE_A_PREFIX)
        body += format_vector(entry_b, SIDE_B_PREFIX)
        if precision > 0:
            body += f"  Precision: {precision}ULP\n"
        self._emit(body)
