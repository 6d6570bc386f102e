import struct

from simdcheck.verification import (
    DiagnosticFormatter,
    RecordedEntry,
    VectorKind,
    compare_results,
)
from simdcheck.verification.diagnostics import format_hex, format_numbers, format_vector


_SEP = "-" * 62 + "\n"


def _entry(kind: VectorKind, values, line: int = 10, seq: int = 1) -> RecordedEntry:
    entry = RecordedEntry(kind=kind, length=len(values), file="math.cc", line=line, seq=seq)
    return entry.set_values(values)


class TestFormatHex:
    def test_float32_padding(self):
        assert format_hex(_entry(VectorKind.FLOAT32, [1.0, 0.0])) == "[ 3f800000 ; 00000000 ]"

    def test_uint8_two_digits(self):
        assert format_hex(_entry(VectorKind.UINT8, [200, 1])) == "[ c8 ; 01 ]"

    def test_negative_int_shows_unsigned_pattern(self):
        assert format_hex(_entry(VectorKind.INT16, [-1])) == "[ ffff ]"

    def test_float64_sixteen_digits(self):
        assert format_hex(_entry(VectorKind.FLOAT64, [1.0])) == "[ 3ff0000000000000 ]"

    def test_empty(self):
        assert format_hex(_entry(VectorKind.INT32, [])) == "[  ]"


class TestFormatNumbers:
    def test_int8_renders_as_integer(self):
        assert format_numbers(_entry(VectorKind.INT8, [-1, 65])) == "[ -1 ; 65 ]"

    def test_uint8_renders_as_integer(self):
        assert format_numbers(_entry(VectorKind.UINT8, [255, 65])) == "[ 255 ; 65 ]"

    def test_uint64_max(self):
        assert format_numbers(_entry(VectorKind.UINT64, [2**64 - 1])) == "[ 18446744073709551615 ]"

    def test_float32_shortest_form(self):
        assert format_numbers(_entry(VectorKind.FLOAT32, [1.0, 1.0000001])) == "[ 1.0 ; 1.0000001 ]"

    def test_float64_special_values(self):
        text = format_numbers(_entry(VectorKind.FLOAT64, [float("inf"), float("nan"), -0.0]))
        assert text == "[ inf ; nan ; -0.0 ]"

    def test_format_vector_prefixes_both_lines(self):
        text = format_vector(_entry(VectorKind.UINT8, [1]), "A : ")
        assert text == "A : [ 01 ]\nA : [ 1 ]\n"


class TestFormatterBlocks:
    def test_full_vector_mismatch_block(self, reporter, sink, float_pair):
        a, b = float_pair(tolerance=0)
        compare_results(a, "sse2", b, "avx2", reporter)
        assert sink.getvalue() == (
            _SEP
            + "  For architectures: sse2 and avx2 :\n"
            + '  In file "math.cc" at line 10 :\n'
            + '  In test case "math_fp" :\n'
            + "  Sequence number: 1\n"
            + "ERROR: Vectors not equal:\n"
            + "  First differing element: 0\n"
            + "A : [ 3f800000 ]\n"
            + "A : [ 1.0 ]\n"
            + "B : [ 3f800001 ]\n"
            + "B : [ 1.0000001 ]\n"
            + _SEP
        )

    def test_precision_line(self, reporter, sink):
        fmt = DiagnosticFormatter(reporter, "t", "a", "b")
        a = _entry(VectorKind.FLOAT32, [1.0])
        b = RecordedEntry(VectorKind.FLOAT32, 1, "math.cc", 10, 1)
        b.set_bytes(struct.pack("<I", 0x3F800003))
        fmt.vector_mismatch(a, b, 2, 0)
        assert "  Precision: 2ULP\n" in sink.getvalue()

    def test_first_index_optional(self, reporter, sink):
        fmt = DiagnosticFormatter(reporter, "t", "a", "b")
        fmt.vector_mismatch(_entry(VectorKind.INT8, [1]), _entry(VectorKind.INT8, [2]), 0)
        assert "First differing element" not in sink.getvalue()

    def test_name_mismatch_block(self, reporter, sink):
        DiagnosticFormatter(reporter, "x", "a", "b").name_mismatch("x", "y", None)
        assert sink.getvalue() == (
            _SEP
            + "  For architectures: a and b :\n"
            + '  In file "<unknown>" :\n'
            + 'FATAL: Test case names do not match: "x" and "y"\n'
            + _SEP
        )

    def test_section_length_block(self, reporter, sink):
        DiagnosticFormatter(reporter, "t", "a", "b").section_length_mismatch(2, 3, 1, "f.cc")
        text = sink.getvalue()
        assert 'In file "f.cc" :' in text
        assert 'In test case "t" :' in text
        assert "section: 2 result count: 3/1" in text

    def test_identity_block_only_lists_differences(self, reporter, sink):
        fmt = DiagnosticFormatter(reporter, "t", "a", "b")
        fmt.identity_mismatch(
            0, 4,
            _entry(VectorKind.INT32, [1], line=7),
            _entry(VectorKind.INT32, [1], line=8),
        )
        text = sink.getvalue()
        assert "section: 0 id: 4 line_A: 7 line_B: 8" in text
        assert "Types do not match" not in text
        assert "Number of elements" not in text
