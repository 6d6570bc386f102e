import numpy as np
import pytest

from simdcheck.verification import (
    RecordedEntry,
    ResultsValidationError,
    TestResultsSet,
    VectorKind,
)


class TestConstruction:
    def test_name_is_kept(self):
        assert TestResultsSet("math_fp").name == "math_fp"

    def test_starts_empty(self):
        store = TestResultsSet("t")
        assert store.section_count == 0
        assert store.entry_count == 0
        assert store.sections == ()
        assert store.first_file() is None

    def test_default_settings(self):
        store = TestResultsSet("t")
        assert store.current_section == 0
        assert store.current_tolerance == 0
        assert store.current_zero_equal is False

    @pytest.mark.parametrize("name", ["", None, 5])
    def test_invalid_name_raises(self, name):
        with pytest.raises(ResultsValidationError):
            TestResultsSet(name)


class TestRecord:
    def test_returns_zero_filled_entry(self):
        store = TestResultsSet("t")
        entry = store.record(VectorKind.INT32, 4, "a.cc", 12)
        assert isinstance(entry, RecordedEntry)
        assert entry.data == bytes(16)
        assert entry.file == "a.cc"
        assert entry.line == 12

    def test_sequence_numbers_start_at_one_and_increase(self):
        store = TestResultsSet("t")
        seqs = [store.record(VectorKind.UINT8, 1, "a.cc", i).seq for i in range(3)]
        assert seqs == [1, 2, 3]

    def test_sequence_continues_across_sections(self):
        store = TestResultsSet("t")
        store.record(VectorKind.UINT8, 1, "a.cc", 1)
        store.advance_section()
        assert store.record(VectorKind.UINT8, 1, "a.cc", 2).seq == 2

    def test_kind_accepts_string_value(self):
        store = TestResultsSet("t")
        assert store.record("FLOAT64", 1, "a.cc", 1).kind is VectorKind.FLOAT64

    def test_unknown_kind_raises(self):
        with pytest.raises(ResultsValidationError, match="kind"):
            TestResultsSet("t").record("FLOAT16", 1, "a.cc", 1)

    @pytest.mark.parametrize("length", [-1, 1.5, True])
    def test_invalid_length_raises(self, length):
        with pytest.raises(ResultsValidationError, match="length"):
            TestResultsSet("t").record(VectorKind.INT8, length, "a.cc", 1)

    def test_negative_line_raises(self):
        with pytest.raises(ResultsValidationError, match="line"):
            TestResultsSet("t").record(VectorKind.INT8, 1, "a.cc", -3)

    def test_zero_length_entry_allowed(self):
        entry = TestResultsSet("t").record(VectorKind.FLOAT32, 0, "a.cc", 1)
        assert entry.data == b""


class TestSections:
    def test_first_record_creates_section_zero(self):
        store = TestResultsSet("t")
        store.record(VectorKind.INT8, 1, "a.cc", 1)
        assert store.section_count == 1

    def test_advance_without_record_creates_nothing(self):
        store = TestResultsSet("t")
        store.advance_section()
        assert store.section_count == 0
        assert store.current_section == 1

    def test_lazy_creation_fills_gaps_with_empty_sections(self):
        store = TestResultsSet("t")
        store.advance_section()
        store.advance_section()
        store.record(VectorKind.INT8, 1, "a.cc", 1)
        assert store.section_count == 3
        assert store.section(0) == ()
        assert store.section(1) == ()
        assert len(store.section(2)) == 1

    def test_entries_ordered_within_section(self):
        store = TestResultsSet("t")
        first = store.record(VectorKind.INT8, 1, "a.cc", 1)
        second = store.record(VectorKind.INT8, 1, "a.cc", 2)
        assert store.sections == ((first, second),)

    def test_first_file(self):
        store = TestResultsSet("t")
        store.record(VectorKind.INT8, 1, "first.cc", 1)
        store.record(VectorKind.INT8, 1, "second.cc", 1)
        assert store.first_file() == "first.cc"

    def test_first_file_none_when_first_section_empty(self):
        store = TestResultsSet("t")
        store.advance_section()
        store.record(VectorKind.INT8, 1, "later.cc", 1)
        assert store.first_file() is None


class TestSettings:
    def test_tolerance_applies_to_later_entries_only(self):
        store = TestResultsSet("t")
        before = store.record(VectorKind.FLOAT32, 1, "a.cc", 1)
        store.set_tolerance(3)
        after = store.record(VectorKind.FLOAT32, 1, "a.cc", 2)
        assert before.tolerance == 0
        assert after.tolerance == 3

    def test_zero_equal_applies_to_later_entries_only(self):
        store = TestResultsSet("t")
        before = store.record(VectorKind.FLOAT32, 1, "a.cc", 1)
        store.set_zero_equal(True)
        after = store.record(VectorKind.FLOAT32, 1, "a.cc", 2)
        assert before.zero_equal is False
        assert after.zero_equal is True

    def test_unset_restores_defaults(self):
        store = TestResultsSet("t")
        store.set_tolerance(4)
        store.set_zero_equal(True)
        store.unset_tolerance()
        store.unset_zero_equal()
        assert store.current_tolerance == 0
        assert store.current_zero_equal is False

    @pytest.mark.parametrize("ulp", [-1, 0.5, True, "1"])
    def test_invalid_tolerance_raises(self, ulp):
        with pytest.raises(ResultsValidationError, match="tolerance"):
            TestResultsSet("t").set_tolerance(ulp)

    def test_scoped_tolerance_restores_previous(self):
        store = TestResultsSet("t")
        store.set_tolerance(1)
        with store.tolerance(8):
            inside = store.record(VectorKind.FLOAT64, 1, "a.cc", 1)
        outside = store.record(VectorKind.FLOAT64, 1, "a.cc", 2)
        assert inside.tolerance == 8
        assert outside.tolerance == 1

    def test_scoped_zero_equal_restores_on_error(self):
        store = TestResultsSet("t")
        with pytest.raises(RuntimeError):
            with store.zero_equal():
                assert store.current_zero_equal is True
                raise RuntimeError("boom")
        assert store.current_zero_equal is False


class TestRecordHelpers:
    def test_record_values(self):
        store = TestResultsSet("t")
        entry = store.record_values(VectorKind.INT16, [1, -2, 3], "a.cc", 4)
        assert entry.length == 3
        assert list(entry.as_array()) == [1, -2, 3]
        assert entry.sealed

    def test_record_array_infers_kind(self):
        store = TestResultsSet("t")
        entry = store.record_array(np.array([1.5, 2.5], dtype=np.float32), "a.cc", 4)
        assert entry.kind is VectorKind.FLOAT32
        assert entry.length == 2

    def test_record_array_flattens(self):
        store = TestResultsSet("t")
        entry = store.record_array(np.zeros((2, 3), dtype=np.uint64), "a.cc", 4)
        assert entry.kind is VectorKind.UINT64
        assert entry.length == 6

    def test_record_array_unsupported_dtype(self):
        with pytest.raises(ResultsValidationError, match="dtype"):
            TestResultsSet("t").record_array(np.zeros(2, dtype=np.float16), "a.cc", 1)
