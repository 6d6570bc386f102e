# simdcheck/verification/data_models/recorded_entry.py
# RecordedEntry -- one vector value logged by a backend during a test case.
#
# STORAGE INVARIANT
# -----------------
# len(storage) == length * kind.element_size at all times. Storage is
# zero-filled when the entry is recorded and written at most once by the
# producer (write-once handle). After the single write the entry is sealed;
# readers only ever see immutable bytes snapshots.

from typing import Any

import numpy as np

from simdcheck.verification.data_models.vector_kind import VectorKind
from simdcheck.verification.exceptions import ResultsValidationError


class RecordedEntry:
    """
    A single recorded vector.

    Produced by TestResultsSet.record(). The producer fills element storage
    immediately after the call via set_bytes() or set_values().

    Attributes (read-only):
      kind          -- VectorKind of every element.
      length        -- Number of elements.
      element_size  -- Bytes per element, derived from kind.
      file          -- Source file that recorded the value.
      line          -- Source line that recorded the value.
      seq           -- 1-based sequence number within the owning store.
      tolerance     -- Configured ULP tolerance at record time.
      zero_equal    -- True if +0.0 and -0.0 compare equal for this entry.
    """

    __slots__ = (
        "_kind", "_length", "_file", "_line", "_seq",
        "_tolerance", "_zero_equal", "_storage", "_sealed",
    )

    def __init__(
        self,
        kind:       VectorKind,
        length:     int,
        file:       str,
        line:       int,
        seq:        int,
        tolerance:  int = 0,
        zero_equal: bool = False,
    ) -> None:
        self._kind       = kind
        self._length     = length
        self._file       = file
        self._line       = line
        self._seq        = seq
        self._tolerance  = tolerance
        self._zero_equal = zero_equal
        self._storage    = bytearray(length * kind.element_size)
        self._sealed     = False

    # -----------------------------------------------------------------------
    # Read accessors
    # -----------------------------------------------------------------------

    @property
    def kind(self) -> VectorKind:
        return self._kind

    @property
    def length(self) -> int:
        return self._length

    @property
    def element_size(self) -> int:
        return self._kind.element_size

    @property
    def file(self) -> str:
        return self._file

    @property
    def line(self) -> int:
        return self._line

    @property
    def seq(self) -> int:
        return self._seq

    @property
    def tolerance(self) -> int:
        return self._tolerance

    @property
    def zero_equal(self) -> bool:
        return self._zero_equal

    @property
    def effective_tolerance(self) -> int:
        """Tolerance used for comparison. Integer kinds always compare exactly."""
        return self._tolerance if self._kind.is_float else 0

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def data(self) -> bytes:
        """Immutable snapshot of the raw little-endian element storage."""
        return bytes(self._storage)

    def as_array(self) -> np.ndarray:
        """Read-only numpy view of the elements, typed by kind."""
        return np.frombuffer(self.data, dtype=self._kind.dtype)

    # -----------------------------------------------------------------------
    # Producer interface (write-once)
    # -----------------------------------------------------------------------

    def set_bytes(self, raw: Any) -> "RecordedEntry":
        """
        Fill storage with raw little-endian element bytes.
        raw must be bytes-like and exactly length * element_size long.
        Returns self for chaining.
        """
        self._check_writable()
        buf = bytes(raw)
        if len(buf) != len(self._storage):
            raise ResultsValidationError(
                "raw", len(buf),
                "byte length must equal length * element_size = "
                + str(len(self._storage)),
            )
        self._storage[:] = buf
        self._sealed = True
        return self

    def set_values(self, values: Any) -> "RecordedEntry":
        """
        Fill storage from a sequence or numpy array of numbers.

        Integer kinds accept only integer (or bool) input within the kind's
        range. Float kinds accept integer or float input; float64 input is
        rounded to float32 for FLOAT32 entries.
        Returns self for chaining.
        """
        self._check_writable()
        arr = _coerce_values(values, self._kind)
        if arr.size != self._length:
            raise ResultsValidationError(
                "values", int(arr.size),
                "element count must equal entry length " + str(self._length),
            )
        self._storage[:] = arr.tobytes()
        self._sealed = True
        return self

    def _check_writable(self) -> None:
        if self._sealed:
            raise ResultsValidationError(
                "entry", self._seq,
                "recorded entries are write-once; storage already filled",
            )

    def __repr__(self) -> str:
        return (
            "RecordedEntry("
            f"seq={self._seq}, kind={self._kind.value}, length={self._length}, "
            f"file={self._file!r}, line={self._line}, "
            f"tolerance={self._tolerance}, zero_equal={self._zero_equal})"
        )


def _coerce_values(values: Any, kind: VectorKind) -> np.ndarray:
    """Convert producer input to a flat array of kind.dtype, range-checked."""
    src = np.asarray(values).reshape(-1)
    if src.size == 0:
        return np.zeros(0, dtype=kind.dtype)

    if kind.is_float:
        if src.dtype.kind not in "biuf":
            raise ResultsValidationError(
                "values", str(src.dtype),
                "must be numeric for kind " + kind.display_name,
            )
        return src.astype(kind.dtype)

    if src.dtype.kind not in "biu":
        raise ResultsValidationError(
            "values", str(src.dtype),
            "must be integer-valued for kind " + kind.display_name,
        )
    info = np.iinfo(kind.dtype)
    lo = int(src.min())
    hi = int(src.max())
    if lo < int(info.min) or hi > int(info.max):
        raise ResultsValidationError(
            "values", (lo, hi),
            "must lie within [" + str(info.min) + ", " + str(info.max)
            + "] for kind " + kind.display_name,
        )
    return src.astype(kind.dtype)
