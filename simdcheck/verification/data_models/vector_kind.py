# simdcheck/verification/data_models/vector_kind.py
# VectorKind -- closed enumeration of element types a recorded vector may hold.
#
# Each kind determines:
#   - element size in bytes,
#   - the equivalence rule (exact for integers, ULP-tolerant for floats),
#   - the struct codes used to reinterpret raw little-endian storage as
#     signed or unsigned integers of matching width,
#   - the numpy dtype used for typed rendering and for filling storage.
#
# All raw storage is little-endian regardless of host byte order.

from enum import Enum, unique
from typing import Any, Dict

import numpy as np

from simdcheck.verification.exceptions import ResultsValidationError


@unique
class VectorKind(str, Enum):
    """
    Element type of a recorded vector. Inherits from str so that
    VectorKind.FLOAT32 == "FLOAT32".
    """
    UINT8   = "UINT8"
    INT8    = "INT8"
    UINT16  = "UINT16"
    INT16   = "INT16"
    UINT32  = "UINT32"
    INT32   = "INT32"
    UINT64  = "UINT64"
    INT64   = "INT64"
    FLOAT32 = "FLOAT32"
    FLOAT64 = "FLOAT64"

    @property
    def element_size(self) -> int:
        return _ELEMENT_SIZES[self]

    @property
    def is_float(self) -> bool:
        return self in (VectorKind.FLOAT32, VectorKind.FLOAT64)

    @property
    def is_signed(self) -> bool:
        return self.is_float or self.value.startswith("INT")

    @property
    def display_name(self) -> str:
        """Lowercase name used in diagnostics, e.g. 'float32'."""
        return self.value.lower()

    @property
    def dtype(self) -> np.dtype:
        """Little-endian numpy dtype of one element."""
        return _DTYPES[self]

    @property
    def bits_format(self) -> str:
        """struct code of the signed integer with the element's width."""
        return _SIGNED_CODES[self.element_size]

    @property
    def hex_format(self) -> str:
        """struct code of the unsigned integer with the element's width."""
        return _UNSIGNED_CODES[self.element_size]

    @classmethod
    def from_dtype(cls, dtype: Any) -> "VectorKind":
        """
        Map a numpy dtype (or anything np.dtype() accepts) to its kind.
        Byte order is ignored; only the element type matters.
        Raises ResultsValidationError for unsupported dtypes (bool, complex,
        float16, object, ...).
        """
        try:
            dt = np.dtype(dtype)
        except TypeError as exc:
            raise ResultsValidationError(
                "dtype", dtype, "must be a numpy-compatible dtype"
            ) from exc
        key = (dt.kind, dt.itemsize)
        if key not in _DTYPE_KEYS:
            raise ResultsValidationError(
                "dtype", str(dt),
                "must be one of uint8/16/32/64, int8/16/32/64, float32, float64",
            )
        return _DTYPE_KEYS[key]


_ELEMENT_SIZES: Dict[VectorKind, int] = {
    VectorKind.UINT8:   1,
    VectorKind.INT8:    1,
    VectorKind.UINT16:  2,
    VectorKind.INT16:   2,
    VectorKind.UINT32:  4,
    VectorKind.INT32:   4,
    VectorKind.UINT64:  8,
    VectorKind.INT64:   8,
    VectorKind.FLOAT32: 4,
    VectorKind.FLOAT64: 8,
}

_DTYPES: Dict[VectorKind, np.dtype] = {
    VectorKind.UINT8:   np.dtype("<u1"),
    VectorKind.INT8:    np.dtype("<i1"),
    VectorKind.UINT16:  np.dtype("<u2"),
    VectorKind.INT16:   np.dtype("<i2"),
    VectorKind.UINT32:  np.dtype("<u4"),
    VectorKind.INT32:   np.dtype("<i4"),
    VectorKind.UINT64:  np.dtype("<u8"),
    VectorKind.INT64:   np.dtype("<i8"),
    VectorKind.FLOAT32: np.dtype("<f4"),
    VectorKind.FLOAT64: np.dtype("<f8"),
}

# (numpy kind char, itemsize) -> VectorKind
_DTYPE_KEYS: Dict[tuple, VectorKind] = {
    (dt.kind, dt.itemsize): kind for kind, dt in _DTYPES.items()
}

_SIGNED_CODES:   Dict[int, str] = {1: "b", 2: "h", 4: "i", 8: "q"}
_UNSIGNED_CODES: Dict[int, str] = {1: "B", 2: "H", 4: "I", 8: "Q"}
