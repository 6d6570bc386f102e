# simdcheck/verification/ulp_stepper.py
# ULP equivalence of IEEE 754 single and double precision values.
#
# ULP-01: No floating-point arithmetic is performed anywhere in this module.
#         The backend under test may run with flush-to-zero or other
#         non-default FP modes; every decision is made on the integer bit
#         pattern obtained by reinterpreting the raw little-endian storage.
# ULP-02: Bit patterns are handled as SIGNED integers of the element width
#         (int32 for FLOAT32, int64 for FLOAT64).
# ULP-03: NaN never steps and any NaN is equivalent to any other NaN.
# ULP-04: Infinity never steps (saturating).
#
# One ULP can be added or subtracted with plain integer increment or
# decrement of the pattern, except when the value is infinite or the step
# would cross zero; both cases are handled explicitly.

import struct
from typing import Dict, Optional, Tuple

from simdcheck.verification.data_models.vector_kind import VectorKind
from simdcheck.verification.exceptions import ResultsComparisonError


# ---------------------------------------------------------------------------
# IEEE 754 layout per kind: (exponent mask, mantissa mask, width in bits)
# ---------------------------------------------------------------------------

_LAYOUT: Dict[VectorKind, Tuple[int, int, int]] = {
    VectorKind.FLOAT32: (0x7F800000,         0x007FFFFF,         32),
    VectorKind.FLOAT64: (0x7FF0000000000000, 0x000FFFFFFFFFFFFF, 64),
}

POS_ZERO_BITS: int = 0


def _layout(kind: VectorKind) -> Tuple[int, int, int]:
    try:
        return _LAYOUT[kind]
    except KeyError:
        raise ResultsComparisonError(
            message="ULP comparison requires FLOAT32 or FLOAT64, got "
                    + str(getattr(kind, "value", kind)),
            field_name="kind",
            value=kind,
        ) from None


def neg_zero_bits(kind: VectorKind) -> int:
    """Signed bit pattern of -0.0 for the given kind (sign bit only)."""
    width = _layout(kind)[2]
    return -(1 << (width - 1))


def to_signed_bits(bits: int, kind: VectorKind) -> int:
    """Normalise an unsigned pattern to its signed two's complement value."""
    width = _layout(kind)[2]
    bits &= (1 << width) - 1
    if bits >= 1 << (width - 1):
        bits -= 1 << width
    return bits


# ---------------------------------------------------------------------------
# Reinterpretation helpers
# ---------------------------------------------------------------------------

def float_to_bits(value: float, kind: VectorKind) -> int:
    """
    Return the signed bit pattern of value stored as kind.
    FLOAT32 rounds value to single precision first (a conversion, not
    arithmetic on the compared data).
    """
    _layout(kind)
    fp_code = "<f" if kind is VectorKind.FLOAT32 else "<d"
    return struct.unpack("<" + kind.bits_format, struct.pack(fp_code, value))[0]


def bits_to_float(bits: int, kind: VectorKind) -> float:
    """Reinterpret a signed (or unsigned) bit pattern as a Python float."""
    signed = to_signed_bits(bits, kind)
    fp_code = "<f" if kind is VectorKind.FLOAT32 else "<d"
    return struct.unpack(fp_code, struct.pack("<" + kind.bits_format, signed))[0]


def unpack_bits(raw: bytes, kind: VectorKind) -> Tuple[int, ...]:
    """Split raw little-endian storage into signed bit patterns, one per element."""
    _layout(kind)
    size = kind.element_size
    if len(raw) % size != 0:
        raise ResultsComparisonError(
            message="raw storage length " + str(len(raw))
                    + " is not a multiple of element size " + str(size),
            field_name="raw",
            value=len(raw),
        )
    count = len(raw) // size
    return struct.unpack("<" + str(count) + kind.bits_format, raw)


# ---------------------------------------------------------------------------
# Bit-pattern predicates
# ---------------------------------------------------------------------------

def is_nan_bits(bits: int, kind: VectorKind) -> bool:
    exp_mask, mant_mask, _ = _layout(kind)
    return (bits & exp_mask) == exp_mask and (bits & mant_mask) != 0


def is_inf_bits(bits: int, kind: VectorKind) -> bool:
    exp_mask, mant_mask, _ = _layout(kind)
    return (bits & exp_mask) == exp_mask and (bits & mant_mask) == 0


def is_zero_bits(bits: int, kind: VectorKind) -> bool:
    """True for +0.0 and -0.0."""
    signed = to_signed_bits(bits, kind)
    return signed == POS_ZERO_BITS or signed == neg_zero_bits(kind)


# ---------------------------------------------------------------------------
# Core primitive
# ---------------------------------------------------------------------------

def step_toward(from_bits: int, to_bits: int, kind: VectorKind) -> int:
    """
    Return the pattern one ULP from from_bits in the direction of to_bits.

    Fixed points:
      - either operand NaN         -> from_bits unchanged
      - from_bits is +/-infinity   -> from_bits unchanged
      - identical patterns         -> from_bits unchanged
    Zero crossing:
      - +0 toward a negative or -0 -> -0
      - -0 toward a positive or +0 -> +0
    Otherwise the signed pattern is incremented if it is less than to_bits,
    decremented if it is greater.
    """
    from_i = to_signed_bits(from_bits, kind)
    to_i = to_signed_bits(to_bits, kind)

    if is_nan_bits(from_i, kind) or is_nan_bits(to_i, kind):
        return from_i
    if is_inf_bits(from_i, kind):
        return from_i
    if from_i == to_i:
        return from_i

    neg_zero = neg_zero_bits(kind)
    if from_i == POS_ZERO_BITS and (to_i < 0 or to_i == neg_zero):
        return neg_zero
    if from_i == neg_zero and (to_i > 0 or to_i == POS_ZERO_BITS):
        return POS_ZERO_BITS

    if from_i < to_i:
        return from_i + 1
    return from_i - 1


def next_after_ulps(value: float, target: float, kind: VectorKind, steps: int = 1) -> float:
    """
    Float-level convenience around step_toward(): move value `steps` ULPs
    toward target, as seen by a FLOAT32 or FLOAT64 element.
    """
    bits = float_to_bits(value, kind)
    target_bits = float_to_bits(target, kind)
    for _ in range(steps):
        bits = step_toward(bits, target_bits, kind)
    return bits_to_float(bits, kind)


# ---------------------------------------------------------------------------
# Element and array equivalence
# ---------------------------------------------------------------------------

def elements_equivalent(
    a_bits:     int,
    b_bits:     int,
    kind:       VectorKind,
    tolerance:  int,
    zero_equal: bool,
) -> bool:
    """
    Two elements are equivalent if:
      (a) both are NaN, or
      (b) zero_equal is set and both are +0.0 or -0.0, or
      (c) stepping a toward b `tolerance` times yields b's exact pattern.
    """
    a_i = to_signed_bits(a_bits, kind)
    b_i = to_signed_bits(b_bits, kind)

    if is_nan_bits(a_i, kind) and is_nan_bits(b_i, kind):
        return True
    if zero_equal and is_zero_bits(a_i, kind) and is_zero_bits(b_i, kind):
        return True

    for _ in range(tolerance):
        if a_i == b_i:
            break
        a_i = step_toward(a_i, b_i, kind)
    return a_i == b_i


def first_mismatch(
    raw_a:      bytes,
    raw_b:      bytes,
    kind:       VectorKind,
    tolerance:  int,
    zero_equal: bool,
) -> Optional[int]:
    """
    Compare two raw float arrays of the same kind element by element.
    Returns the index of the first element that is not equivalent, or None
    when every element is equivalent.
    """
    if tolerance < 0:
        raise ResultsComparisonError(
            message="tolerance must be non-negative, got " + str(tolerance),
            field_name="tolerance",
            value=tolerance,
        )
    if len(raw_a) != len(raw_b):
        raise ResultsComparisonError(
            message="raw storage lengths differ: "
                    + str(len(raw_a)) + "/" + str(len(raw_b)),
            field_name="raw",
            value=(len(raw_a), len(raw_b)),
        )
    bits_a = unpack_bits(raw_a, kind)
    bits_b = unpack_bits(raw_b, kind)
    for index, (a_i, b_i) in enumerate(zip(bits_a, bits_b)):
        if a_i == b_i:
            continue
        if not elements_equivalent(a_i, b_i, kind, tolerance, zero_equal):
            return index
    return None


def arrays_equivalent(
    raw_a:      bytes,
    raw_b:      bytes,
    kind:       VectorKind,
    tolerance:  int,
    zero_equal: bool,
) -> bool:
    return first_mismatch(raw_a, raw_b, kind, tolerance, zero_equal) is None
