"""Text forms of vectors, quaternions and matrices used by input fields."""

from __future__ import annotations

import math
import re
import struct
from decimal import Decimal
from enum import Enum
from itertools import chain
from typing import Iterable, Sequence, TypeVar

from quatview.linalg import Mat3, Mat4, Quat, Vec3

T = TypeVar("T")

_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE,
)


class QuatStrMode(Enum):
    """Order of quaternion components in text form."""

    XYZW = "xyzw"
    WXYZ = "wxyz"


class MatStrMode(Enum):
    """Order of matrix entries in text form."""

    ROW_MAJOR = "row_major"
    COL_MAJOR = "col_major"


def _to_f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def format_float(value: float) -> str:
    """Shortest plain decimal text that reads back to the same single-precision value."""
    single = _to_f32(value)
    if math.isnan(single):
        return "NaN"
    if math.isinf(single):
        return "inf" if single > 0 else "-inf"
    text = repr(single)
    for digits in range(1, 10):
        candidate = f"{single:.{digits}g}"
        if _to_f32(float(candidate)) == single:
            text = candidate
            break
    return format(Decimal(text), "f")


def parse_float(text: str) -> float:
    """Read a single-precision number; text that is not a number reads as 0."""
    if not _FLOAT_RE.fullmatch(text):
        return 0.0
    return _to_f32(float(text))


def _parse_all(strings: Iterable[str], count: int) -> list[float]:
    values = tuple(strings)
    if len(values) != count:
        raise ValueError(f"expected {count} values, got {len(values)}")
    return [parse_float(s) for s in values]


def quat_to_strings(quat: Quat, mode: QuatStrMode) -> tuple[str, str, str, str]:
    x, y, z, w = (format_float(c) for c in quat)
    if mode is QuatStrMode.XYZW:
        return (x, y, z, w)
    return (w, x, y, z)


def strings_to_quat(strings: Sequence[str], mode: QuatStrMode) -> Quat:
    a, b, c, d = _parse_all(strings, 4)
    if mode is QuatStrMode.XYZW:
        return Quat(a, b, c, d)
    return Quat(b, c, d, a)


def vec_to_strings(vec: Vec3) -> tuple[str, str, str]:
    x, y, z = (format_float(c) for c in vec)
    return (x, y, z)


def strings_to_vec(strings: Sequence[str]) -> Vec3:
    return Vec3(*_parse_all(strings, 3))


def _matrix_to_strings(cols: Iterable[float], mode: MatStrMode) -> tuple[str, ...]:
    strings = tuple(format_float(v) for v in cols)
    if mode is MatStrMode.ROW_MAJOR:
        strings = transpose_mat_io(strings)
    return strings


def _strings_to_cols(strings: Sequence[str], mode: MatStrMode, count: int) -> list[float]:
    values = tuple(strings)
    if len(values) != count:
        raise ValueError(f"expected {count} values, got {len(values)}")
    if mode is MatStrMode.ROW_MAJOR:
        values = transpose_mat_io(values)
    return _parse_all(values, count)


def mat3_to_strings(mat: Mat3, mode: MatStrMode) -> tuple[str, ...]:
    return _matrix_to_strings(mat.to_cols_array(), mode)


def strings_to_mat3(strings: Sequence[str], mode: MatStrMode) -> Mat3:
    return Mat3.from_cols_array(_strings_to_cols(strings, mode, 9))


def mat4_to_strings(mat: Mat4, mode: MatStrMode) -> tuple[str, ...]:
    return _matrix_to_strings(mat.to_cols_array(), mode)


def strings_to_mat4(strings: Sequence[str], mode: MatStrMode) -> Mat4:
    return Mat4.from_cols_array(_strings_to_cols(strings, mode, 16))


def transpose_mat_io(values: Iterable[T]) -> tuple[T, ...]:
    """Transpose a flattened square matrix, switching between row and column order."""
    values = tuple(values)
    side = math.isqrt(len(values))
    if side * side != len(values):
        raise ValueError(f"{len(values)} values do not form a square matrix")
    rows = [values[start:start + side] for start in range(0, len(values), side)]
    return tuple(chain.from_iterable(zip(*rows)))