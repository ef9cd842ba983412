import pytest

from quatview.conversion import (
    MatStrMode,
    QuatStrMode,
    format_float,
    mat3_to_strings,
    mat4_to_strings,
    parse_float,
    quat_to_strings,
    strings_to_mat3,
    strings_to_mat4,
    strings_to_quat,
    strings_to_vec,
    transpose_mat_io,
    vec_to_strings,
)
from quatview.linalg import Mat3, Mat4, Quat, Vec3


def test_format_whole_number_has_no_fraction():
    assert format_float(1.0) == "1"


def test_format_nan():
    assert format_float(float("nan")) == "NaN"


@pytest.mark.parametrize("text", ["", "abc", " 1", "1 ", "1,5", "1_0", ".", "e5", "--1"])
def test_parse_invalid_reads_as_zero(text):
    assert parse_float(text) == 0.0


@pytest.mark.parametrize("text", ["2.5", ".5", "5.", "+3", "-0.25", "1e2", "inf", "-infinity", "INF"])
def test_parse_valid_forms(text):
    assert parse_float(text) == float(text)


def test_parse_rounds_to_single_precision():
    value = parse_float("0.1")
    assert value == pytest.approx(0.1, rel=1e-7)
    assert value != 0.1
    assert format_float(value) == "0.1"


@pytest.mark.parametrize("source", ["0.3", "-1234.5678", "1e-8", "3.4e38", "6e20", "-0.0"])
def test_format_parse_round_trip_without_exponent(source):
    value = parse_float(source)
    text = format_float(value)
    assert parse_float(text) == value
    assert "e" not in text


@pytest.mark.parametrize("mode", list(QuatStrMode))
def test_quat_round_trip(mode):
    quat = Quat(parse_float("0.25"), parse_float("-0.5"), parse_float("0.125"), parse_float("0.75"))
    assert strings_to_quat(quat_to_strings(quat, mode), mode) == quat


def test_quat_component_order():
    assert strings_to_quat(["4", "1", "2", "3"], QuatStrMode.WXYZ) == Quat(1.0, 2.0, 3.0, 4.0)
    assert strings_to_quat(["1", "2", "3", "4"], QuatStrMode.XYZW) == Quat(1.0, 2.0, 3.0, 4.0)
    wxyz = quat_to_strings(Quat(1.0, 2.0, 3.0, 4.0), QuatStrMode.WXYZ)
    xyzw = quat_to_strings(Quat(1.0, 2.0, 3.0, 4.0), QuatStrMode.XYZW)
    assert wxyz == (xyzw[3], *xyzw[:3])


def test_vec_round_trip_and_bad_fields():
    vec = Vec3(1.5, -2.0, 8.0)
    assert strings_to_vec(vec_to_strings(vec)) == vec
    assert strings_to_vec(["x", "2", "y"]) == Vec3(y=2.0)


@pytest.mark.parametrize("mode", list(MatStrMode))
def test_mat3_round_trip(mode):
    mat = Mat3.from_cols_array([1, 2, 3, 4, 5, 6, 7, 8, 9])
    assert strings_to_mat3(mat3_to_strings(mat, mode), mode) == mat


def test_mat3_row_major_layout():
    mat = Mat3.from_cols_array([1, 2, 3, 4, 5, 6, 7, 8, 9])
    row = mat3_to_strings(mat, MatStrMode.ROW_MAJOR)
    col = mat3_to_strings(mat, MatStrMode.COL_MAJOR)
    assert row == transpose_mat_io(col)
    assert row[:3] == tuple(format_float(c) for c in (mat.x_axis.x, mat.y_axis.x, mat.z_axis.x))
    assert strings_to_mat3(col, MatStrMode.COL_MAJOR) == strings_to_mat3(row, MatStrMode.ROW_MAJOR)


@pytest.mark.parametrize("mode", list(MatStrMode))
def test_mat4_round_trip(mode):
    mat = Mat4.from_cols_array([float(i) for i in range(16)])
    assert strings_to_mat4(mat4_to_strings(mat, mode), mode) == mat


def test_mat4_row_major_puts_translation_in_last_column():
    translation = Vec3(3.0, -4.0, 5.0)
    mat = Mat4.from_scale_rotation_translation(Vec3.ONE, Quat.identity(), translation)
    row = mat4_to_strings(mat, MatStrMode.ROW_MAJOR)
    assert (row[3], row[7], row[11]) == vec_to_strings(translation)


def test_transpose_twice_is_identity():
    values = tuple(str(i) for i in range(16))
    assert transpose_mat_io(transpose_mat_io(values)) == values
    assert transpose_mat_io(values)[1] == values[4]


def test_transpose_rejects_non_square():
    with pytest.raises(ValueError):
        transpose_mat_io(["1", "2", "3"])


@pytest.mark.parametrize(
    "call",
    [
        lambda: strings_to_vec(["1", "2"]),
        lambda: strings_to_quat(["1", "2", "3"], QuatStrMode.WXYZ),
        lambda: strings_to_mat3(["1"] * 16, MatStrMode.ROW_MAJOR),
        lambda: strings_to_mat4(["1"] * 9, MatStrMode.COL_MAJOR),
    ],
)
def test_wrong_count_raises(call):
    with pytest.raises(ValueError):
        call()