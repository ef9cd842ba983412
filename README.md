# quatview

A small pure-Python library for working with rotations and transforms in a
coordinate system of your choice. It converts between quaternions, XYZ Euler
angles, 3×3 rotation matrices and 4×4 transform matrices. It also keeps a scene
of arrows and groups in sync between your coordinate convention and an internal
frame, which is right-handed with Y up and −Z forward.

## Installation

```
pip install .
```

The package needs no third-party libraries at runtime.

## Modules

- `quatview.linalg` provides the immutable value types `Vec3`, `Quat`, `Mat3`, `Mat4`
  and `Transform`.
  - `Quat` has the constructors `from_axis_angle`, `from_rotation_x`,
    `from_rotation_arc`, `from_mat3` and `from_euler_xyz`. It also has
    `to_euler_xyz`, `normalize`, `inverse` and `rotate`.
  - `Mat3` and `Mat4` are stored column by column.
    `Mat4.to_scale_rotation_translation` breaks an affine matrix down into its parts.
  - `Transform` supports `looking_to`, `looking_at`, `mul_transform` and `compute_matrix`.
- `quatview.conversion` reads and writes the text of input fields.
  - `format_float` writes the shortest plain decimal that reads back to the same
    single-precision value.
  - `parse_float` reads text as single precision. Text that is not a number reads as `0`.
  - `quat_to_strings` and `strings_to_quat` take `QuatStrMode.XYZW` or `QuatStrMode.WXYZ`.
  - `vec_to_strings` and `strings_to_vec` handle vectors.
  - `mat3_to_strings`, `strings_to_mat3`, `mat4_to_strings` and `strings_to_mat4`
    take `MatStrMode.ROW_MAJOR` or `MatStrMode.COL_MAJOR`.
  - `transpose_mat_io` transposes a flattened square matrix.
  - A wrong number of values raises `ValueError`.
- `quatview.clipboard` handles comma-separated text.
  - `clip_copy(values)` joins values with commas.
  - `clip_paste(text, count)` splits text on commas and trims each value. The result
    always has `count` values: missing ones are filled with `"0"` and extra ones are dropped.
- `quatview.geometry` maps between user and internal coordinates.
  - `Axis`, `Hand` and `PositionMode` describe the convention.
  - `CoordinateSystem.from_config` builds the user↔internal mapping.
  - `convert_rotation`, `convert_position_u2i` and `convert_position_i2u` convert
    rotations and positions.
  - `ApplyTransformCommand` is a change entered in user coordinates. Its constructors
    are `recompute`, `pos`, `rot_quat`, `rot_mat`, `rot_euler` (radians) and `tf_mat`.
  - `apply_transform` applies such a change to an internal transform.
- `quatview.config` provides `ConfigIO`.
  - It holds the up and forward axes and their signs, the handedness, the position
    mode, the positions scale (kept at or above 0.00001) and `keep_numbers`.
  - Selecting an up axis that is already the forward axis swaps the two.
  - Every edit sets `changed`.
- `quatview.repr` handles display settings.
  - `ReprSettings` holds optional overrides of colour, length and scale.
    `ReprSettings.resolve` fills each unset field from the parent's
    `ComputedRepresentation`.
  - `set_override` and `edit` switch and change single fields. Lengths and scales are
    kept at or above 0.01.
- `quatview.scene` provides `Scene`, which holds `Arrow` and `Group` objects. A new scene
  starts with one arrow, named "Arrow 1".
  - `add_arrow`, `add_group` and `delete` change its contents. Deleting a group also
    deletes its arrows.
  - `members` lists the arrows in a group.
  - `send` queues an `ApplyTransformCommand`.
  - `update` applies the queued commands and any configuration change. It then
    refreshes each arrow's user-space values (`ArrowIO`: position, WXYZ quaternion
    strings, Euler angles in degrees, and row-major rotation and transform matrix
    strings) and its resolved display settings.
  - `arrow_windows` lists the arrows that are shown on their own.
  - `toggle_pop_out` moves a group's arrow into its own window or back into the group.
- `quatview.camera` provides `PanOrbitCamera`. It computes the camera transform after
  a mouse drag around a focus point.
- `quatview.mesh` provides `create_plane_mesh`, a line grid in the XZ plane.
  `arrow_parts` describes the shaft, hook and tip primitives of an arrow.

## Examples

```python
from quatview.linalg import Mat3, Quat
from quatview.conversion import (
    MatStrMode, QuatStrMode, mat3_to_strings, quat_to_strings, strings_to_quat,
)

q = Quat(0.5, 0.5, 0.5, 0.5)
text = quat_to_strings(q, QuatStrMode.WXYZ)          # ('0.5', '0.5', '0.5', '0.5')
assert strings_to_quat(text, QuatStrMode.WXYZ) == q

assert mat3_to_strings(Mat3.identity(), MatStrMode.ROW_MAJOR) == (
    "1", "0", "0", "0", "1", "0", "0", "0", "1",
)
```

This example drives a scene:

```python
import math
from quatview.geometry import ApplyTransformCommand, Axis
from quatview.linalg import Vec3
from quatview.scene import Scene

scene = Scene()
arrow = next(iter(scene.arrows.values()))
scene.send(ApplyTransformCommand.rot_euler(arrow.entity, Vec3(0.0, 0.0, math.radians(90))))
scene.update()
print(arrow.io.quat, arrow.io.mat)

scene.config.select_up(Axis.Z)   # switch to a Z-up convention
scene.update()                   # arrow values are now given in the new convention
```

## What this package does not do

The package has no window, renderer, input handling or command-line program. It holds
the model, the conversions and the geometry that an interactive viewer would drive.
The code that commits typed field values and that applies, copies and pastes the
values of an arrow's editing panel is not part of it. `clip_copy` and `clip_paste`
work on strings only and never touch the system clipboard.

## Running the tests

```
pip install .[test]
pytest
```