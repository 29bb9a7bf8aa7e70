# ampkit

Spatial building blocks for large open-world engines, in pure Python. The
package has no runtime dependencies.

## Modules

`ampkit.vecmath` provides the vector math types:

- `Vec2` and `Vec3` are frozen vectors with arithmetic, `length`, `dot`,
  `cross`, `normalize`, `lerp`, `min`, `max` and `clamp`.
- `Quat` is a rotation quaternion. It has `from_rotation_x`, `from_rotation_y`
  and `from_rotation_z`, and `from_mat3`. It offers `rotate` (or `q * v`),
  `lerp`, `slerp` and `to_axis_angle`.
- `Mat3` is a 3x3 matrix stored as columns, with `from_cols` and `from_quat`.
- `Mat4` is a 4x4 matrix stored as columns. It has these constructors:
  - `identity`
  - `from_translation`
  - `from_scale_rotation_translation`
  - `perspective_rh`, a right-handed projection with depth in [0, 1]

  It also offers `determinant`, `inverse`, `to_scale_rotation_translation`,
  `transform_point3`, and matrix product with `@`.

`ampkit.bounds` provides the bounding volumes:

- `Aabb` is an axis-aligned box. It has the constructors `from_corners`,
  `from_center_half_extents`, `empty` and `infinite`. It offers containment
  tests, intersection tests against boxes and spheres, in-place expansion, and
  `grow`.
- `Sphere` is a sphere whose negative radius is clamped to zero. It offers
  containment tests, intersection tests, `bounding_box` and in-place expansion.

`ampkit.morton` provides Z-order encoding:

- `morton_encode_2d` and `morton_decode_2d` use 16 bits per axis.
- `morton_encode_3d` clamps a `Vec3` to `[0, MAX_COORD_3D]`.
- `morton_encode_3d_normalized` and `morton_decode_3d` use 21 bits per axis.
- `common_prefix_length` returns the number of leading bits two codes share.

`ampkit.region` provides the region types:

- `RegionId` is keyed by a 2D Morton code. It offers `from_coords`,
  `to_coords`, `parent`, `children`, `level` and `neighbors`.
- `RegionBounds` is a rectangle with `center`, `size`, `contains_point` and
  `intersects`.
- `Region` has two lookups:
  - `from_world_coords` returns the cell that holds a world position.
  - `regions_in_area` returns every cell that touches a rectangle.

`ampkit.clipmap` provides `HierarchicalClipmap` and its `ClipmapConfig`:

- It keeps a square of active regions around a center at each level of detail.
- The regions are recomputed only when `update_center` moves the center further
  than `base_size * transition_distance`.
- `calculate_lod_level` picks a level for a distance.

Invalid input raises `ValueError`. This covers:

- normalizing a zero-length vector
- inverting a singular matrix
- perspective parameters that are out of range
- an out-of-range `ClipmapConfig`
- a negative region level

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

Bounding volumes:

```python
from ampkit.bounds import Aabb, Sphere
from ampkit.vecmath import Vec3

box = Aabb.from_corners(Vec3(1.0, 1.0, 1.0), Vec3(-1.0, -1.0, -1.0))
assert box.min == Vec3(-1.0, -1.0, -1.0)
assert box.intersects_sphere(Sphere(Vec3(1.5, 0.0, 0.0), 1.0))

box.grow(0.5)
assert box.size() == Vec3.splat(3.0)
```

Rotations and matrices:

```python
import math
from ampkit.vecmath import Mat4, Quat, Vec3

rotation = Quat.from_rotation_y(math.pi / 2)
matrix = Mat4.from_scale_rotation_translation(Vec3.splat(2.0), rotation, Vec3(1.0, 2.0, 3.0))
point = matrix.transform_point3(Vec3(1.0, 0.0, 0.0))
scale, rotation_back, translation = matrix.to_scale_rotation_translation()
```

Morton codes:

```python
from ampkit.morton import morton_decode_2d, morton_encode_2d

code = morton_encode_2d(42, 84)
assert morton_decode_2d(code) == (42, 84)
```

Regions:

```python
from ampkit.region import Region, RegionId
from ampkit.vecmath import Vec2

region_id = RegionId.from_coords(5, 5)
print(region_id)                  # Region(5, 5)
print(len(region_id.neighbors())) # 8

cell = Region.from_world_coords(Vec2(150.0, 250.0), 0, 100.0)
print(cell.bounds.min, cell.bounds.max)  # (100, 200) to (200, 300)
```

Clipmaps:

```python
from ampkit.clipmap import HierarchicalClipmap
from ampkit.vecmath import Vec2

clipmap = HierarchicalClipmap(center=Vec2(0.0, 0.0))
clipmap.update_center(Vec2(1000.0, 1000.0))  # True: moved past the threshold
print(clipmap.calculate_lod_level(250.0))     # 1
print(len(clipmap.active_regions(0)))
```

## What it does not do

The package decides which regions should be active. It does not load, cache or
stream region data from memory or disk; that is left to the caller.

There is no higher-level transform or camera object either. Compose `Vec3`,
`Quat` and `Mat4` directly, for example with `Mat4.perspective_rh` and
`Mat4.inverse` for view-projection matrices.

The package defines no exception types of its own; it raises `ValueError`.