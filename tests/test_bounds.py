import pytest

from ampkit.bounds import Aabb, Sphere
from ampkit.vecmath import Vec3


def unit_box() -> Aabb:
    return Aabb.from_corners(Vec3(-1.0, -1.0, -1.0), Vec3(1.0, 1.0, 1.0))


def test_aabb_creation():
    aabb = Aabb.from_corners(Vec3(-1.0, -2.0, -3.0), Vec3(1.0, 2.0, 3.0))
    assert aabb.min == Vec3(-1.0, -2.0, -3.0)
    assert aabb.max == Vec3(1.0, 2.0, 3.0)


def test_aabb_swapped_bounds():
    aabb = Aabb.from_corners(Vec3(1.0, 2.0, 3.0), Vec3(-1.0, -2.0, -3.0))
    assert aabb.min == Vec3(-1.0, -2.0, -3.0)
    assert aabb.max == Vec3(1.0, 2.0, 3.0)


def test_aabb_from_center_half_extents():
    aabb = Aabb.from_center_half_extents(Vec3(1.0, 2.0, 3.0), Vec3(0.5, 1.0, 1.5))
    assert aabb.min == Vec3(0.5, 1.0, 1.5)
    assert aabb.max == Vec3(1.5, 3.0, 4.5)


def test_aabb_empty():
    aabb = Aabb.empty()
    assert aabb.is_empty()
    assert not aabb.contains_point(Vec3.ZERO)


def test_aabb_default_is_empty():
    assert Aabb().is_empty()
    assert Aabb() == Aabb.empty()


def test_aabb_infinite_contains_everything():
    aabb = Aabb.infinite()
    assert not aabb.is_empty()
    assert aabb.contains_point(Vec3(1.0e30, -1.0e30, 5.0))
    assert aabb.contains_aabb(unit_box())


def test_aabb_properties():
    aabb = Aabb.from_corners(Vec3(-1.0, -2.0, -3.0), Vec3(1.0, 2.0, 3.0))
    assert aabb.center() == Vec3(0.0, 0.0, 0.0)
    assert aabb.size() == Vec3(2.0, 4.0, 6.0)
    assert aabb.half_extents() == Vec3(1.0, 2.0, 3.0)


def test_aabb_point_containment():
    aabb = unit_box()
    assert aabb.contains_point(Vec3.ZERO)
    assert aabb.contains_point(Vec3(1.0, 1.0, 1.0))
    assert aabb.contains_point(Vec3(-1.0, -1.0, -1.0))
    assert not aabb.contains_point(Vec3(2.0, 0.0, 0.0))


def test_aabb_aabb_containment():
    outer = Aabb.from_corners(Vec3(-2.0, -2.0, -2.0), Vec3(2.0, 2.0, 2.0))
    inner = unit_box()
    overlapping = Aabb.from_corners(Vec3(0.0, 0.0, 0.0), Vec3(3.0, 3.0, 3.0))
    assert outer.contains_aabb(inner)
    assert not inner.contains_aabb(outer)
    assert not outer.contains_aabb(overlapping)


def test_aabb_intersection():
    aabb1 = unit_box()
    aabb2 = Aabb.from_corners(Vec3(0.0, 0.0, 0.0), Vec3(2.0, 2.0, 2.0))
    aabb3 = Aabb.from_corners(Vec3(3.0, 3.0, 3.0), Vec3(4.0, 4.0, 4.0))
    assert aabb1.intersects_aabb(aabb2)
    assert aabb2.intersects_aabb(aabb1)
    assert not aabb1.intersects_aabb(aabb3)


def test_aabb_sphere_intersection():
    aabb = unit_box()
    assert aabb.intersects_sphere(Sphere(Vec3.ZERO, 0.5))
    assert aabb.intersects_sphere(Sphere(Vec3(1.5, 0.0, 0.0), 1.0))
    assert not aabb.intersects_sphere(Sphere(Vec3(5.0, 0.0, 0.0), 1.0))


def test_aabb_sphere_intersection_doc_example():
    assert unit_box().intersects_sphere(Sphere(Vec3.ZERO, 1.0))


def test_aabb_expansion():
    aabb = Aabb.empty()
    aabb.expand_to_include_point(Vec3(1.0, 2.0, 3.0))
    assert aabb.min == Vec3(1.0, 2.0, 3.0)
    assert aabb.max == Vec3(1.0, 2.0, 3.0)

    aabb.expand_to_include_point(Vec3(-1.0, -2.0, -3.0))
    assert aabb.min == Vec3(-1.0, -2.0, -3.0)
    assert aabb.max == Vec3(1.0, 2.0, 3.0)


def test_aabb_expand_to_include_aabb():
    aabb1 = unit_box()
    aabb2 = Aabb.from_corners(Vec3(0.0, 0.0, 0.0), Vec3(2.0, 2.0, 2.0))
    aabb1.expand_to_include_aabb(aabb2)
    assert aabb1.contains_aabb(aabb2)
    assert aabb1.min == Vec3(-1.0, -1.0, -1.0)
    assert aabb1.max == Vec3(2.0, 2.0, 2.0)


def test_aabb_expand_with_empty_is_noop():
    aabb = unit_box()
    aabb.expand_to_include_aabb(Aabb.empty())
    assert aabb == unit_box()


def test_empty_aabb_expanded_by_box_becomes_that_box():
    aabb = Aabb.empty()
    aabb.expand_to_include_aabb(unit_box())
    assert aabb == unit_box()


def test_aabb_grow():
    aabb = unit_box()
    aabb.grow(0.5)
    assert aabb.min == Vec3(-1.5, -1.5, -1.5)
    assert aabb.max == Vec3(1.5, 1.5, 1.5)
    assert aabb.size() == Vec3.splat(3.0)


def test_sphere_creation():
    sphere = Sphere(Vec3(1.0, 2.0, 3.0), 5.0)
    assert sphere.center == Vec3(1.0, 2.0, 3.0)
    assert sphere.radius == 5.0

    negative_radius = Sphere(Vec3.ZERO, -1.0)
    assert negative_radius.radius == 0.0


def test_sphere_default():
    sphere = Sphere()
    assert sphere.center == Vec3.ZERO
    assert sphere.radius == 0.0


def test_sphere_point_containment():
    sphere = Sphere(Vec3.ZERO, 1.0)
    assert sphere.contains_point(Vec3.ZERO)
    assert sphere.contains_point(Vec3(0.5, 0.5, 0.5))
    assert not sphere.contains_point(Vec3(2.0, 0.0, 0.0))


def test_sphere_sphere_containment():
    outer = Sphere(Vec3.ZERO, 2.0)
    inner = Sphere(Vec3.ZERO, 1.0)
    overlapping = Sphere(Vec3(1.5, 0.0, 0.0), 1.0)
    assert outer.contains_sphere(inner)
    assert not inner.contains_sphere(outer)
    assert not outer.contains_sphere(overlapping)


def test_sphere_intersection():
    sphere1 = Sphere(Vec3.ZERO, 1.0)
    sphere2 = Sphere(Vec3(1.5, 0.0, 0.0), 1.0)
    sphere3 = Sphere(Vec3(5.0, 0.0, 0.0), 1.0)
    assert sphere1.intersects_sphere(sphere2)
    assert not sphere1.intersects_sphere(sphere3)


def test_sphere_bounding_box():
    aabb = Sphere(Vec3(1.0, 2.0, 3.0), 1.5).bounding_box()
    assert aabb.min == Vec3(-0.5, 0.5, 1.5)
    assert aabb.max == Vec3(2.5, 3.5, 4.5)


def test_unit_sphere_bounding_box_size():
    assert Sphere(Vec3.ZERO, 1.0).bounding_box().size() == Vec3.splat(2.0)


def test_sphere_expansion():
    sphere = Sphere(Vec3.ZERO, 1.0)
    sphere.expand_to_include_point(Vec3(3.0, 0.0, 0.0))
    assert sphere.radius == 3.0
    assert sphere.contains_point(Vec3(3.0, 0.0, 0.0))

    sphere2 = Sphere(Vec3(5.0, 0.0, 0.0), 1.0)
    sphere.expand_to_include_sphere(sphere2)
    assert sphere.radius == 6.0
    assert sphere.contains_sphere(sphere2)


def test_sphere_expansion_never_shrinks():
    sphere = Sphere(Vec3.ZERO, 4.0)
    sphere.expand_to_include_point(Vec3(1.0, 0.0, 0.0))
    sphere.expand_to_include_sphere(Sphere(Vec3(1.0, 0.0, 0.0), 1.0))
    assert sphere.radius == 4.0


@pytest.mark.parametrize(
    "point",
    [Vec3(0.3, -4.0, 2.0), Vec3(10.0, 10.0, 10.0), Vec3(-7.5, 0.0, 1.0)],
)
def test_expanded_box_contains_original_and_point(point):
    aabb = unit_box()
    aabb.expand_to_include_point(point)
    assert aabb.contains_point(point)
    assert aabb.contains_aabb(unit_box())