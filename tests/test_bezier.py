import math

import pytest

from meshforge.bezier import (
    bernstein,
    bernstein_derivative,
    evaluate_patch,
    evaluate_patch_derivatives,
    generate_bezier,
    tessellate,
)
from meshforge.geometry import Vec3
from meshforge.patches import Patch, PatchError


def _flat_points():
    # index j*4+i holds the point (i/3, 0, j/3): a flat unit square
    return [Vec3(i / 3, 0.0, j / 3) for j in range(4) for i in range(4)]


FLAT_PATCH = Patch(tuple(range(16)))


def _patch_text():
    lines = ["1", ", ".join(str(k) for k in range(16)), "16"]
    lines += [f"{p.x}, {p.y}, {p.z}" for p in _flat_points()]
    return "\n".join(lines) + "\n"


@pytest.mark.parametrize("t", [0.0, 0.25, 0.5, 0.8, 1.0])
def test_bernstein_partition_of_unity(t):
    assert sum(bernstein(i, t) for i in range(4)) == pytest.approx(1.0)


@pytest.mark.parametrize("t", [0.0, 0.3, 0.5, 1.0])
def test_bernstein_derivatives_sum_to_zero(t):
    assert sum(bernstein_derivative(i, t) for i in range(4)) == pytest.approx(0.0)


def test_bernstein_endpoints():
    assert bernstein(0, 0.0) == 1.0
    assert bernstein(3, 1.0) == 1.0
    assert bernstein(1, 0.0) == 0.0


def test_bernstein_out_of_range_is_zero():
    assert bernstein(4, 0.5) == 0.0
    assert bernstein_derivative(-1, 0.5) == 0.0


def test_derivative_matches_finite_difference():
    h = 1e-6
    for i in range(4):
        numeric = (bernstein(i, 0.4 + h) - bernstein(i, 0.4 - h)) / (2 * h)
        assert bernstein_derivative(i, 0.4) == pytest.approx(numeric, abs=1e-5)


def test_patch_interpolates_corners():
    points = _flat_points()
    assert tuple(evaluate_patch(points, FLAT_PATCH, 0.0, 0.0)) == pytest.approx(tuple(points[0]))
    assert tuple(evaluate_patch(points, FLAT_PATCH, 1.0, 1.0)) == pytest.approx(tuple(points[15]))
    assert tuple(evaluate_patch(points, FLAT_PATCH, 1.0, 0.0)) == pytest.approx(tuple(points[3]))


@pytest.mark.parametrize("u,v", [(0.2, 0.7), (0.5, 0.5), (0.9, 0.1)])
def test_flat_patch_has_linear_precision(u, v):
    p = evaluate_patch(_flat_points(), FLAT_PATCH, u, v)
    assert tuple(p) == pytest.approx((u, 0.0, v))


def test_flat_patch_derivatives():
    du, dv = evaluate_patch_derivatives(_flat_points(), FLAT_PATCH, 0.3, 0.6)
    assert tuple(du) == pytest.approx((1.0, 0.0, 0.0))
    assert tuple(dv) == pytest.approx((0.0, 0.0, 1.0))


def test_tessellate_vertex_count_and_normals():
    vertices = tessellate([FLAT_PATCH, FLAT_PATCH], _flat_points(), 3)
    assert len(vertices) == 2 * 3 * 3 * 6
    for vertex in vertices:
        assert vertex.normal.length() == pytest.approx(1.0)
        assert vertex.ny == pytest.approx(-1.0)
        assert 0.0 <= vertex.u <= 1.0 and 0.0 <= vertex.v <= 1.0


def test_tessellate_positions_lie_on_surface():
    points = _flat_points()
    for vertex in tessellate([FLAT_PATCH], points, 4):
        expected = evaluate_patch(points, FLAT_PATCH, vertex.u, vertex.v)
        assert tuple(vertex.position) == pytest.approx(tuple(expected))


def test_tessellate_zero_gives_nothing():
    assert tessellate([FLAT_PATCH], _flat_points(), 0) == []


def test_tessellate_rejects_bad_index():
    with pytest.raises(PatchError):
        tessellate([Patch(tuple(range(1, 17)))], _flat_points(), 2)


def test_generate_bezier_from_file(tmp_path):
    path = tmp_path / "flat.patch"
    path.write_text(_patch_text())
    from_file = generate_bezier(path, 2)
    assert from_file == tessellate([FLAT_PATCH], _flat_points(), 2)
    assert all(not math.isnan(v.nx) for v in from_file)


def test_generate_bezier_missing_file(tmp_path):
    with pytest.raises(PatchError):
        generate_bezier(tmp_path / "absent.patch", 2)