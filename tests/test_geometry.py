import math

import pytest

from meshforge.geometry import Vec3, Vertex, cross, normalize, triangle_normal


def test_cross_of_x_and_y_is_z():
    assert cross(Vec3(1, 0, 0), Vec3(0, 1, 0)) == Vec3(0, 0, 1)


def test_cross_is_anticommutative_and_orthogonal():
    a = Vec3(1.5, -2.0, 3.0)
    b = Vec3(0.5, 4.0, -1.0)
    ab = cross(a, b)
    ba = cross(b, a)
    assert ab == ba * -1
    assert ab.dot(a) == pytest.approx(0.0, abs=1e-9)
    assert ab.dot(b) == pytest.approx(0.0, abs=1e-9)


def test_normalize_gives_unit_parallel_vector():
    v = Vec3(3.0, -4.0, 12.0)
    n = normalize(v)
    assert n.length() == pytest.approx(1.0)
    assert cross(v, n).length() == pytest.approx(0.0, abs=1e-9)
    assert n.dot(v) > 0


def test_normalize_zero_vector_unchanged():
    assert normalize(Vec3()) == Vec3()


def test_triangle_normal_is_orthogonal_to_edges():
    p1, p2, p3 = Vec3(0, 0, 0), Vec3(2, 1, 0), Vec3(-1, 3, 2)
    n = triangle_normal(p1, p2, p3)
    assert n.length() > 0
    assert n.dot(p2 - p1) == pytest.approx(0.0, abs=1e-9)
    assert n.dot(p3 - p1) == pytest.approx(0.0, abs=1e-9)


def test_triangle_normal_degenerate_is_zero():
    p = Vec3(1, 2, 3)
    assert triangle_normal(p, p, p) == Vec3(0, 0, 0)


def test_vec3_arithmetic():
    a = Vec3(1, 2, 3)
    assert a - a == Vec3()
    assert a + a == 2 * a
    assert list(a) == [1, 2, 3]
    assert a.dot(a) == 14


def test_vertex_to_line_format():
    vertex = Vertex(1, 0.5, -2, 0, 1, 0, 0.25, 1)
    assert vertex.to_line() == "1 0.5 -2 0 1 0 0.25 1"


def test_vertex_to_line_round_trip():
    vertex = Vertex(0.125, -3.5, 7.0, 0.0, -1.0, 0.0, 0.75, 0.5)
    values = [float(token) for token in vertex.to_line().split()]
    assert Vertex(*values) == vertex


def test_vertex_from_parts_and_properties():
    position = Vec3(1.0, 2.0, 3.0)
    normal = Vec3(0.0, 0.0, -1.0)
    vertex = Vertex.from_parts(position, normal, 0.3, 0.7)
    assert vertex.position == position
    assert vertex.normal == normal
    assert (vertex.u, vertex.v) == (0.3, 0.7)
    assert math.isclose(vertex.normal.length(), 1.0)