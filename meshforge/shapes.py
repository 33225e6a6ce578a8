"""Triangle meshes of the basic primitives: plane, box, sphere and cone."""

from __future__ import annotations

import math
from typing import Callable, Iterator

from meshforge.geometry import Vec3, Vertex

# A cell corner: (column, row), 0 for the low edge and 1 for the high edge.
_Corner = tuple[int, int]
_Cell = tuple[tuple[float, float], tuple[float, float], tuple[float, float], tuple[float, float]]

_NAN_NORMAL = Vec3(math.nan, math.nan, math.nan)


def _cells(size: float, divisions: int) -> Iterator[_Cell]:
    """Yield (a-range, b-range, u-range, v-range) for each grid cell, row by row."""
    half = size / 2.0
    cell = size / divisions
    for i in range(divisions):
        for j in range(divisions):
            a1 = -half + j * cell
            b1 = -half + i * cell
            yield (
                (a1, a1 + cell),
                (b1, b1 + cell),
                (j / divisions, (j + 1) / divisions),
                (i / divisions, (i + 1) / divisions),
            )


def _grid(
    size: float,
    divisions: int,
    place: Callable[[float, float], Vec3],
    normal: Vec3,
    order: tuple[_Corner, ...],
) -> Iterator[Vertex]:
    for a, b, us, vs in _cells(size, divisions):
        for ca, cb in order:
            yield Vertex.from_parts(place(a[ca], b[cb]), normal, us[ca], vs[cb])


def generate_plane(size: float, divisions: int) -> list[Vertex]:
    """A square in the XZ plane centred on the origin, facing +Y."""
    if divisions <= 0:
        return []
    order = ((1, 1), (1, 0), (0, 0), (0, 0), (0, 1), (1, 1))
    return list(
        _grid(size, divisions, lambda a, b: Vec3(a, 0.0, b), Vec3(0.0, 1.0, 0.0), order)
    )


def generate_box(size: float, divisions: int) -> list[Vertex]:
    """An axis-aligned cube centred on the origin, faces split into a grid."""
    if divisions <= 0:
        return []
    half = size / 2.0
    faces: tuple[tuple[Vec3, Callable[[float, float], Vec3], tuple[_Corner, ...]], ...] = (
        (Vec3(0.0, 0.0, 1.0), lambda a, b: Vec3(a, b, half),
         ((1, 1), (0, 0), (1, 0), (0, 0), (1, 1), (0, 1))),
        (Vec3(0.0, 0.0, -1.0), lambda a, b: Vec3(a, b, -half),
         ((0, 0), (0, 1), (1, 1), (1, 0), (0, 0), (1, 1))),
        (Vec3(1.0, 0.0, 0.0), lambda a, b: Vec3(half, b, a),
         ((1, 1), (1, 0), (0, 0), (1, 1), (0, 0), (0, 1))),
        (Vec3(-1.0, 0.0, 0.0), lambda a, b: Vec3(-half, b, a),
         ((0, 0), (1, 0), (1, 1), (0, 1), (0, 0), (1, 1))),
        (Vec3(0.0, 1.0, 0.0), lambda a, b: Vec3(a, half, b),
         ((0, 0), (1, 1), (1, 0), (0, 0), (0, 1), (1, 1))),
        (Vec3(0.0, -1.0, 0.0), lambda a, b: Vec3(a, -half, b),
         ((0, 0), (1, 0), (1, 1), (1, 1), (0, 1), (0, 0))),
    )
    vertices: list[Vertex] = []
    for normal, place, order in faces:
        vertices.extend(_grid(size, divisions, place, normal, order))
    return vertices


def _sphere_vertex(radius: float, theta: float, phi: float) -> Vertex:
    position = Vec3(
        radius * math.sin(theta) * math.cos(phi),
        radius * math.cos(theta),
        radius * math.sin(theta) * math.sin(phi),
    )
    normal = position * (1.0 / radius) if radius else _NAN_NORMAL
    u = 1.0 - phi / (2.0 * math.pi)
    v = theta / math.pi
    return Vertex.from_parts(position, normal, u, v)


def generate_sphere(radius: float, slices: int, stacks: int) -> list[Vertex]:
    """A UV sphere centred on the origin, poles on the Y axis."""
    vertices: list[Vertex] = []
    if slices <= 0 or stacks <= 0:
        return vertices
    for i in range(stacks):
        theta1 = math.pi * (i / stacks)
        theta2 = math.pi * ((i + 1) / stacks)
        for j in range(slices):
            phi1 = 2.0 * math.pi * (j + 0.5) / slices
            phi2 = 2.0 * math.pi * (j + 1.5) / slices
            v1 = _sphere_vertex(radius, theta1, phi1)
            v2 = _sphere_vertex(radius, theta1, phi2)
            v3 = _sphere_vertex(radius, theta2, phi1)
            v4 = _sphere_vertex(radius, theta2, phi2)
            vertices.extend((v1, v2, v3, v3, v2, v4))
    return vertices


def generate_cone(radius: float, height: float, slices: int, stacks: int) -> list[Vertex]:
    """A cone with its base disc on y=0 and its apex at y=height."""
    vertices: list[Vertex] = []
    if slices <= 0:
        return vertices

    angle_step = 2.0 * math.pi / slices
    down = Vec3(0.0, -1.0, 0.0)

    for i in range(slices):
        theta = i * angle_step
        next_theta = (i + 1) * angle_step
        vertices.append(Vertex.from_parts(Vec3(), down, 0.5, 0.5))
        vertices.append(Vertex.from_parts(
            Vec3(radius * math.cos(theta), 0.0, radius * math.sin(theta)),
            down, i / slices, 0.0))
        vertices.append(Vertex.from_parts(
            Vec3(radius * math.cos(next_theta), 0.0, radius * math.sin(next_theta)),
            down, (i + 1) / slices, 0.0))

    if stacks <= 0:
        return vertices

    stack_height = height / stacks
    radius_step = radius / stacks
    slant = math.sqrt(height * height + radius * radius)

    def side_normal(angle: float) -> Vec3:
        if slant == 0.0:
            return _NAN_NORMAL
        return Vec3(
            (height / slant) * math.cos(angle),
            radius / slant,
            (height / slant) * math.sin(angle),
        )

    def side_vertex(ring_radius: float, y: float, angle: float, normal: Vec3,
                    u: float, v: float) -> Vertex:
        position = Vec3(ring_radius * math.cos(angle), y, ring_radius * math.sin(angle))
        return Vertex.from_parts(position, normal, u, v)

    for j in range(stacks):
        current_height = j * stack_height
        next_height = (j + 1) * stack_height
        current_radius = radius - j * radius_step
        next_radius = radius - (j + 1) * radius_step
        v_low = j / stacks
        v_high = (j + 1) / stacks

        for i in range(slices):
            theta = i * angle_step
            next_theta = (i + 1) * angle_step
            n1 = side_normal(theta)
            n2 = side_normal(next_theta)
            u1 = i / slices
            u2 = (i + 1) / slices

            p1 = side_vertex(current_radius, current_height, theta, n1, u1, v_low)
            p2 = side_vertex(current_radius, current_height, next_theta, n2, u2, v_low)
            p3 = side_vertex(next_radius, next_height, theta, n1, u1, v_high)
            p4 = side_vertex(next_radius, next_height, next_theta, n2, u2, v_high)
            vertices.extend((p1, p3, p4, p2, p1, p4))

    return vertices