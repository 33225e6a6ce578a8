"""Scene animation: curve-following and timed transforms, evaluated to matrices."""

from __future__ import annotations

import math
from typing import Iterable, Iterator, Sequence

from meshforge.geometry import Vec3, cross
from meshforge.models import Model
from meshforge.scene import Group, ModelInfo, Transform, TransformType

Matrix = tuple[
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
]

IDENTITY: Matrix = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)

MODELS_PREFIX = "../models/"

# Rotations about an axis shorter than this leave the matrix unchanged.
_MIN_AXIS_LENGTH = 1e-4


def _multiply(a: Matrix, b: Matrix) -> Matrix:
    columns = tuple(zip(*b))
    return tuple(
        tuple(sum(x * y for x, y in zip(row, column)) for column in columns)
        for row in a
    )  # type: ignore[return-value]


def _translation(offset: Vec3) -> Matrix:
    return (
        (1.0, 0.0, 0.0, offset.x),
        (0.0, 1.0, 0.0, offset.y),
        (0.0, 0.0, 1.0, offset.z),
        (0.0, 0.0, 0.0, 1.0),
    )


def _scaling(factors: Vec3) -> Matrix:
    return (
        (factors.x, 0.0, 0.0, 0.0),
        (0.0, factors.y, 0.0, 0.0),
        (0.0, 0.0, factors.z, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def _rotation(angle_degrees: float, axis: Vec3) -> Matrix:
    length = axis.length()
    if length < _MIN_AXIS_LENGTH:
        return IDENTITY
    x, y, z = (component / length for component in axis)
    radians = math.radians(angle_degrees)
    c = math.cos(radians)
    s = math.sin(radians)
    k = 1.0 - c
    return (
        (x * x * k + c, x * y * k - z * s, x * z * k + y * s, 0.0),
        (y * x * k + z * s, y * y * k + c, y * z * k - x * s, 0.0),
        (x * z * k - y * s, y * z * k + x * s, z * z * k + c, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def catmull_rom_point(
    t: float, p0: Vec3, p1: Vec3, p2: Vec3, p3: Vec3
) -> tuple[Vec3, Vec3]:
    """Return the position and derivative at t of the Catmull-Rom segment p1..p2."""
    a0 = p0 * -0.5 + p1 * 1.5 + p2 * -1.5 + p3 * 0.5
    a1 = p0 * 1.0 + p1 * -2.5 + p2 * 2.0 + p3 * -0.5
    a2 = p0 * -0.5 + p2 * 0.5
    a3 = p1
    position = a0 * (t * t * t) + a1 * (t * t) + a2 * t + a3
    derivative = a0 * (3.0 * t * t) + a1 * (2.0 * t) + a2
    return position, derivative


def curve_position(points: Sequence[Vec3], t: float) -> tuple[Vec3, Vec3]:
    """Position and derivative at t (0..1) along the closed curve through points."""
    if not points:
        raise ValueError("a curve needs at least one point")
    count = len(points)
    scaled = t * count
    index = int(scaled)
    local_t = scaled - index
    p0, p1, p2, p3 = (points[(index + offset) % count] for offset in (-1, 0, 1, 2))
    return catmull_rom_point(local_t, p0, p1, p2, p3)


def align_matrix(derivative: Vec3) -> Matrix:
    """Rotation that points the local Z axis along derivative, keeping Y up."""
    norm = derivative.length()
    if norm == 0.0:
        raise ValueError("cannot align to a zero-length direction")
    z = derivative * (1.0 / norm)
    x = cross(Vec3(0.0, 1.0, 0.0), z)
    y = cross(z, x)
    return (
        (x.x, x.y, x.z, 0.0),
        (y.x, y.y, y.z, 0.0),
        (z.x, z.y, z.z, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def _check_time(step: Transform) -> None:
    if step.time == 0.0:
        raise ValueError(f"timed {step.type.value} needs a non-zero time")


def transform_matrix(step: Transform, elapsed: float) -> Matrix:
    """The matrix of one transform step, elapsed seconds after the start."""
    x, y, z, angle = step.values
    if step.type is TransformType.TRANSLATE:
        if step.has_time and step.curve_points:
            _check_time(step)
            t = math.fmod(elapsed / step.time, 1.0)
            position, derivative = curve_position(step.curve_points, t)
            matrix = _translation(position)
            if step.align:
                matrix = _multiply(matrix, align_matrix(derivative))
            return matrix
        return _translation(Vec3(x, y, z))
    if step.type is TransformType.ROTATE:
        if step.has_time:
            _check_time(step)
            angle = math.fmod(elapsed * (360.0 / step.time), 360.0)
        return _rotation(angle, Vec3(x, y, z))
    if step.type is TransformType.SCALE:
        return _scaling(Vec3(x, y, z))
    raise ValueError(f"unknown transform type: {step.type!r}")


def find_model(models: Iterable[Model], file: str, texture_file: str) -> Model | None:
    """The first model loaded from file with the given texture, or None."""
    return next(
        (m for m in models if m.file == file and m.texture_file == texture_file),
        None,
    )


def _walk(group: Group, elapsed: float, parent: Matrix) -> Iterator[tuple[Matrix, ModelInfo]]:
    matrix = parent
    for step in group.transforms:
        matrix = _multiply(matrix, transform_matrix(step, elapsed))
    for info in group.models:
        yield matrix, info
    for subgroup in group.subgroups:
        yield from _walk(subgroup, elapsed, matrix)


def group_instances(group: Group, elapsed: float) -> Iterator[tuple[Matrix, ModelInfo]]:
    """Yield (world matrix, model) for every model in the tree, depth first."""
    return _walk(group, elapsed, IDENTITY)


def textured_models(group: Group) -> Iterator[ModelInfo]:
    """Yield every model in the tree that has a texture, depth first."""
    for info in group.models:
        if info.texture.file:
            yield info
    for subgroup in group.subgroups:
        yield from textured_models(subgroup)