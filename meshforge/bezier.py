"""Bicubic Bezier patch evaluation and tessellation into triangles."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from meshforge.geometry import Vec3, Vertex, cross, normalize
from meshforge.patches import Patch, PatchError, load_patch_file


def bernstein(i: int, t: float) -> float:
    """Cubic Bernstein basis polynomial B_i(t); 0 for i outside 0..3."""
    s = 1.0 - t
    if i == 0:
        return s * s * s
    if i == 1:
        return 3.0 * t * s * s
    if i == 2:
        return 3.0 * t * t * s
    if i == 3:
        return t * t * t
    return 0.0


def bernstein_derivative(i: int, t: float) -> float:
    """Derivative of the cubic Bernstein basis polynomial B_i at t."""
    s = 1.0 - t
    if i == 0:
        return -3.0 * s * s
    if i == 1:
        return 3.0 * s * s - 6.0 * t * s
    if i == 2:
        return 6.0 * t * s - 3.0 * t * t
    if i == 3:
        return 3.0 * t * t
    return 0.0


def _weighted_sum(
    control_points: Sequence[Vec3], patch: Patch, weight_u, weight_v, u: float, v: float
) -> Vec3:
    total = Vec3()
    for i in range(4):
        wu = weight_u(i, u)
        for j in range(4):
            total = total + control_points[patch.indices[j * 4 + i]] * (wu * weight_v(j, v))
    return total


def evaluate_patch(control_points: Sequence[Vec3], patch: Patch, u: float, v: float) -> Vec3:
    """Return the point of the patch at parameters (u, v)."""
    return _weighted_sum(control_points, patch, bernstein, bernstein, u, v)


def evaluate_patch_derivatives(
    control_points: Sequence[Vec3], patch: Patch, u: float, v: float
) -> tuple[Vec3, Vec3]:
    """Return the partial derivatives (d/du, d/dv) of the patch at (u, v)."""
    du = _weighted_sum(control_points, patch, bernstein_derivative, bernstein, u, v)
    dv = _weighted_sum(control_points, patch, bernstein, bernstein_derivative, u, v)
    return du, dv


def _surface_vertex(
    control_points: Sequence[Vec3], patch: Patch, u: float, v: float
) -> Vertex:
    position = evaluate_patch(control_points, patch, u, v)
    du, dv = evaluate_patch_derivatives(control_points, patch, u, v)
    return Vertex.from_parts(position, normalize(cross(du, dv)), u, v)


def _check_indices(patches: Sequence[Patch], point_count: int) -> None:
    for number, patch in enumerate(patches):
        for index in patch.indices:
            if not 0 <= index < point_count:
                raise PatchError(
                    f"patch {number} refers to control point {index}, "
                    f"but only {point_count} are defined"
                )


def tessellate(
    patches: Sequence[Patch], control_points: Sequence[Vec3], tessellation: int
) -> list[Vertex]:
    """Split every patch into a tessellation x tessellation grid of triangle pairs."""
    _check_indices(patches, len(control_points))
    vertices: list[Vertex] = []
    for patch in patches:
        for i in range(tessellation):
            u0 = i / tessellation
            u1 = (i + 1) / tessellation
            for j in range(tessellation):
                v0 = j / tessellation
                v1 = (j + 1) / tessellation
                p00 = _surface_vertex(control_points, patch, u0, v0)
                p10 = _surface_vertex(control_points, patch, u1, v0)
                p01 = _surface_vertex(control_points, patch, u0, v1)
                p11 = _surface_vertex(control_points, patch, u1, v1)
                vertices.extend((p01, p00, p10, p01, p10, p11))
    return vertices


def generate_bezier(patch_file: str | Path, tessellation: int) -> list[Vertex]:
    """Read a patch file and tessellate its patches."""
    patches, control_points = load_patch_file(patch_file)
    return tessellate(patches, control_points, tessellation)