"""Vectors and the vertex record written to model files."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Vec3:
    """A point or direction in 3D space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Vec3:
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Return the cross product a x b."""
    return Vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def normalize(v: Vec3) -> Vec3:
    """Return v scaled to unit length; a zero vector is returned unchanged."""
    length = v.length()
    if length > 0.0:
        return Vec3(v.x / length, v.y / length, v.z / length)
    return v


def triangle_normal(p1: Vec3, p2: Vec3, p3: Vec3) -> Vec3:
    """Return the (unnormalised) normal of the triangle p1, p2, p3."""
    return cross(p2 - p1, p3 - p1)


@dataclass(frozen=True)
class Vertex:
    """A mesh vertex: position, normal and texture coordinates."""

    x: float
    y: float
    z: float
    nx: float
    ny: float
    nz: float
    u: float
    v: float

    @classmethod
    def from_parts(cls, position: Vec3, normal: Vec3, u: float, v: float) -> Vertex:
        return cls(position.x, position.y, position.z, normal.x, normal.y, normal.z, u, v)

    @property
    def position(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)

    @property
    def normal(self) -> Vec3:
        return Vec3(self.nx, self.ny, self.nz)

    def to_line(self) -> str:
        """Format the vertex as one line of a model file (without newline)."""
        fields = (self.x, self.y, self.z, self.nx, self.ny, self.nz, self.u, self.v)
        return " ".join(f"{value:g}" for value in fields)