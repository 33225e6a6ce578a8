"""Reading of Bezier patch description files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from meshforge.geometry import Vec3

POINTS_PER_PATCH = 16

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class PatchError(ValueError):
    """Raised when a patch file cannot be read or is malformed."""


@dataclass(frozen=True)
class Patch:
    """A bicubic patch given by 16 indices into the control point list."""

    indices: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.indices) != POINTS_PER_PATCH:
            raise PatchError(
                f"a patch needs {POINTS_PER_PATCH} control point indices, "
                f"got {len(self.indices)}"
            )


def _next_line(lines: Iterator[str], what: str) -> str:
    line = next(lines, None)
    if line is None:
        raise PatchError(f"unexpected end of patch data while reading {what}")
    return line


def _parse_count(line: str, what: str) -> int:
    match = _INT_PREFIX.match(line)
    if match is None:
        raise PatchError(f"invalid {what} count: {line!r}")
    return int(match.group(1))


def _parse_patch(line: str, number: int) -> Patch:
    tokens = line.replace(",", " ").split()
    if len(tokens) < POINTS_PER_PATCH:
        raise PatchError(f"patch {number} has too few indices: {line!r}")
    try:
        indices = tuple(int(token) for token in tokens[:POINTS_PER_PATCH])
    except ValueError as exc:
        raise PatchError(f"invalid index in patch {number}: {line!r}") from exc
    return Patch(indices)


def _parse_point(line: str, number: int) -> Vec3:
    tokens = line.replace(",", " ").split()
    if len(tokens) < 3:
        raise PatchError(f"control point {number} has too few coordinates: {line!r}")
    try:
        x, y, z = (float(token) for token in tokens[:3])
    except ValueError as exc:
        raise PatchError(f"invalid control point {number}: {line!r}") from exc
    return Vec3(x, y, z)


def parse_patches(text: str) -> tuple[list[Patch], list[Vec3]]:
    """Parse patch data: a patch count, the patches, a point count, the points."""
    lines = iter(text.splitlines())

    patch_count = _parse_count(_next_line(lines, "patch count"), "patch")
    patches = [
        _parse_patch(_next_line(lines, f"patch {number}"), number)
        for number in range(patch_count)
    ]

    point_count = _parse_count(_next_line(lines, "control point count"), "control point")
    points = [
        _parse_point(_next_line(lines, f"control point {number}"), number)
        for number in range(point_count)
    ]
    return patches, points


def load_patch_file(filename: str | Path) -> tuple[list[Patch], list[Vec3]]:
    """Read and parse a patch file."""
    try:
        text = Path(filename).read_text()
    except OSError as exc:
        raise PatchError(f"cannot open patch file: {filename}") from exc
    return parse_patches(text)