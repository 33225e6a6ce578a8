"""Loading of model files written by the generator."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from meshforge.geometry import Vertex
from meshforge.scene import Material

_FIELDS_PER_VERTEX = 8

_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


@dataclass
class Model:
    """A loaded mesh with its material and optional texture file."""

    file: str
    vertices: list[Vertex] = field(default_factory=list)
    material: Material = field(default_factory=Material)
    texture_file: str = ""

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def has_texture(self) -> bool:
        return bool(self.texture_file)

    @property
    def drawable(self) -> bool:
        """Whether the model has any vertices to draw."""
        return self.vertex_count > 0


def _numbers(lines: Iterable[str]) -> Iterator[float]:
    """Yield numbers from whitespace-separated text, stopping at the first bad one."""
    for line in lines:
        for token in line.split():
            match = _FLOAT_PREFIX.match(token)
            if match is None:
                return
            yield float(match.group(0))
            if match.end() != len(token):
                return


def read_vertices(stream: Iterable[str]) -> list[Vertex]:
    """Read vertices, eight numbers each, until the data ends or stops being numeric.

    A trailing incomplete vertex is dropped.
    """
    numbers = _numbers(stream)
    return [Vertex(*values) for values in zip(*[numbers] * _FIELDS_PER_VERTEX)]


def load_model(
    path: str | Path, material: Material | None = None, texture_file: str = ""
) -> Model:
    """Load a model file; raises OSError when it cannot be opened."""
    with open(path) as stream:
        vertices = read_vertices(stream)
    return Model(
        file=str(path),
        vertices=vertices,
        material=material if material is not None else Material(),
        texture_file=texture_file,
    )