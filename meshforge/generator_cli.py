"""Command that writes primitive meshes to model files."""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Callable, Iterable, Sequence, TextIO

from meshforge.bezier import generate_bezier
from meshforge.geometry import Vertex
from meshforge.shapes import generate_box, generate_cone, generate_plane, generate_sphere

MODELS_DIR = Path("../models")

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _to_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    return float(match.group(1))


def _to_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    return int(match.group(1))


_Builder = Callable[[Sequence[str]], list[Vertex]]

_PRIMITIVES: dict[str, tuple[int, _Builder]] = {
    "plane": (2, lambda a: generate_plane(_to_float(a[0]), _to_int(a[1]))),
    "box": (2, lambda a: generate_box(_to_float(a[0]), _to_int(a[1]))),
    "sphere": (3, lambda a: generate_sphere(_to_float(a[0]), _to_int(a[1]), _to_int(a[2]))),
    "cone": (
        4,
        lambda a: generate_cone(
            _to_float(a[0]), _to_float(a[1]), _to_int(a[2]), _to_int(a[3])
        ),
    ),
    "patch": (2, lambda a: generate_bezier(a[0], _to_int(a[1]))),
}


def _lookup(primitive: str, args: Sequence[str]) -> _Builder:
    try:
        arity, builder = _PRIMITIVES[primitive]
    except KeyError:
        raise ValueError(f"unknown primitive: {primitive}") from None
    if len(args) < arity:
        raise ValueError(
            f"primitive {primitive} needs {arity} arguments, got {len(args)}"
        )
    return builder


def model_filename(primitive: str, args: Sequence[str]) -> str:
    """Return the name of the model file for a primitive and its arguments."""
    _lookup(primitive, args)
    if primitive == "patch":
        return f"bezier_{args[1]}.3d"
    arity = _PRIMITIVES[primitive][0]
    return "_".join([primitive, *args[:arity]]) + ".3d"


def generate(primitive: str, args: Sequence[str]) -> list[Vertex]:
    """Build the mesh of a primitive from its command-line arguments."""
    return _lookup(primitive, args)(args)


def write_model(stream: TextIO, vertices: Iterable[Vertex]) -> None:
    """Write vertices to a text stream, one per line."""
    for vertex in vertices:
        stream.write(vertex.to_line() + "\n")


def main(argv: Sequence[str] | None = None) -> int:
    """Generate a model file under the models directory."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) < 2:
        print("Invalid number of arguments.")
        return 1

    primitive, args = argv[0], list(argv[1:])
    try:
        name = model_filename(primitive, args)
        vertices = generate(primitive, args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    path = MODELS_DIR / name
    try:
        with open(path, "w") as stream:
            write_model(stream, vertices)
    except OSError:
        print(f"Cannot open file: {name}", file=sys.stderr)
        return 1

    print(f"File generated: {name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())