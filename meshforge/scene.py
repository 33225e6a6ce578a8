"""Scene description: the world XML read by the viewer."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, TypeVar

from meshforge.geometry import Vec3

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

_T = TypeVar("_T")

Color = tuple[float, float, float]


class ConfigError(ValueError):
    """Raised when a scene file cannot be read or is not a world description."""


@dataclass(frozen=True)
class Material:
    """Surface colours of a model, each component in 0..1."""

    diffuse: Color = (1.0, 1.0, 1.0)
    ambient: Color = (0.2, 0.2, 0.2)
    specular: Color = (0.5, 0.5, 0.5)
    emissive: Color = (0.0, 0.0, 0.0)
    shininess: float = 32.0


@dataclass(frozen=True)
class Texture:
    """The image file applied to a model; empty when there is none."""

    file: str = ""


class TransformType(Enum):
    TRANSLATE = "translate"
    ROTATE = "rotate"
    SCALE = "scale"


@dataclass
class Transform:
    """One step of a group's transformation.

    ``values`` holds x, y, z and, for a fixed rotation, the angle.
    A timed translation follows ``curve_points``; a timed rotation
    makes a full turn every ``time`` seconds.
    """

    type: TransformType
    values: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    has_time: bool = False
    time: float = 0.0
    align: bool = False
    curve_points: list[Vec3] = field(default_factory=list)


@dataclass
class ModelInfo:
    """A model reference inside a group."""

    file: str
    texture: Texture = field(default_factory=Texture)
    material: Material = field(default_factory=Material)


@dataclass
class Group:
    """A node of the scene tree: transforms, models and child groups."""

    transforms: list[Transform] = field(default_factory=list)
    models: list[ModelInfo] = field(default_factory=list)
    subgroups: list[Group] = field(default_factory=list)


@dataclass
class Light:
    """A light source: "point", "directional" or "spot"."""

    type: str = ""
    position: Vec3 = field(default_factory=Vec3)
    direction: Vec3 = field(default_factory=Vec3)
    cutoff: float = 0.0


@dataclass
class Camera:
    position: Vec3 = field(default_factory=lambda: Vec3(10.0, 10.0, 10.0))
    look_at: Vec3 = field(default_factory=Vec3)
    up: Vec3 = field(default_factory=lambda: Vec3(0.0, 1.0, 0.0))
    fov: float = 60.0
    near: float = 1.0
    far: float = 1000.0


@dataclass
class Config:
    """A whole world: window, camera, lights and the scene tree."""

    window_width: int = 800
    window_height: int = 800
    camera: Camera = field(default_factory=Camera)
    lights: list[Light] = field(default_factory=list)
    root_group: Group = field(default_factory=Group)


def _query(
    elem: ET.Element, name: str, pattern: re.Pattern[str], convert: Callable[[str], _T]
) -> _T | None:
    text = elem.get(name)
    if text is None:
        return None
    match = pattern.match(text)
    if match is None:
        return None
    return convert(match.group(1))


def _float_attr(elem: ET.Element, name: str, default: float) -> float:
    value = _query(elem, name, _FLOAT_PREFIX, float)
    return default if value is None else value


def _int_attr(elem: ET.Element, name: str, default: int) -> int:
    value = _query(elem, name, _INT_PREFIX, int)
    return default if value is None else value


def _vec_attr(elem: ET.Element, names: tuple[str, str, str], default: Vec3) -> Vec3:
    nx, ny, nz = names
    return Vec3(
        _float_attr(elem, nx, default.x),
        _float_attr(elem, ny, default.y),
        _float_attr(elem, nz, default.z),
    )


_XYZ = ("x", "y", "z")


def _parse_camera(elem: ET.Element) -> Camera:
    camera = Camera()
    for tag, attr in (("position", "position"), ("lookAt", "look_at"), ("up", "up")):
        child = elem.find(tag)
        if child is not None:
            setattr(camera, attr, _vec_attr(child, _XYZ, getattr(camera, attr)))
    projection = elem.find("projection")
    if projection is not None:
        camera.fov = _float_attr(projection, "fov", camera.fov)
        camera.near = _float_attr(projection, "near", camera.near)
        camera.far = _float_attr(projection, "far", camera.far)
    return camera


def _parse_lights(elem: ET.Element) -> Iterator[Light]:
    for child in elem.findall("light"):
        light = Light(type=child.get("type", ""))
        if child.get("posx") is not None:
            light.position = _vec_attr(child, ("posx", "posy", "posz"), light.position)
        if child.get("dirx") is not None:
            light.direction = _vec_attr(child, ("dirx", "diry", "dirz"), light.direction)
        if child.get("cutoff") is not None:
            light.cutoff = _float_attr(child, "cutoff", light.cutoff)
        yield light


def _xyz_values(elem: ET.Element, fourth: float = 0.0) -> tuple[float, float, float, float]:
    x, y, z = _vec_attr(elem, _XYZ, Vec3())
    return (x, y, z, fourth)


def _parse_translate(elem: ET.Element) -> Transform:
    time = _float_attr(elem, "time", 0.0)
    step = Transform(
        TransformType.TRANSLATE,
        time=time,
        has_time=time > 0.0,
        align=elem.get("align") == "True",
    )
    if step.has_time:
        step.curve_points = [_vec_attr(point, _XYZ, Vec3()) for point in elem.findall("point")]
    else:
        step.values = _xyz_values(elem)
    return step


def _parse_rotate(elem: ET.Element) -> Transform:
    time = _query(elem, "time", _FLOAT_PREFIX, float)
    if time is not None:
        return Transform(TransformType.ROTATE, _xyz_values(elem), has_time=True, time=time)
    angle = _float_attr(elem, "angle", 0.0)
    return Transform(TransformType.ROTATE, _xyz_values(elem, angle))


def _parse_transform(elem: ET.Element) -> Iterator[Transform]:
    for child in elem:
        if child.tag == "translate":
            yield _parse_translate(child)
        elif child.tag == "rotate":
            yield _parse_rotate(child)
        elif child.tag == "scale":
            yield Transform(TransformType.SCALE, _xyz_values(child))


def _read_color(elem: ET.Element | None, default: Color) -> Color:
    if elem is None:
        return default
    r, g, b = (_float_attr(elem, channel, 0.0) / 255.0 for channel in "RGB")
    return (r, g, b)


def _parse_material(elem: ET.Element) -> Material:
    base = Material()
    shininess = base.shininess
    shininess_elem = elem.find("shininess")
    if shininess_elem is not None:
        shininess = _float_attr(shininess_elem, "value", shininess)
    return Material(
        diffuse=_read_color(elem.find("diffuse"), base.diffuse),
        ambient=_read_color(elem.find("ambient"), base.ambient),
        specular=_read_color(elem.find("specular"), base.specular),
        emissive=_read_color(elem.find("emissive"), base.emissive),
        shininess=shininess,
    )


def _parse_models(elem: ET.Element) -> Iterator[ModelInfo]:
    for child in elem.findall("model"):
        file = child.get("file")
        if file is None:
            continue
        texture = Texture()
        texture_elem = child.find("texture")
        if texture_elem is not None and texture_elem.get("file") is not None:
            texture = Texture(texture_elem.get("file", ""))
        color = child.find("color")
        material = _parse_material(color) if color is not None else Material()
        yield ModelInfo(file, texture, material)


def _parse_group(elem: ET.Element) -> Group:
    group = Group()
    for child in elem:
        if child.tag == "transform":
            group.transforms.extend(_parse_transform(child))
        elif child.tag == "models":
            group.models.extend(_parse_models(child))
        elif child.tag == "group":
            group.subgroups.append(_parse_group(child))
    return group


def parse_config(text: str | bytes) -> Config:
    """Parse a world description from XML text."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ConfigError(f"malformed scene XML: {exc}") from exc
    if root.tag != "world":
        raise ConfigError("the scene has no <world> element")

    config = Config()
    window = root.find("window")
    if window is not None:
        config.window_width = _int_attr(window, "width", config.window_width)
        config.window_height = _int_attr(window, "height", config.window_height)

    camera = root.find("camera")
    if camera is not None:
        config.camera = _parse_camera(camera)

    lights = root.find("lights")
    if lights is not None:
        config.lights.extend(_parse_lights(lights))

    group = root.find("group")
    if group is not None:
        config.root_group = _parse_group(group)

    models = root.find("models")
    if models is not None:
        config.root_group.models.extend(_parse_models(models))

    return config


def load_config(filename: str | Path) -> Config:
    """Read and parse a world description file."""
    try:
        data = Path(filename).read_bytes()
    except OSError as exc:
        raise ConfigError(f"cannot read scene file: {filename}") from exc
    return parse_config(data)