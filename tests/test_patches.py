import pytest

from meshforge.geometry import Vec3
from meshforge.patches import Patch, PatchError, load_patch_file, parse_patches


def _sample_text(patch_lines=None, point_count=16):
    if patch_lines is None:
        patch_lines = [", ".join(str(i) for i in range(16))]
    lines = [str(len(patch_lines)), *patch_lines, str(point_count)]
    lines += [f"{i}, {i * 0.5}, {-i}" for i in range(point_count)]
    return "\n".join(lines) + "\n"


def test_parse_single_patch():
    patches, points = parse_patches(_sample_text())
    assert patches == [Patch(tuple(range(16)))]
    assert len(points) == 16
    assert points[3] == Vec3(3.0, 1.5, -3.0)


def test_parse_multiple_patches_keeps_order():
    first = ", ".join(str(i) for i in range(16))
    second = ", ".join(str(15 - i) for i in range(16))
    patches, _ = parse_patches(_sample_text([first, second]))
    assert [p.indices[0] for p in patches] == [0, 15]
    assert patches[1].indices == tuple(reversed(range(16)))


def test_parse_accepts_spaces_without_commas():
    text = "1\n" + " ".join(str(i) for i in range(16)) + "\n1\n1.0 2.0 3.0\n"
    patches, points = parse_patches(text)
    assert patches[0].indices == tuple(range(16))
    assert points == [Vec3(1.0, 2.0, 3.0)]


def test_too_few_indices_rejected():
    with pytest.raises(PatchError):
        parse_patches(_sample_text(["0, 1, 2"]))


def test_non_numeric_index_rejected():
    bad = ", ".join(["x"] + [str(i) for i in range(15)])
    with pytest.raises(PatchError):
        parse_patches(_sample_text([bad]))


def test_bad_count_rejected():
    with pytest.raises(PatchError):
        parse_patches("many\n")


def test_missing_lines_rejected():
    text = _sample_text()
    truncated = "\n".join(text.splitlines()[:-2])
    with pytest.raises(PatchError):
        parse_patches(truncated)


def test_empty_input_rejected():
    with pytest.raises(PatchError):
        parse_patches("")


def test_short_point_rejected():
    text = "0\n1\n1.0, 2.0\n"
    with pytest.raises(PatchError):
        parse_patches(text)


def test_patch_requires_sixteen_indices():
    with pytest.raises(PatchError):
        Patch((1, 2, 3))


def test_load_patch_file(tmp_path):
    path = tmp_path / "teapot.patch"
    path.write_text(_sample_text())
    patches, points = load_patch_file(path)
    assert len(patches) == 1
    assert points[-1] == Vec3(15.0, 7.5, -15.0)


def test_load_missing_file(tmp_path):
    with pytest.raises(PatchError):
        load_patch_file(tmp_path / "absent.patch")