# meshforge

Tools for building simple 3D scenes:

- generate triangle meshes for planes, boxes, spheres, cones and bicubic
  Bezier patches, and write them as `.3d` model files;
- read `.3d` model files back into vertex lists;
- read XML world descriptions (window, camera, lights and a tree of groups
  holding transforms and models);
- turn a group tree's transforms into 4x4 matrices for a given elapsed
  time, including Catmull-Rom curves with optional alignment to the path.

## Installing

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Generating models

The `meshforge-generate` command writes a model into `../models/`
(relative to the current directory), named after the primitive and its
arguments:

```
meshforge-generate plane 2 3               # ../models/plane_2_3.3d
meshforge-generate box 2 3                 # ../models/box_2_3.3d
meshforge-generate sphere 1 10 10          # ../models/sphere_1_10_10.3d
meshforge-generate cone 1 2 4 3            # ../models/cone_1_2_4_3.3d
meshforge-generate patch teapot.patch 10   # ../models/bezier_10.3d
```

Arguments are: `plane SIZE DIVISIONS`, `box SIZE DIVISIONS`,
`sphere RADIUS SLICES STACKS`, `cone RADIUS HEIGHT SLICES STACKS` and
`patch PATCH_FILE TESSELLATION`. The command exits with status 1 on an
unknown primitive, missing arguments, an unreadable patch file or when the
output file cannot be opened.

Each line of a model file holds one vertex: position, normal and texture
coordinates (`x y z nx ny nz u v`). Every three lines form a triangle.

## Using the library

Meshes are lists of `meshforge.geometry.Vertex`:

```python
from meshforge.shapes import generate_sphere
from meshforge.generator_cli import write_model

vertices = generate_sphere(1.0, 16, 8)
with open("sphere.3d", "w") as stream:
    write_model(stream, vertices)
```

`meshforge.shapes` also has `generate_plane`, `generate_box` and
`generate_cone`. `meshforge.generator_cli.generate(primitive, args)` and
`model_filename(primitive, args)` take the same string arguments as the
command.

### Bezier patches

A patch file holds the number of patches, one line of 16 control point
indices per patch, the number of control points, and one `x, y, z` line per
point; commas and spaces both separate values.

```python
from meshforge.bezier import generate_bezier

vertices = generate_bezier("teapot.patch", 10)
```

`meshforge.patches.parse_patches` and `load_patch_file` read the file
into `Patch` objects and `Vec3` control points, and
`meshforge.bezier.tessellate` turns them into triangles. Malformed data,
or an index outside the control point list, raises `PatchError`.

### Model files

`meshforge.models.load_model(path, material, texture_file)` returns a
`Model` with its vertices; `read_vertices` reads from any iterable of
lines, stopping at the first non-numeric value and dropping an incomplete
final vertex.

### Scenes and animation

`meshforge.scene.load_config` (or `parse_config` for XML text) returns a
`Config` with the window size, `Camera`, `Light` list and the root
`Group`. Colours in `<color>` are given 0–255 and stored as 0–1.
A missing `<world>` root or malformed XML raises `ConfigError`.

`meshforge.animation.transform_matrix(step, elapsed)` gives the matrix of
one `Transform` at `elapsed` seconds; `group_instances(group, elapsed)`
yields `(matrix, ModelInfo)` for every model in the tree, depth first.
`curve_position`, `catmull_rom_point` and `align_matrix` expose the curve
maths, `find_model` looks up a loaded `Model` by file and texture, and
`textured_models` lists the models that name a texture.

## What it does not do

meshforge does not open a window or draw anything: there is no viewer,
no lighting, and texture images are never loaded — a texture is only a
file name carried on the model. The matrices from `meshforge.animation`
are for a renderer of your own to use.