# minirt

A small ray tracer. It reads a scene description from a `.rt` file and
renders it with Phong lighting and hard shadows to a binary PPM (P6)
image. It supports spheres, planes and finite cylinders, one ambient
light, one camera and one point light. It has no runtime dependencies.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command line

```
minirt scene.rt
minirt scene.rt -o picture.ppm --width 800 --height 600
```

| Option           | Meaning                                                        |
|------------------|----------------------------------------------------------------|
| `scene`          | exactly one scene file whose name ends in `.rt`                |
| `-o`, `--output` | image file to write; by default the scene path with `.ppm`     |
| `--width`        | image width in pixels (default 600)                            |
| `--height`       | image height in pixels (default 600)                           |

Errors are printed on standard output as

```
Error
<message>
```

- A wrong command line (no scene, more than one, a name not ending in
  `.rt`, an unknown option or a width or height that is not positive)
  prints `miniRT: Invalid Arguments` and exits with status 0.
- An invalid or unreadable scene prints its message, for instance
  `miniRT: Invalid Sphere`, `miniRT: Missing Arguments` or
  `miniRT: Open Error`, and exits with status 1.
- On success the image is written and the status is 0.

## Scene files

Each line describes one element. Fields are separated by spaces or tabs;
vectors and colours are three comma-separated numbers. After the first two
characters of a line only digits, `-`, `.`, `,`, spaces, tabs and line
endings are allowed; anything else fails the whole file with
`miniRT: Illegal Character`.

| Identifier | Fields                                                        |
|------------|---------------------------------------------------------------|
| `A`        | ratio (0–1), colour (0–255 each)                              |
| `C`        | position, orientation (each component −1–1), FOV (0–180)      |
| `L`        | position, brightness (0–1)                                    |
| `sp`       | centre, diameter, colour                                      |
| `pl`       | point, normal (each component −1–1), colour                   |
| `cy`       | centre, axis (each component −1–1), diameter, height, colour  |

Rules the parser applies:

- `A`, `C` and `L` must each be present and the scene needs at least one
  object, otherwise `miniRT: Missing Arguments`.
- A second `A` or `C` is an error. A second `L` is ignored; the command
  prints `miniRT: Light already defined` and still renders.
- A line with a single field is skipped; a line with two fields is
  `miniRT: Invalid Line`. Lines with an unknown identifier are skipped.
- Once one line is faulty the rest of the file is not examined; the first
  problem in a fixed reporting order is raised.
- A sphere's centre is shifted by −2 along x as it is read.

```
A 0.2 255,255,255
C 0,0,-20 0,0,1 70
L -10,10,-10 0.7
sp 0,0,0 4 255,0,0
pl 0,-2,0 0,1,0 200,200,200
cy 3,0,2 0,1,0 2 4 0,0,255
```

## Library use

```python
from minirt.errors import SceneError
from minirt.render import render, write_ppm
from minirt.scene import parse_scene

try:
    scene = parse_scene("scene.rt")
except SceneError as exc:
    print(exc.message)
else:
    image = render(scene, 600, 600)   # rows of 0xRRGGBB ints, top row first
    write_ppm(image, "scene.ppm")
```

`minirt.scene.parse_lines` builds a `Scene` from an iterable of lines
instead of a file. A `Scene` holds `ambient`, `camera`, `light`, `shapes`
(a list of `Sphere`, `Plane` and `Cylinder`) and `warnings`.

The building blocks are available on their own:

- `minirt.vectors.Vec`: four-component vectors with `+`, `-`, unary `-`,
  `scale`, `hadamard`, `dot`, `length`, `normalize` and `cross`.
- `minirt.matrix.Matrix`: square matrices with `m1 @ m2`, `transform`,
  `transpose`, `determinant`, `cofactor`, `inverse` (raising
  `SingularMatrixError`), plus `identity`, `translation`,
  `normal_rotation_matrix` and `view_transform`.
- `minirt.camera`: `Ray` (`position`, `transformed`) and `Camera`
  (`setup`, `ray_for_pixel`).
- `minirt.shapes`: `intersect`, `intersect_all`, `hit`, `normal_at`.
- `minirt.render`: `prepare_computations`, `lighting`, `is_shadowed`,
  `pixel_color`, `color_to_int`.

## What it does not do

There is no window or interactive viewer: the image is only written to a
PPM file, to be opened with any image viewer that reads that format.