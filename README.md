# tracewrite

Writers for traced outlines. You build a shape out of spline lists. Each list
is a run of straight segments and cubic Bézier curves that share one colour.
You then write the shape to a stream in one of these vector formats:

| Format                        | Function                      | Stream |
|-------------------------------|-------------------------------|--------|
| Computer Graphics Metafile    | `tracewrite.cgm.write_cgm`    | binary |
| IFF DR2D structured drawing   | `tracewrite.dr2d.write_dr2d`  | binary |
| Encapsulated PDF (EPD)        | `tracewrite.epd.write_epd`    | text   |
| Illustrator-style EPS         | `tracewrite.eps.write_eps`    | text   |
| Elastic Reality shape file    | `tracewrite.er.write_er`      | text   |
| XFig 3.2                      | `tracewrite.fig.write_fig`    | text   |

The package uses only the standard library.

## Describing a shape

The model is in `tracewrite.shapes`:

- `Coord`: an integer point.
- `RealCoord`: a real point with `x`, `y` and an optional `z`. `z` holds the stroke width for centerlines.
- `Color`: an RGB triple. Each channel must lie in 0..255, otherwise `ValueError` is raised.
- `Degree`: `LINEAR`, `QUADRATIC` or `CUBIC`. The writers treat every degree other than `LINEAR` as a curve.
- `Spline`: a start point, two control points, an end point and a degree. `Spline.line(start, end)` and `Spline.cubic(start, c1, c2, end)` build them.
- `SplineList`: the splines of one outline, with `color` and the `clockwise` and `open` flags. It can be iterated and indexed.
- `SplineListArray`: all outlines, with `background_color`, `centerline`, `preserve_width` and `width_weight_factor`.
- `OutputOptions`: writer options. It currently holds `dpi`, with a default of 72.

`SplineListArray.list_color(spline_list)` returns the colour used for an
outline. A clockwise outline takes the background colour when the shape has
one. The CGM, DR2D and FIG writers use this rule. EPD and EPS always use the
list's own colour.

```python
from tracewrite.shapes import Color, RealCoord, Spline, SplineList, SplineListArray

a, b, c = RealCoord(10, 10), RealCoord(90, 10), RealCoord(50, 80)
triangle = SplineList(
    [Spline.line(a, b), Spline.line(b, c), Spline.line(c, a)],
    color=Color(200, 30, 30),
)
shape = SplineListArray([triangle])
```

## Writing a file

Every writer takes the following arguments, in this order:

1. an open stream
2. a name
3. the bounding box `llx, lly, urx, ury`
4. the shape

| Writer       | Extra arguments                                                                 |
|--------------|---------------------------------------------------------------------------------|
| `write_cgm`  | `creator` (default `"tracewrite"`)                                              |
| `write_epd`  | `creator`, `date` (date defaults to `time.asctime()`)                           |
| `write_eps`  | `creator`, `date` (date defaults to `time.asctime()`)                           |
| `write_er`   | `date`                                                                          |
| `write_dr2d` | `options` (an `OutputOptions`; its `dpi` sets the line thickness)               |

```python
from tracewrite.eps import write_eps
from tracewrite.cgm import write_cgm

with open("out.eps", "w") as stream:
    write_eps(stream, "out", 0, 0, 100, 100, shape,
              creator="tracewrite 0.40.0", date="2024/01/01 00:00:00")

with open("out.cgm", "wb") as stream:
    write_cgm(stream, "out", 0, 0, 100, 100, shape, creator="tracewrite 0.40.0")
```

The writers raise `ValueError` in these cases:

- **EPS, Elastic Reality, FIG and DR2D** reject an empty spline list.
- **Elastic Reality and DR2D** reject a bounding box whose width or height is not positive.
- **DR2D** rejects a `dpi` that is not positive.

### Other helpers

- `tracewrite.epd.format_real(value)` formats a coordinate. Whole numbers get no decimals and other values get three. The EPS writer formats its coordinates the same way.
- `tracewrite.eps.rgb_to_cmyk(color)` converts a colour to CMYK components in 0..255.
- `tracewrite.fig.FigPalette` maps colours to FIG colour numbers.
  - The eight basic colours have fixed numbers.
  - New colours get numbers from 32 upwards.
  - When the palette is full, `colour_index` raises `tracewrite.fig.FigColourError`, which is a `ValueError`. This happens when the next free number reaches 543.
  - `extra_colours()` lists the user colours in the order they were created.
- `tracewrite.fig.bezier_point(t, z1, z2, z3, z4)` evaluates one coordinate of a cubic Bézier curve. `t` is clamped to 0..1.
- `tracewrite.dr2d.Chunk` is an IFF chunk. `to_bytes()` encodes it with its size header and pad byte. `tracewrite.dr2d.fixed_to_ieee(value)` encodes the fixed-point values that DR2D uses.
- `tracewrite.dxf_geometry` works on integer points:
  - `point_distance(p1, p2)` gives the distance between two points.
  - `polyline_length(points)` gives the length of a polyline.
  - `bspline_to_lines(points, order, resolution)` flattens a B-spline into a list of vertices.

## What the package does not do

- It does not trace bitmaps. It only writes shapes that you have already built.
- It has no command-line program. Call the functions from Python.
- It cannot write DXF or EMF files. `tracewrite.dxf_geometry` provides B-spline flattening, but nothing in the package writes DXF output.

## Running the tests

```
pip install -e .[test]
pytest
```