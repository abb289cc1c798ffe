# textlines

Helpers for cutting text lines out of scanned page images.

Given the baselines of the text lines in a page region, `textlines` builds
the search rectangles around each baseline, finds which neighbouring
baselines lie above or below a line inside its search area, turns pairs of
frontier polylines into simplified closed line contours, and cuts one image
per line out of a page between consecutive frontiers.

## Installation

```
pip install .
```

Running the tests needs the `test` extra:

```
pip install .[test]
pytest
```

## Conventions

- Baselines, regions and contours are lists of `(x, y)` points.
- Frontier polylines (the boundaries between text lines) are lists of
  `(row, column)` points.
- The restriction list of a region holds every baseline twice in a row
  (see `duplicate_restrictions`): entries `2k` and `2k + 1` belong to
  baseline `k`, one for the frontier above it and one for the frontier
  below it.

## Modules

### `textlines.geometry`

Integer geometry on points:

- `Rect(x, y, width, height)`, a frozen dataclass with `right`, `bottom`,
  `area` and `contains(point)`.
- `bounding_rect(points)`: smallest rectangle holding every point (an empty
  input gives `Rect(0, 0, 0, 0)`).
- `clip_line(rect, start, end)`: the segment clipped to the rectangle, or
  `None` when it lies wholly outside.
- `line_points(start, end)`: the 8-connected raster pixels of a segment,
  both ends included.
- `convex_hull(points)`, `arc_length(points, closed)`,
  `approx_poly_dp(points, epsilon, closed)` (Douglas–Peucker) and
  `min_area_rect_corners(points)` (the four corners of the smallest rotated
  enclosing rectangle; raises `ValueError` for no points).

### `textlines.search`

- `contour_from_baseline(baseline, up_dist, low_dist)`: closed band from
  `up_dist` above to `low_dist` below a baseline.
- `search_areas_from_baselines(regions, baselines, up_dist, low_dist)`: two
  identical search rectangles per baseline, the bounding box of that band.
- `padded_search_areas(regions, baselines, up_dist, low_dist, horizontal_padding)`:
  search rectangles built from the gaps between consecutive baselines.
- `duplicate_restrictions(baselines)`: the doubled restriction lists.
- `baseline_segments(baseline, x_offset, y_offset)`: consecutive point pairs.
- `neighbour_segments`, `segments_above`, `segments_below`: segments of the
  other baselines that cross a search area, clipped to it, optionally kept
  only when wholly above or below the line's own baseline.
- `relative_position(point, baseline)`: -1 above, 1 below, 0 level with the
  nearest baseline point.
- `region_limits_to_search_regions(region_limits, rows)`: row bands between
  limits and a 40-row line limit ending at each inner limit.
- `is_too_far_above`, `is_too_far_below`, `overlaps`: rectangle tests.

### `textlines.contours`

- `clipped_frontier(polyline, baseline, margin=15)`: frontier points whose
  column lies within `margin` of the baseline's horizontal extent.
- `line_contour(upper, lower, approx_dist_error=-1, enclosing_rect=False)`:
  the closed outline walking the upper frontier forwards and the lower one
  back, simplified with `approx_poly_dp`. A tolerance of `-1` is taken as
  0.5 % of the convex hull perimeter. With `enclosing_rect` the outline is
  replaced by the minimum-area rectangle's corners. An empty list comes back
  when either frontier is empty.
- `line_contours(area_polylines, restrictions, approx_dist_error, enclosing_rect)`:
  one contour per baseline in every region; raises `ContourError` when a
  region or a frontier pair is missing.

### `textlines.extraction`

- `LineExtractor(extract_image, collision_points=(), line_limits=())` takes a
  page as a file path, a Pillow image or an array.
  - `load_polylines(polylines)` takes `(x, y)` frontier polylines, rasterises
    them (polylines of fewer than two points are dropped) and builds the
    line images. Every frontier must cover every column of the page.
  - `generate_line_images()` extracts the pixels between each pair of
    consecutive frontiers into `line_images`, with a matching
    `mask_images` entry, and writes the line number into `label_image` for
    black pixels.
  - `save_line_images(base_name)` writes `<base>_01.pgm`, `<base>_02.pgm`, …
    (colour data, in Pillow's PPM format) and returns the paths.
  - `save_line_images_with_alpha(base_name)` writes `<base>_NN.png` with the
    mask as alpha channel and returns the paths.
  - `save_labeled_image(file_name)` writes the label image as raw native
    unsigned integers, row by row.
  - `save_polylines(file_name)` writes the frontiers as a plain-text point
    list.
- Collision points given for a frontier push it outwards along a circle of
  radius 20 (`circular_frontier_correction`) before extraction.
- Free functions: `expand_polyline`, `review_polylines`,
  `sequence_frontier`, `circular_frontier_correction`, `highest_point`,
  `lowest_point`, `write_polylines`, and the `FrontierSide` enum (`UP`,
  `DOWN`).

## Example

```python
from textlines.search import search_areas_from_baselines, duplicate_restrictions

baselines = [[[(10, 100), (200, 102)], [(10, 160), (200, 158)]]]
regions = [[(0, 0), (300, 0), (300, 300), (0, 300)]]

areas = search_areas_from_baselines(regions, baselines, 100, 50)
restrictions = duplicate_restrictions(baselines)
```

```python
from PIL import Image
from textlines.extraction import LineExtractor

page = Image.open("page.png")          # 600 pixels wide
extractor = LineExtractor(page)
extractor.load_polylines([
    [(0.0, 40.0), (599.0, 42.0)],
    [(0.0, 90.0), (599.0, 95.0)],
])
extractor.save_line_images("line")             # line_01.pgm
extractor.save_line_images_with_alpha("line")  # line_01.png
extractor.save_polylines("polylines.txt")
```

## What this package does not do

`textlines` does not find the frontier polylines itself: it has no
binarisation, no distance map and no path search between lines, so the
frontiers (and any collision points) must come from elsewhere. It reads no
page or region description files and has no command-line tool; everything
is used from Python.