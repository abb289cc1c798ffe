"""Cut text-line images out of a page between consecutive frontier polylines.

Frontier polylines use ``(row, column)`` points.  Loaded polylines come as
``(x, y)`` points and are rasterised into one point per pixel step, so that
every column they span is covered.
"""

from __future__ import annotations

import math
import os
from enum import Enum
from pathlib import Path
from typing import Iterator, Sequence

import numpy as np
from PIL import Image

from textlines.geometry import line_points

FramePoint = tuple[float, float]
Frontier = Sequence[Sequence[float]]
Sequenced = list[list[int]]

# Radius, in pixels, of the arc drawn round each collision point.
CORRECTION_RADIUS = 20
# Background of the extracted line images.
BACKGROUND = 255
# Mask value of pixels that belong to the extracted line.
MASK_ON = 255


class FrontierSide(Enum):
    """Which side of a text line a frontier bounds."""

    UP = "UP"
    DOWN = "DOWN"

    @property
    def direction(self) -> int:
        """Row direction in which corrections push this frontier."""
        return -1 if self is FrontierSide.UP else 1


def expand_polyline(points: Sequence[Sequence[float]]) -> list[FramePoint]:
    """Rasterise an ``(x, y)`` polyline into ``(row, column)`` pixel steps.

    The first point is kept as given; every following segment adds the
    8-connected pixels after its start point.
    """
    if not points:
        return []
    first = points[0]
    expanded: list[FramePoint] = [(first[1], first[0])]
    for start, end in zip(points, points[1:]):
        expanded.extend((y, x) for x, y in line_points(start, end)[1:])
    return expanded


def review_polylines(
    polylines: Sequence[Sequence[Sequence[float]]],
) -> list[list[FramePoint]]:
    """Expand every polyline of at least two points; shorter ones are dropped."""
    return [expand_polyline(polyline) for polyline in polylines if len(polyline) > 1]


def sequence_frontier(frontier: Frontier, width: int) -> Sequenced:
    """Sorted rows of ``frontier`` for each of ``width`` columns."""
    columns: Sequenced = [[] for _ in range(width)]
    for row, column in frontier:
        index = int(column)
        if not 0 <= index < width:
            raise ValueError(f"frontier column {index} outside 0..{width - 1}")
        columns[index].append(int(row))
    for rows in columns:
        rows.sort()
    return columns


def circular_frontier_correction(
    sequence: Sequence[Sequence[int]],
    collisions: Sequence[Sequence[float]],
    side: FrontierSide,
    radius: int = CORRECTION_RADIUS,
) -> Sequenced:
    """Push a sequenced frontier round each collision point along a circle.

    For every column within ``radius`` of a collision, the frontier is
    replaced by the circle's row when that row lies further out (above for
    ``UP``, below for ``DOWN``).  A corrected copy is returned.
    """
    corrected = [list(rows) for rows in sequence]
    r2 = radius * radius
    for row, column in collisions:
        for offset in range(1, radius + 1):
            x = int(row + side.direction * int(math.sqrt(r2 - offset * offset) + 0.5))
            for target in (column + offset, column - offset):
                if not 0 <= target < len(corrected):
                    continue
                rows = corrected[int(target)]
                if not rows:
                    further = True
                elif side is FrontierSide.UP:
                    further = x < rows[0]
                else:
                    further = x > rows[-1]
                if further:
                    corrected[int(target)] = [x]
    return corrected


def _check_columns(sequenced: Sequence[Sequence[int]]) -> None:
    if not sequenced:
        raise ValueError("frontier has no columns")
    for index, rows in enumerate(sequenced):
        if not rows:
            raise ValueError(f"frontier does not cover column {index}")


def highest_point(sequenced: Sequence[Sequence[int]]) -> int:
    """Smallest row reached by the frontier in any column."""
    _check_columns(sequenced)
    return min(rows[0] for rows in sequenced)


def lowest_point(sequenced: Sequence[Sequence[int]]) -> int:
    """Largest row reached by the frontier in any column."""
    _check_columns(sequenced)
    return max(rows[-1] for rows in sequenced)


def write_polylines(polylines: Sequence[Frontier], path: str | os.PathLike) -> None:
    """Write ``(row, column)`` polylines in the point-list tool format."""
    with open(path, "w", encoding="ascii") as out:
        out.write("# Number of lines and type of points \n")
        out.write(f"{len(polylines)} Num\n")
        for index, polyline in enumerate(polylines):
            out.write("# Number of points \n")
            out.write(f"{len(polyline)}\n")
            out.write("# Points \n")
            for row, column in polyline:
                out.write(f"{column:g} {row:g} {index}\n")


def _span_pairs(upper: Sequence[int], lower: Sequence[int]) -> Iterator[tuple[int, int]]:
    """Row spans of one column that lie between two sequenced frontiers."""
    if len(upper) > 1:
        for j in range(0, len(upper) - 1, 2):
            yield upper[j], upper[j + 1]
    yield upper[-1], lower[0]
    if len(lower) > 1:
        for j in range(1, len(lower) - 1, 2):
            yield lower[j], lower[j + 1]


class LineExtractor:
    """Builds one image, mask and label set per pair of consecutive frontiers."""

    def __init__(
        self,
        extract_image,
        collision_points: Sequence[Sequence[Sequence[float]]] = (),
        line_limits: Sequence[Sequence[int]] = (),
    ) -> None:
        if isinstance(extract_image, (str, os.PathLike)):
            with Image.open(extract_image) as img:
                image = np.asarray(img)
        else:
            image = np.asarray(extract_image)
        if image.ndim not in (2, 3):
            raise ValueError("extract image must have two or three dimensions")
        image = image.astype(np.uint8, copy=False)
        self.extract_image = image
        height, width = image.shape[:2]
        if image.ndim == 3 and image.shape[2] >= 3:
            self._colour = image[..., :3]
        else:
            grey = image.reshape(height, width, -1)[..., 0]
            self._colour = np.repeat(grey[..., None], 3, axis=2)
        # Row buffer of the image as raw bytes, read one byte per column.
        self._row_bytes = image.reshape(height, -1)[:, :width]
        self.collision_points = [list(points) for points in collision_points]
        self.line_limits = [tuple(limit) for limit in line_limits]
        self.polylines: list[list[FramePoint]] = []
        self.line_images: list[np.ndarray] = []
        self.mask_images: list[np.ndarray] = []
        self.label_image = np.zeros((height, width), dtype=np.uintc)
        self.images_calculated = False

    @property
    def height(self) -> int:
        return self.extract_image.shape[0]

    @property
    def width(self) -> int:
        return self.extract_image.shape[1]

    def load_polylines(self, polylines: Sequence[Sequence[Sequence[float]]]) -> None:
        """Replace the frontiers with ``(x, y)`` polylines and rebuild the images."""
        if self.images_calculated:
            self.line_images.clear()
            self.mask_images.clear()
            self.collision_points = [[] for _ in self.collision_points]
        self.polylines = review_polylines(polylines)
        self.generate_line_images()

    def generate_line_images(self) -> None:
        """Extract the line between every pair of consecutive frontiers."""
        for index in range(len(self.polylines) - 1):
            self._extract_line(index, index + 1)
        self.images_calculated = True

    def _sequenced(self, index: int, side: FrontierSide) -> Sequenced:
        sequence = sequence_frontier(self.polylines[index], self.width)
        if 0 <= index < len(self.collision_points) and self.collision_points[index]:
            sequence = circular_frontier_correction(
                sequence, self.collision_points[index], side
            )
        return sequence

    def _extract_line(self, start_index: int, end_index: int) -> None:
        upper = self._sequenced(start_index, FrontierSide.UP)
        lower = self._sequenced(end_index, FrontierSide.DOWN)
        high = highest_point(upper)
        low = lowest_point(lower)
        if low < high:
            raise ValueError(
                f"frontier {end_index} lies wholly above frontier {start_index}"
            )
        line = np.full((low - high, self.width, 3), BACKGROUND, dtype=np.uint8)
        mask = np.zeros((low - high, self.width), dtype=np.uint8)
        label = start_index + 1

        for column, (upper_rows, lower_rows) in enumerate(zip(upper, lower)):
            for first, last in _span_pairs(upper_rows, lower_rows):
                first = max(first, high, 0)
                last = min(last, low, self.height)
                if first >= last:
                    continue
                line[first - high:last - high, column] = self._colour[first:last, column]
                mask[first - high:last - high, column] = MASK_ON
                rows = np.arange(first, last)
                black = rows[self._row_bytes[first:last, column] == 0]
                self.label_image[black, column] = label

        self.line_images.append(line)
        self.mask_images.append(mask)

    @staticmethod
    def _numbered(base_name: str, index: int, suffix: str) -> str:
        return f"{base_name}_{index + 1:02d}{suffix}"

    def save_line_images(self, base_name: str) -> list[str]:
        """Write each line image as ``<base>_NN.pgm``; returns the paths."""
        paths = []
        for index, line in enumerate(self.line_images):
            path = self._numbered(base_name, index, ".pgm")
            Image.fromarray(line).save(path, format="PPM")
            paths.append(path)
        return paths

    def save_line_images_with_alpha(self, base_name: str) -> list[str]:
        """Write each line with its mask as alpha to ``<base>_NN.png``."""
        paths = []
        for index, (line, mask) in enumerate(zip(self.line_images, self.mask_images)):
            path = self._numbered(base_name, index, ".png")
            Image.fromarray(np.dstack((line, mask))).save(path, format="PNG")
            paths.append(path)
        return paths

    def save_labeled_image(self, file_name: str | os.PathLike) -> None:
        """Write the label image as raw native unsigned integers."""
        Path(file_name).write_bytes(self.label_image.tobytes())

    def save_polylines(self, file_name: str | os.PathLike) -> None:
        """Write the current frontiers in the point-list tool format."""
        write_polylines(self.polylines, file_name)