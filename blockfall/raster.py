"""Pixel rasterisation of lines, rectangles, triangles and circles.

Every function returns the list of pixel positions a shape covers, in the
order they are plotted. A line whose coordinates are negative is refused
by line_points; the composite shapes silently drop such lines, which is
how the display skips parts of a shape that would start off screen.
"""

from __future__ import annotations

import struct
from typing import Iterator

from .util import Vector2, Vector3

MAX_CHANNEL = 255


def _f32(value: float) -> float:
    """Round a value to single precision, as the line arithmetic expects."""
    return struct.unpack("f", struct.pack("f", value))[0]


def validate_color(color: Vector3) -> Vector3:
    """Return the colour if every channel is within 0..255, else raise ValueError."""
    channels = (color.x, color.y, color.z)
    if any(channel < 0 for channel in channels):
        raise ValueError(f"invalid negative color values: {color}")
    if any(channel > MAX_CHANNEL for channel in channels):
        raise ValueError(f"color value exceeded maximum: {color}")
    return color


def _walk(start: Vector2, end: Vector2) -> Iterator[Vector2]:
    """Yield the positions visited when stepping from start towards end.

    Steps along x (or along y for a vertical run), filling in the y gaps
    of steep runs; the end point itself is not reached.
    """
    x_diff = end.x - start.x
    y_diff = end.y - start.y
    gradient = _f32(y_diff / x_diff) if x_diff else 0.0
    intercept = _f32(start.y - _f32(start.x * gradient))
    steps = y_diff if x_diff == 0 else x_diff

    x, y = start.x, start.y
    for _ in range(steps):
        yield Vector2(x, y)
        if x_diff == 0:
            y += 1
            continue
        x += 1
        if y_diff == 0:
            continue
        next_y = int(_f32(_f32(gradient * x) + intercept))
        if y_diff > 0:
            while y < next_y:
                yield Vector2(x, y)
                y += 1
        else:
            while y > next_y:
                yield Vector2(x, y)
                y -= 1


def line_points(start: Vector2, end: Vector2) -> list[Vector2]:
    """Return the pixels of a one-pixel line from start towards end.

    Raises ValueError for negative coordinates. A line whose ends coincide
    covers no pixels.
    """
    if min(start.x, start.y, end.x, end.y) < 0:
        raise ValueError(f"invalid negative coordinates: {start} -> {end}")
    if start == end:
        return []
    if (start.x == end.x and start.y > end.y) or start.x > end.x:
        start, end = end, start
    return list(_walk(start, end))


def _line_or_nothing(start: Vector2, end: Vector2) -> list[Vector2]:
    try:
        return line_points(start, end)
    except ValueError:
        return []


def thick_line_points(start: Vector2, end: Vector2, thickness: int) -> list[Vector2]:
    """Return the pixels of a line widened by thickness pixels on each side.

    Vertical lines widen along x, all others along y. Offset lines that
    would have negative coordinates are left out.
    """
    points = _line_or_nothing(start, end)
    vertical = start.x == end.x
    for i in range(1, thickness + 1):
        offset = Vector2(i, 0) if vertical else Vector2(0, i)
        points.extend(_line_or_nothing(start + offset, end + offset))
        points.extend(_line_or_nothing(start - offset, end - offset))
    return points


def rectangle_points(
    start: Vector2, end: Vector2, fill: bool, thickness: int
) -> list[Vector2]:
    """Return the pixels of a rectangle spanning the two corners.

    A filled rectangle is drawn as one horizontal line per row, from the
    top row to the bottom row inclusive; an outline uses thick lines.
    """
    top_left = Vector2(min(start.x, end.x), min(start.y, end.y))
    bottom_right = Vector2(max(start.x, end.x), max(start.y, end.y))

    if not fill:
        top_right = Vector2(bottom_right.x, top_left.y)
        bottom_left = Vector2(top_left.x, bottom_right.y)
        points: list[Vector2] = []
        for a, b in (
            (top_left, top_right),
            (top_left, bottom_left),
            (top_right, bottom_right),
            (bottom_left, bottom_right),
        ):
            points.extend(thick_line_points(a, b, thickness))
        return points

    points = []
    for y in range(top_left.y, bottom_right.y + 1):
        points.extend(_line_or_nothing(Vector2(top_left.x, y), Vector2(bottom_right.x, y)))
    return points


def triangle_points(
    v1: Vector2, v2: Vector2, v3: Vector2, fill: bool, thickness: int
) -> list[Vector2]:
    """Return the pixels of a triangle with the given corners.

    A filled triangle joins its leftmost corner to every point along the
    opposite edge.
    """
    start, end1, end2 = v1, v2, v3
    if end1.x < start.x:
        start, end1 = end1, start
    if end2.x < start.x:
        start, end2 = end2, start
    if end2.x < end1.x:
        end1, end2 = end2, end1

    if not fill:
        points: list[Vector2] = []
        for a, b in ((start, end1), (start, end2), (end1, end2)):
            points.extend(thick_line_points(a, b, thickness))
        return points

    points = []
    for current in _walk(end1, end2):
        points.extend(_line_or_nothing(start, current))
    return points


def _circle_single(center: Vector2, radius: int, fill: bool) -> list[Vector2]:
    points: list[Vector2] = []
    last_y = center.y
    limit = radius * radius
    for i in range(center.x - radius, center.x + 1):
        x_dist = center.x - i
        mirror_x = center.x + x_dist
        y_dist = 0
        while y_dist <= radius and x_dist * x_dist + y_dist * y_dist <= limit:
            y_dist += 1

        if fill:
            points.extend(
                _line_or_nothing(
                    Vector2(i, center.y + y_dist), Vector2(i, center.y - y_dist)
                )
            )
            points.extend(
                _line_or_nothing(
                    Vector2(mirror_x, center.y + y_dist),
                    Vector2(mirror_x, center.y - y_dist),
                )
            )
            continue

        if center.y + y_dist > last_y:
            for curr_y in range(last_y, y_dist + 1):
                points.extend(
                    (
                        Vector2(i, center.y - curr_y),
                        Vector2(mirror_x, center.y - curr_y),
                        Vector2(i, center.y + curr_y),
                        Vector2(mirror_x, center.y + curr_y),
                    )
                )
        points.extend(
            (
                Vector2(i, center.y - y_dist),
                Vector2(mirror_x, center.y - y_dist),
                Vector2(i, center.y + y_dist),
                Vector2(mirror_x, center.y + y_dist),
            )
        )
        last_y = y_dist
    return points


def circle_points(
    center: Vector2, radius: int, fill: bool, thickness: int
) -> list[Vector2]:
    """Return the pixels of a circle.

    An outline of thickness n is n + 1 rings, each one pixel inside the last.
    """
    if fill:
        return _circle_single(center, radius, True)
    points: list[Vector2] = []
    for ring in range(thickness + 1):
        points.extend(_circle_single(center, radius - ring, False))
    return points