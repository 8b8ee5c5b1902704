"""A drawing window built on pygame."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from os import PathLike

import pygame

from .raster import (
    circle_points,
    rectangle_points,
    thick_line_points,
    triangle_points,
    validate_color,
)
from .util import Vector2, Vector3

logger = logging.getLogger(__name__)


def _rgb(color: Vector3) -> tuple[int, int, int]:
    return (color.x & 0xFF, color.y & 0xFF, color.z & 0xFF)


class Display:
    """A window with primitive shape, text and image drawing."""

    def __init__(
        self,
        width: int = 0,
        height: int = 0,
        name: str = "window",
        full: bool = False,
    ) -> None:
        if full not in (0, 1):
            raise ValueError(f"invalid value for full: {full!r}; use 0 or 1")
        pygame.display.init()
        pygame.font.init()
        self._flags = pygame.FULLSCREEN if full else 0
        size = (0, 0) if full else (width, height)
        self.surface = pygame.display.set_mode(size, self._flags)
        pygame.display.set_caption(name)
        self._fonts: dict[tuple[object, int], pygame.font.Font] = {}

    def __enter__(self) -> Display:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # Window ---------------------------------------------------------------

    def resize(self, width: int, height: int) -> None:
        """Resize the window."""
        self.surface = pygame.display.set_mode((width, height), self._flags)

    def size(self) -> Vector2:
        """Return the window size as (width, height)."""
        width, height = self.surface.get_size()
        return Vector2(width, height)

    def present(self) -> None:
        """Show everything drawn so far."""
        pygame.display.flip()

    def close(self) -> None:
        """Release the window and the font system."""
        self._fonts.clear()
        pygame.font.quit()
        pygame.display.quit()

    # Rendering ------------------------------------------------------------

    def _plot(self, points: Iterable[Vector2], color: Vector3) -> None:
        rgb = _rgb(color)
        bounds = self.surface.get_rect()
        for point in points:
            if bounds.collidepoint(point.x, point.y):
                self.surface.set_at((point.x, point.y), rgb)

    def draw_background(self, color: Vector3) -> None:
        """Fill the whole window with a colour and present it."""
        validate_color(color)
        self.surface.fill(_rgb(color))
        self.present()

    def darken_rectangle(self, start: Vector2, end: Vector2, darkness: int) -> None:
        """Blend black with the given alpha over the rectangle from start."""
        width = end.x - start.x
        height = end.y - start.y
        if width <= 0 or height <= 0:
            return
        shade = pygame.Surface((width, height), pygame.SRCALPHA)
        shade.fill((0, 0, 0, darkness & 0xFF))
        self.surface.blit(shade, (start.x, start.y))

    def draw_point(self, position: Vector2, color: Vector3) -> None:
        """Set a single pixel."""
        self._plot((position,), color)

    def draw_line(
        self, start: Vector2, end: Vector2, color: Vector3, thickness: int = 0
    ) -> None:
        """Draw a line widened by thickness pixels on each side."""
        validate_color(color)
        width, height = self.surface.get_size()
        if max(start.x, end.x) > width or max(start.y, end.y) > height:
            logger.warning("line %s -> %s extends outside the window", start, end)
        self._plot(thick_line_points(start, end, thickness), color)

    def draw_rectangle(
        self,
        start: Vector2,
        end: Vector2,
        color: Vector3,
        fill: bool = True,
        thickness: int = 0,
    ) -> None:
        """Draw a filled or outlined rectangle between two corners."""
        validate_color(color)
        if not fill:
            self._plot(rectangle_points(start, end, False, thickness), color)
            return
        left, right = sorted((start.x, end.x))
        top, bottom = sorted((start.y, end.y))
        # Rows with negative coordinates are skipped, as in rectangle_points.
        top = max(top, 0)
        if left < 0 or left == right or bottom < top:
            return
        self.surface.fill(
            _rgb(color), pygame.Rect(left, top, right - left, bottom - top + 1)
        )

    def draw_triangle(
        self,
        v1: Vector2,
        v2: Vector2,
        v3: Vector2,
        color: Vector3,
        fill: bool = True,
        thickness: int = 0,
    ) -> None:
        """Draw a filled or outlined triangle."""
        validate_color(color)
        self._plot(triangle_points(v1, v2, v3, fill, thickness), color)

    def draw_circle(
        self,
        center: Vector2,
        radius: int,
        color: Vector3,
        fill: bool = True,
        thickness: int = 0,
    ) -> None:
        """Draw a filled circle, or thickness + 1 concentric rings."""
        if fill:
            validate_color(color)
        self._plot(circle_points(center, radius, fill, thickness), color)

    # Text and images ------------------------------------------------------

    def _font(self, font: str | PathLike[str] | None, size: int) -> pygame.font.Font:
        key = (font, size)
        if key not in self._fonts:
            path = None if font is None else str(font)
            self._fonts[key] = pygame.font.Font(path, size)
        return self._fonts[key]

    def draw_text(
        self,
        text: str,
        font: str | PathLike[str] | None,
        size: int,
        color: Vector3,
        position: Vector2,
    ) -> pygame.Rect:
        """Render text without antialiasing at position and present it.

        font is a .ttf path, or None for pygame's default font. Returns the
        area covered.
        """
        rendered = self._font(font, size).render(text, False, _rgb(color))
        area = self.surface.blit(rendered, (position.x, position.y))
        self.present()
        return area

    def draw_png(
        self, file: str | PathLike[str], size: int, position: Vector2
    ) -> pygame.Rect:
        """Draw an image scaled to size percent of its own size.

        Returns the area covered.
        """
        image = pygame.image.load(str(file))
        width, height = image.get_size()
        scaled_size = (int(width / 100 * size), int(height / 100 * size))
        scaled = pygame.transform.scale(image, scaled_size)
        return self.surface.blit(scaled, (position.x, position.y))