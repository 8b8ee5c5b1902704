import pygame
import pytest

from blockfall.display import Display
from blockfall.raster import circle_points, line_points, rectangle_points
from blockfall.util import Vector2, Vector3

WIDTH, HEIGHT = 64, 48


@pytest.fixture
def display(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    window = Display(WIDTH, HEIGHT, "test", False)
    yield window
    window.close()


def _colored(display, rgb):
    return {
        Vector2(x, y)
        for x in range(WIDTH)
        for y in range(HEIGHT)
        if tuple(display.surface.get_at((x, y)))[:3] == rgb
    }


def _in_window(points):
    return {p for p in points if 0 <= p.x < WIDTH and 0 <= p.y < HEIGHT}


def test_size_matches_request(display):
    assert display.size() == Vector2(WIDTH, HEIGHT)


def test_resize_changes_size(display):
    display.resize(32, 24)
    assert display.size() == Vector2(32, 24)


def test_invalid_full_flag(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    with pytest.raises(ValueError):
        Display(10, 10, "bad", 2)


def test_draw_point_sets_pixel(display):
    display.draw_point(Vector2(3, 4), Vector3(10, 20, 30))
    assert tuple(display.surface.get_at((3, 4)))[:3] == (10, 20, 30)


def test_background_fills_window(display):
    display.draw_background(Vector3(1, 2, 3))
    assert _colored(display, (1, 2, 3)) == _in_window(
        Vector2(x, y) for x in range(WIDTH) for y in range(HEIGHT)
    )


def test_background_rejects_bad_color(display):
    with pytest.raises(ValueError):
        display.draw_background(Vector3(0, 0, 256))


def test_line_pixels_match_raster(display):
    start, end = Vector2(2, 3), Vector2(30, 20)
    display.draw_line(start, end, Vector3(255, 0, 0), 0)
    assert _colored(display, (255, 0, 0)) == set(line_points(start, end))


def test_line_rejects_negative_color(display):
    with pytest.raises(ValueError):
        display.draw_line(Vector2(0, 0), Vector2(5, 5), Vector3(-1, 0, 0), 0)


@pytest.mark.parametrize(
    "start,end",
    [
        (Vector2(2, 3), Vector2(20, 15)),
        (Vector2(20, 15), Vector2(2, 3)),
        (Vector2(50, 40), Vector2(70, 60)),
        (Vector2(5, 5), Vector2(5, 12)),
    ],
)
def test_filled_rectangle_matches_raster(display, start, end):
    display.draw_rectangle(start, end, Vector3(0, 255, 0), True, 0)
    expected = _in_window(rectangle_points(start, end, True, 0))
    assert _colored(display, (0, 255, 0)) == expected


def test_outline_rectangle_matches_raster(display):
    start, end = Vector2(5, 5), Vector2(25, 20)
    display.draw_rectangle(start, end, Vector3(0, 0, 255), False, 1)
    expected = _in_window(rectangle_points(start, end, False, 1))
    assert _colored(display, (0, 0, 255)) == expected


def test_filled_circle_matches_raster(display):
    center = Vector2(30, 24)
    display.draw_circle(center, 8, Vector3(9, 9, 9), True, 0)
    assert _colored(display, (9, 9, 9)) == _in_window(circle_points(center, 8, True, 0))


def test_triangle_draws_first_vertex(display):
    display.draw_triangle(
        Vector2(2, 2), Vector2(20, 2), Vector2(2, 20), Vector3(7, 7, 7), True, 0
    )
    pixels = _colored(display, (7, 7, 7))
    assert Vector2(2, 2) in pixels
    assert all(2 <= p.x <= 20 and 2 <= p.y <= 20 for p in pixels)


def test_darken_full_alpha_blackens_region(display):
    display.draw_background(Vector3(200, 200, 200))
    display.darken_rectangle(Vector2(10, 10), Vector2(20, 20), 255)
    assert tuple(display.surface.get_at((15, 15)))[:3] == (0, 0, 0)
    assert tuple(display.surface.get_at((5, 5)))[:3] == (200, 200, 200)


def test_darken_partial_alpha_darkens(display):
    display.draw_background(Vector3(200, 200, 200))
    display.darken_rectangle(Vector2(0, 0), Vector2(10, 10), 128)
    red, green, blue = tuple(display.surface.get_at((5, 5)))[:3]
    assert 0 < red < 200 and red == green == blue


def test_draw_text_returns_area(display):
    area = display.draw_text("X", None, 30, Vector3(255, 255, 255), Vector2(4, 6))
    assert area.topleft == (4, 6)
    assert area.width > 0
    white = {
        (x, y)
        for x in range(area.left, min(area.right, WIDTH))
        for y in range(area.top, min(area.bottom, HEIGHT))
        if tuple(display.surface.get_at((x, y)))[:3] == (255, 255, 255)
    }
    assert white


def test_draw_png_scales_image(display, tmp_path):
    image = pygame.Surface((10, 10))
    image.fill((12, 34, 56))
    path = tmp_path / "tile.png"
    pygame.image.save(image, str(path))

    full = display.draw_png(path, 100, Vector2(1, 1))
    assert full.size == (10, 10)
    assert tuple(display.surface.get_at((5, 5)))[:3] == (12, 34, 56)

    half = display.draw_png(path, 50, Vector2(30, 30))
    assert half.size == (5, 5)


def test_draw_png_missing_file(display, tmp_path):
    with pytest.raises((FileNotFoundError, pygame.error)):
        display.draw_png(tmp_path / "absent.png", 100, Vector2(0, 0))