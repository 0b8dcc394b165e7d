"""Tests for identicon_service.core.renderer — grid rasterisation."""

import time

import pytest
from PIL import Image, ImageChops, ImageDraw, ImageOps

from identicon_service.core.pattern import PatternGrid, generate
from identicon_service.core.renderer import CellLayout, blank_canvas, layout, render

BACKGROUND = (240, 240, 240)
FOREGROUND = (10, 120, 200)


def _grid(rows) -> PatternGrid:
    return PatternGrid(
        size=len(rows),
        cells=tuple(tuple(bool(c) for c in row) for row in rows),
        foreground=FOREGROUND,
        background=BACKGROUND,
    )


class TestLayout:
    """Cell size and offset arithmetic."""

    def test_even_division(self):
        assert layout(500, 50, 5) == CellLayout(cell=80, offset=50)

    def test_leftover_split_with_odd_pixel_after(self):
        # 103 drawable pixels, 5 cells of 20, 3 left over: 1 before, 2 after.
        assert layout(103, 0, 5) == CellLayout(cell=20, offset=1)

    def test_box_is_inclusive(self):
        assert CellLayout(cell=20, offset=1).box(0, 0) == (1, 1, 20, 20)
        assert CellLayout(cell=20, offset=1).box(1, 2) == (41, 21, 60, 40)

    @pytest.mark.parametrize(
        "scale,border,size",
        [(500, 250, 5), (500, 1000, 5), (500, 0, 0), (4, 0, 5), (10, 3, 5)],
    )
    def test_degenerate_layouts_draw_nothing(self, scale, border, size):
        assert layout(scale, border, size).cell == 0


class TestRender:
    """Pixel output of render()."""

    def test_canvas_size_and_mode(self):
        image = render(generate("magic", 5), 500, 50)
        assert image.size == (500, 500)
        assert image.mode == "RGB"

    def test_cells_painted(self):
        grid = _grid([[1, 0, 1], [0, 1, 0], [1, 1, 1]])
        image = render(grid, 300, 0)
        for row in range(3):
            for col in range(3):
                centre = (col * 100 + 50, row * 100 + 50)
                expected = FOREGROUND if grid.cells[row][col] else BACKGROUND
                assert image.getpixel(centre) == expected

    def test_border_is_background(self):
        image = render(_grid([[1]]), 100, 10)
        for point in [(0, 0), (9, 50), (50, 9), (90, 50), (99, 99)]:
            assert image.getpixel(point) == BACKGROUND
        assert image.getpixel((10, 10)) == FOREGROUND
        assert image.getpixel((89, 89)) == FOREGROUND

    def test_cell_edges_exact(self):
        """A single filled cell covers exactly its box."""
        image = render(_grid([[1, 0], [0, 0]]), 40, 0)
        assert image.getpixel((19, 19)) == FOREGROUND
        assert image.getpixel((20, 19)) == BACKGROUND
        assert image.getpixel((19, 20)) == BACKGROUND

    def test_background_override(self):
        image = render(_grid([[0]]), 10, 0, background=(0, 0, 0))
        assert image.getpixel((5, 5)) == (0, 0, 0)

    def test_degenerate_border_all_background(self):
        image = render(generate("test", 5), 500, 1000)
        assert image.size == (500, 500)
        assert image.getcolors() == [(500 * 500, BACKGROUND)]

    def test_empty_grid_all_background(self):
        image = render(generate("test", 0), 64, 4)
        assert image.getcolors() == [(64 * 64, BACKGROUND)]

    def test_symmetric_pixels(self):
        image = render(generate("mirror", 7), 350, 0)
        assert list(ImageOps.mirror(image).getdata()) == list(image.getdata())

    def test_zero_scale_gives_empty_image(self):
        image = render(generate("x", 0), 0, 0)
        assert image.size == (0, 0)


def _render_cell_by_cell(grid: PatternGrid, scale: int, border: int) -> Image.Image:
    """Draw every filled cell as its own rectangle."""
    image = Image.new("RGB", (scale, scale), grid.background)
    geometry = layout(scale, border, grid.size)
    if geometry.cell:
        draw = ImageDraw.Draw(image)
        for row in range(grid.size):
            for col in range(grid.size):
                if grid.cells[row][col]:
                    draw.rectangle(geometry.box(row, col), fill=grid.foreground)
    return image


class TestScaledRendering:
    """render() must match drawing each cell as a rectangle."""

    @pytest.mark.parametrize(
        "seed,size,scale,border",
        [
            ("magic", 5, 500, 50),
            ("odd", 7, 103, 0),
            ("even", 6, 97, 3),
            ("tiny", 1, 10, 2),
            ("exact", 10, 10, 0),
            ("wide", 33, 512, 17),
        ],
    )
    def test_matches_cell_by_cell(self, seed, size, scale, border):
        grid = generate(seed, size)
        expected = _render_cell_by_cell(grid, scale, border)
        assert ImageChops.difference(render(grid, scale, border), expected).getbbox() is None

    def test_large_grid_is_fast(self):
        grid = generate("x", 1024)
        start = time.perf_counter()
        image = render(grid, 4096, 0)
        elapsed = time.perf_counter() - start

        assert image.size == (4096, 4096)
        assert elapsed < 5.0

    def test_blank_canvas(self):
        image = blank_canvas(16, (1, 2, 3))
        assert image.getcolors() == [(256, (1, 2, 3))]
