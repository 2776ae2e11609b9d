"""Tests for life_weeks_image service."""

from datetime import date, datetime

import pytest
from PIL import Image, ImageFont

from life_weeks.services.life_weeks_domain import (
    LIFE_EXPECTANCY_YEARS,
    WEEKS_PER_YEAR,
    generate_weeks,
)
from life_weeks.services.life_weeks_image import (
    DEFAULT_CELL_SIZE,
    _load_font,
    calculate_image_size,
    cell_color,
    generate_life_weeks_image,
    render_life_weeks_image,
)
from life_weeks.services.life_weeks_session import LifeWeeksSession


@pytest.fixture
def view():
    session = LifeWeeksSession(clock=lambda: datetime(2024, 1, 1))
    session.submit(date(2000, 1, 1))
    return session.view()


class TestCellColor:
    """Birth and death colors take precedence over lived state."""

    def test_colors_by_kind(self):
        weeks = generate_weeks(date(2000, 1, 1), datetime(2024, 1, 1))
        birth, lived, unlived, death = weeks[0], weeks[10], weeks[2000], weeks[-1]

        assert cell_color(birth) == (34, 197, 94, 255)
        assert cell_color(death) == (239, 68, 68, 255)
        assert cell_color(lived) == (55, 65, 81, 255)
        assert cell_color(unlived) == (229, 231, 235, 255)

    def test_death_color_when_everything_is_lived(self):
        weeks = generate_weeks(date(1900, 1, 1), datetime(2024, 1, 1))
        assert weeks[-1].is_lived
        assert cell_color(weeks[-1]) == (239, 68, 68, 255)


class TestImageSize:
    def test_grid_fits_all_rows_and_columns(self):
        width, height = calculate_image_size()
        assert width > WEEKS_PER_YEAR * DEFAULT_CELL_SIZE
        assert height > LIFE_EXPECTANCY_YEARS * DEFAULT_CELL_SIZE


class TestRender:
    def test_render_returns_rgba_image(self, view):
        image = render_life_weeks_image(view)
        assert image.mode == "RGBA"
        assert image.size == calculate_image_size()

    def test_generate_writes_png(self, view, tmp_path):
        path = generate_life_weeks_image(view, tmp_path / "out", filename="grid.png")

        assert path == tmp_path / "out" / "grid.png"
        assert path.exists()
        with Image.open(path) as img:
            assert img.format == "PNG"
            assert img.size == calculate_image_size()

    def test_default_filename_uses_date(self, view, tmp_path):
        path = generate_life_weeks_image(view, tmp_path)
        assert path.name == f"life-weeks-{datetime.now().strftime('%Y%m%d')}.png"


class TestLoadFont:
    """Missing fonts fall back to Pillow's default at the requested size."""

    @pytest.fixture
    def missing_font(self, monkeypatch, tmp_path):
        monkeypatch.setattr(
            "life_weeks.services.life_weeks_image.get_config_value",
            lambda key, default=None: str(tmp_path / "missing.ttf"),
        )

    def test_fallback_keeps_size(self, missing_font):
        large = _load_font(32)
        small = _load_font(18)

        assert isinstance(large, ImageFont.FreeTypeFont)
        assert large.size == 32
        assert small.size == 18
        assert large.getbbox("Ag")[3] > small.getbbox("Ag")[3]
