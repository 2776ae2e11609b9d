"""
Life Weeks Image Generation Service

Renders the week grid as a PNG: one row per year of life expectancy,
52 cells per row, birth and end-of-life cells coloured, lived weeks
filled, and the current week outlined. Stats are drawn underneath.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

from PIL import Image, ImageDraw, ImageFont
from PIL.ImageFont import FreeTypeFont

from ..core.defaults_loader import get_config_value, get_image_color
from .life_weeks_domain import (
    LIFE_EXPECTANCY_YEARS,
    WEEKS_PER_YEAR,
    WeekRecord,
    iter_year_rows,
    year_labels,
)
from .life_weeks_progress import format_countdown, format_progress
from .life_weeks_session import LifeWeeksView

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int, int]
AnyFont = Union[FreeTypeFont, ImageFont.ImageFont]

# Fallbacks when config/defaults.yaml is unavailable
DEFAULT_CELL_SIZE = 12  # pixels
DEFAULT_GRID_PADDING = 40  # pixels around the grid
DEFAULT_LABEL_WIDTH = 56  # pixels for year labels left of each row
DEFAULT_TEXT_AREA_HEIGHT = 140  # pixels for text overlay at bottom


def _layout() -> Tuple[int, int, int, int]:
    return (
        int(get_config_value("display.image.cell_size", DEFAULT_CELL_SIZE)),
        int(get_config_value("display.image.grid_padding", DEFAULT_GRID_PADDING)),
        int(get_config_value("display.image.label_width", DEFAULT_LABEL_WIDTH)),
        int(
            get_config_value(
                "display.image.text_area_height", DEFAULT_TEXT_AREA_HEIGHT
            )
        ),
    )


def calculate_image_size() -> Tuple[int, int]:
    """Image width and height for the configured layout."""
    cell_size, padding, label_width, text_height = _layout()
    width = label_width + WEEKS_PER_YEAR * cell_size + 2 * padding
    height = LIFE_EXPECTANCY_YEARS * cell_size + 2 * padding + text_height
    return width, height


def cell_color(week: WeekRecord) -> Color:
    """Fill color for a week; birth and death win over lived state."""
    if week.is_birth:
        return get_image_color("birth", (34, 197, 94, 255))
    if week.is_death:
        return get_image_color("death", (239, 68, 68, 255))
    if week.is_lived:
        return get_image_color("lived", (55, 65, 81, 255))
    return get_image_color("unlived", (229, 231, 235, 255))


def _load_font(size: int) -> AnyFont:
    font_path = get_config_value("display.image.font_path")
    if font_path:
        try:
            return ImageFont.truetype(font_path, size)
        except OSError:
            logger.debug("Font %s unavailable, using default", font_path)
    return ImageFont.load_default(size)


def _draw_cells(
    draw: ImageDraw.ImageDraw,
    weeks: Sequence[WeekRecord],
    birth_date: date,
    x_offset: int,
    y_offset: int,
    cell_size: int,
    label_width: int,
) -> None:
    label_font = _load_font(max(8, cell_size - 2))
    label_color = get_image_color("label", (107, 114, 128, 255))
    outline = get_image_color("current_outline", (59, 130, 246, 255))

    for row, (year, row_weeks) in enumerate(
        zip(year_labels(birth_date), iter_year_rows(weeks))
    ):
        y = y_offset + row * cell_size
        draw.text(
            (x_offset + label_width - 8, y + cell_size // 2),
            str(year),
            fill=label_color,
            font=label_font,
            anchor="rm",
        )

        for col, week in enumerate(row_weeks):
            x = x_offset + label_width + col * cell_size
            box = [x + 1, y + 1, x + cell_size - 1, y + cell_size - 1]
            draw.rectangle(box, fill=cell_color(week))
            if week.is_current_week:
                draw.rectangle(
                    [x, y, x + cell_size, y + cell_size], outline=outline, width=2
                )


def _draw_text_overlay(
    draw: ImageDraw.ImageDraw,
    view: LifeWeeksView,
    image_width: int,
    image_height: int,
    text_height: int,
) -> None:
    text_color = get_image_color("text", (50, 50, 50, 255))
    font_large = _load_font(32)
    font_small = _load_font(18)

    text_y_start = image_height - text_height + 10

    title = get_config_value("messages.title", "Life in Weeks")
    draw.text(
        (image_width // 2, text_y_start),
        title,
        fill=text_color,
        font=font_large,
        anchor="mt",
    )
    draw.text(
        (image_width // 2, text_y_start + 50),
        format_progress(view.progress),
        fill=text_color,
        font=font_small,
        anchor="mt",
    )
    draw.text(
        (image_width // 2, text_y_start + 80),
        f"Remaining: {format_countdown(view.countdown)}",
        fill=text_color,
        font=font_small,
        anchor="mt",
    )


def render_life_weeks_image(view: LifeWeeksView) -> Image.Image:
    """Draw the grid and stats for ``view`` into a new RGBA image."""
    cell_size, padding, label_width, text_height = _layout()
    width, height = calculate_image_size()

    image = Image.new(
        "RGBA", (width, height), get_image_color("background", (243, 244, 246, 255))
    )
    draw = ImageDraw.Draw(image)

    _draw_cells(
        draw, view.weeks, view.birth_date, padding, padding, cell_size, label_width
    )
    _draw_text_overlay(draw, view, width, height, text_height)
    return image


def generate_life_weeks_image(
    view: LifeWeeksView,
    output_dir: Union[str, Path],
    filename: Optional[str] = None,
) -> Path:
    """
    Render ``view`` and save it as a PNG.

    Args:
        view: Computed grid, progress and countdown
        output_dir: Directory for the image (created if missing)
        filename: File name (defaults to life-weeks-YYYYMMDD.png)

    Returns:
        Path to the generated PNG image
    """
    output_path = Path(output_dir).expanduser()
    output_path.mkdir(parents=True, exist_ok=True)

    if filename is None:
        filename = f"life-weeks-{datetime.now().strftime('%Y%m%d')}.png"

    image_path = output_path / filename
    render_life_weeks_image(view).save(image_path, "PNG")
    logger.info(f"Generated life weeks grid: {image_path}")

    return image_path
