"""Terminal drawing of candles with rich.

Each candle is drawn as a fixed-height column: wick rows, then body rows,
then wick rows, sized from the candle's RenderLayout.
"""

from typing import Optional

from rich.console import Group
from rich.table import Table
from rich.text import Text

from nextcandle.geometry import project_candle
from nextcandle.models import Candle, LayoutIssue, RenderLayout

DEFAULT_HEIGHT = 16
COLUMN_WIDTH = 13

WICK = "│"
BODY = "█████"
BULLISH_STYLE = "green"
BEARISH_STYLE = "red"


def layout_rows(layout: RenderLayout, height: int) -> tuple[int, int, int]:
    """Split ``height`` rows into (top wick, body, bottom wick) row counts.

    The body always gets at least one row so a flat body stays visible.
    """
    top = round(layout.top_wick_pct * height / 100)
    body_end = round((layout.top_wick_pct + layout.body_height_pct) * height / 100)
    if body_end <= top:
        if top >= height:
            top = height - 1
        body_end = top + 1
    body_end = min(body_end, height)
    return top, body_end - top, height - body_end


def _placeholder(height: int) -> Text:
    lines = [" " * COLUMN_WIDTH] * height
    lines[height // 2] = "Invalid Data".center(COLUMN_WIDTH)
    return Text("\n".join(lines), style="dim")


def draw_candle(candle: Candle, height: int = DEFAULT_HEIGHT) -> Text:
    """Draw a candle as a block of text.

    Invalid candles draw an "Invalid Data" placeholder. Degenerate
    (zero-range) candles draw an empty column.
    """
    layout = project_candle(candle)

    if layout is LayoutIssue.INVALID:
        return _placeholder(height)
    if layout is LayoutIssue.DEGENERATE:
        return Text("\n".join([" " * COLUMN_WIDTH] * height))

    style = BULLISH_STYLE if layout.is_bullish else BEARISH_STYLE
    top, body, bottom = layout_rows(layout, height)

    rows = (
        [WICK.center(COLUMN_WIDTH)] * top
        + [BODY.center(COLUMN_WIDTH)] * body
        + [WICK.center(COLUMN_WIDTH)] * bottom
    )
    return Text("\n".join(rows), style=style)


def _captioned(candle: Candle, title: str, subtitle: Optional[str], height: int) -> Group:
    parts = [draw_candle(candle, height), Text(title.center(COLUMN_WIDTH), style="bold")]
    if subtitle:
        parts.append(Text(subtitle, style="dim", justify="center"))
    return Group(*parts)


def candle_pair(
    current: Candle,
    predicted: Optional[Candle],
    current_caption: Optional[str] = None,
    predicted_caption: Optional[str] = None,
    height: int = DEFAULT_HEIGHT,
) -> Table:
    """Lay out the current and predicted candles side by side.

    Args:
        current: The candle the user entered.
        predicted: The synthesized next candle, or None to show a "?" slot.
        current_caption: Optional label under the current candle.
        predicted_caption: Optional label under the predicted candle.
        height: Rows per candle.

    Returns:
        A rich Table grid ready to print.
    """
    grid = Table.grid(padding=(0, 2))
    grid.add_column(width=COLUMN_WIDTH)
    grid.add_column(vertical="middle")
    grid.add_column(width=COLUMN_WIDTH)

    if predicted is None:
        unknown = ["".center(COLUMN_WIDTH)] * height
        unknown[height // 2] = "?".center(COLUMN_WIDTH)
        right = Group(Text("\n".join(unknown), style="dim"), Text("".center(COLUMN_WIDTH)))
    else:
        right = _captioned(predicted, "Prediction", predicted_caption, height)

    grid.add_row(
        _captioned(current, "Current", current_caption, height),
        Text("→", style="dim"),
        right,
    )
    return grid
