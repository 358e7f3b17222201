"""Histogram rendering.

A report is a header block followed by one row per ranked pair::

      Key|Ct    (Pct) Histogram
    -----|----------------------------------
    apple|2 (66.67%) -----------------------
     kiwi|1 (33.33%) ------------

The header goes to its own stream so the rows can be piped on while the
header stays visible in the terminal.
"""

import logging
import math
from dataclasses import dataclass
from typing import TextIO

from .config import Settings
from .pairs import Pair, select_top

log = logging.getLogger(__name__)


@dataclass
class ColumnWidths:
    """Column layout of a report.

    Attributes:
        key: Width of the widest displayed key.
        token: Number of digits in the largest displayed count.
        pct: Width of the widest percentage string, parentheses included.
        bar: Columns left over for the bars.
        max_value: Largest displayed count, the full-width bar.
        total_value: Sum of all counts, displayed or not.
    """

    key: int
    token: int
    pct: int
    bar: int
    max_value: int
    total_value: int


def _percentage(value: int, total_value: int) -> str:
    """Format a count as a share of the total, e.g. ``(33.33%)``."""
    pct = 100 * value / total_value if total_value else 0.0
    return f"({pct:.2f}%)"


def compute_widths(data: list[Pair], total_value: int, width: int) -> ColumnWidths:
    """Lay out the columns for the displayed rows.

    Args:
        data: Rows that will be displayed. Must not be empty.
        total_value: Sum of all counts, including rows cut from the display.
        width: Total width budget of a row.

    Returns:
        Column widths; the bar width is clamped at zero.
    """
    max_value = max(p.value for p in data)
    key_width = max(len(p.key) for p in data)
    token_width = len(str(max_value))
    pct_width = len(_percentage(max_value, total_value))
    # pipe, space before percent, space before bar, leading pad
    content_width = key_width + 1 + token_width + 1 + pct_width + 1 + 1
    return ColumnWidths(
        key=key_width,
        token=token_width,
        pct=pct_width,
        bar=max(0, width - content_width),
        max_value=max_value,
        total_value=total_value,
    )


class HistogramWriter:
    """Writes ranked pairs as a histogram report."""

    def __init__(self, settings: Settings) -> None:
        """Initialize writer with report settings.

        Args:
            settings: Size, bar glyphs and palette of the report.
        """
        self.settings = settings

    def write_histogram(
        self,
        writer: TextIO,
        pairs: list[Pair],
        header_writer: TextIO | None = None,
    ) -> None:
        """Write the report for a set of pairs.

        Args:
            writer: Stream receiving the histogram rows.
            pairs: All pairs. Sorted in place; only the top rows are shown,
                but percentages are relative to the sum over every pair.
            header_writer: Stream receiving the header block, or None to
                skip it.

        Raises:
            OSError: If a write fails. The report is abandoned.
        """
        total_value = sum(p.value for p in pairs)
        data = select_top(pairs, self.settings.height)
        if not data:
            log.debug("No pairs to draw")
            return

        widths = compute_widths(data, total_value, self.settings.width)
        log.debug(f"Column widths: {widths}")

        if header_writer is not None:
            self._write_header(header_writer, widths)

        palette = self.settings.palette
        writer.write(palette.key)
        for i, p in enumerate(data):
            writer.write(f"{p.key:>{widths.key}}")
            writer.write(palette.regular)
            writer.write("|")
            writer.write(palette.count)
            writer.write(f"{p.value:>{widths.token}}")
            writer.write(" ")
            writer.write(palette.percent)
            writer.write(f"{_percentage(p.value, total_value):>{widths.pct}}")
            writer.write(palette.graph)
            writer.write(" ")
            writer.write(self.histogram_bar(widths.max_value, widths.bar, p.value))
            writer.write(palette.regular if i == len(data) - 1 else palette.key)
            writer.write("\n")

    def _write_header(self, writer: TextIO, widths: ColumnWidths) -> None:
        """Write the column titles and the separator line."""
        writer.write(f"{'Key':>{widths.key}}")
        writer.write(f"|{'Ct':>{widths.token}}")
        writer.write(f" {'(Pct)':>{widths.pct}}")
        writer.write(" Histogram\n")
        rest = max(0, self.settings.width - widths.key - 1)
        writer.write(f"{'-' * widths.key}|{'-' * rest}\n")

    def histogram_bar(self, max_value: int, bar_width: int, value: int) -> str:
        """Draw a bar proportional to ``value / max_value``.

        Three styles are supported, depending on the settings:
        - partial glyphs (``char_width < 1``): full glyphs, then the ladder
          glyph closest to the remaining fraction
        - two characters (``"=>"``): the first repeated, the second as a cap
        - a single glyph: repeated, plus one more as a cap

        Zero values, a zero ``max_value`` and a zero ``bar_width`` draw an
        empty bar.

        Args:
            max_value: Value drawn with the full ``bar_width``.
            bar_width: Columns available to the longest bar.
            value: Value of this bar.

        Returns:
            The bar string.
        """
        if value == 0 or max_value == 0 or bar_width == 0:
            return ""

        fill_width = value / max_value * bar_width
        int_width = math.floor(fill_width)
        remainder = fill_width - int_width

        settings = self.settings
        glyph = settings.histogram_char

        if settings.char_width < 1.0:
            ladder = settings.graph_chars
            bar = ladder[-1] * int_width
            if remainder > settings.char_width:
                step = math.floor(remainder / settings.char_width)
                bar += ladder[min(step, len(ladder) - 1)]
            return bar

        if len(glyph) == 2:
            return glyph[0] * int_width + glyph[1]

        return glyph * (int_width + 1)
