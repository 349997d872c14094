"""
Terminal market panel.

Redraws the reconciled market list with its RAG distribution and
refresh health on a fixed interval.
"""

import asyncio
import sys
from collections import Counter
from typing import TextIO

from spreadwatch import __version__
from spreadwatch.core.controller import RefreshController
from spreadwatch.core.types import RagStatus
from spreadwatch.dashboard.view import SortDirection, SortOption, filter_and_sort, to_row
from spreadwatch.utils.time import format_timestamp_ms


# Frame pieces as (left, fill, right) per rule kind
FRAME = {
    "top": ("\u2554", "\u2550", "\u2557"),  # ╔═╗
    "mid": ("\u2560", "\u2550", "\u2563"),  # ╠═╣
    "bottom": ("\u255a", "\u2550", "\u255d"),  # ╚═╝
}
EDGE = "\u2551"  # ║
COLUMN_RULE = "\u2502"  # │

RAG_MARKS = {
    RagStatus.GREEN: "G",
    RagStatus.AMBER: "A",
    RagStatus.RED: "R",
}


def format_uptime(seconds: float) -> str:
    """Format elapsed seconds as HH:MM:SS."""
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def market_columns(pair: str, bid: str, ask: str, spread: str, rag: str) -> str:
    """Lay out one table line; shared by the header and the rows."""
    rule = COLUMN_RULE
    return f"  {pair:<14}{rule} {bid:>14} {rule} {ask:>14} {rule} {spread:>9} {rule} {rag:^3}"


class CLIReporter:
    """
    Live terminal view of a RefreshController.

    Panel sections:
    - State, uptime, freshness and timer status
    - RAG distribution and the last load error
    - Market rows (pair, bid, ask, spread, RAG)
    - Load/refresh counters and refresh latency
    """

    def __init__(
        self,
        controller: RefreshController,
        width: int = 80,
        max_rows: int = 30,
        output: TextIO | None = None,
        sort_option: SortOption = SortOption.NAME,
        sort_direction: SortDirection = SortDirection.ASC,
        search_query: str = "",
    ) -> None:
        """
        Initialize the panel.

        Args:
            controller: Controller whose dataset is displayed.
            width: Panel width in characters, frame included.
            max_rows: Maximum number of market rows shown.
            output: Output stream (default: stdout).
            sort_option: Column to sort rows by.
            sort_direction: Sort direction.
            search_query: Ticker filter.
        """
        self._controller = controller
        self._inner = width - 2
        self._max_rows = max_rows
        self._output = output or sys.stdout
        self._sort_option = sort_option
        self._sort_direction = sort_direction
        self._search_query = search_query
        self._task: asyncio.Task[None] | None = None

    def _rule(self, kind: str) -> str:
        left, fill, right = FRAME[kind]
        return f"{left}{fill * self._inner}{right}"

    def _row(self, content: str) -> str:
        return f"{EDGE}{content[: self._inner].ljust(self._inner)}{EDGE}"

    def _header_section(self) -> list[str]:
        controller = self._controller
        records = controller.records
        rag_counts = Counter(r.rag_status for r in records)

        lines = [
            self._row(f"  SPREADWATCH v{__version__} | {controller.state.value}"),
            self._rule("mid"),
            self._row(
                f"  Uptime: {format_uptime(controller.metrics.uptime_seconds)}  |  "
                f"Pairs: {len(records)}  |  "
                f"Updated: {format_timestamp_ms(controller.last_updated_ms)}  |  "
                f"Auto: {'ON' if controller.is_auto_refreshing else 'OFF'}"
            ),
            self._row(
                f"  Green: {rag_counts[RagStatus.GREEN]}  "
                f"Amber: {rag_counts[RagStatus.AMBER]}  "
                f"Red: {rag_counts[RagStatus.RED]}  |  "
                f"Every {controller.refresh_interval_ms / 1000:g}s"
            ),
        ]
        if controller.error:
            lines.append(self._row(f"  Error: {controller.error}"))
        return lines

    def _market_section(self) -> list[str]:
        rows = filter_and_sort(
            self._controller.records,
            search_query=self._search_query,
            sort_option=self._sort_option,
            direction=self._sort_direction,
        )

        lines = [
            self._row(market_columns("MARKET", "BID", "ASK", "SPREAD", "RAG")),
            self._rule("mid"),
        ]
        for record in rows[: self._max_rows]:
            row = to_row(record)
            lines.append(
                self._row(
                    market_columns(
                        row["pair"],
                        row["bid"],
                        row["ask"],
                        row["spread"],
                        RAG_MARKS[record.rag_status],
                    )
                )
            )

        hidden = len(rows) - self._max_rows
        if hidden > 0:
            lines.append(self._row(f"  ... {hidden} more"))
        return lines

    def _health_section(self) -> list[str]:
        metrics = self._controller.metrics
        refresh = metrics.get_latency_stats("refresh")
        avg = f"{refresh.avg_us / 1000:.0f}ms" if refresh.count else "---"

        return [
            self._row(
                f"  Loads: {metrics.get_counter('full_loads')}  "
                f"Refreshes: {metrics.get_counter('refreshes')}  "
                f"Failed: {metrics.get_counter('refresh_failures')}  "
                f"Avg refresh: {avg}"
            )
        ]

    def render(self) -> str:
        """Render the full panel as a string."""
        lines = [self._rule("top")]
        lines += self._header_section()
        lines.append(self._rule("mid"))
        lines += self._market_section()
        lines.append(self._rule("mid"))
        lines += self._health_section()
        lines.append(self._rule("bottom"))
        return "\n".join(lines)

    def display(self) -> None:
        """Clear the terminal and draw the panel once."""
        self._output.write("\033[2J\033[H" + self.render() + "\n")
        self._output.flush()

    async def _redraw_loop(self, interval: float) -> None:
        while True:
            self.display()
            await asyncio.sleep(interval)

    def start(self, interval: float = 1.0) -> asyncio.Task[None]:
        """Redraw every ``interval`` seconds in a background task."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._redraw_loop(interval))
        return self._task

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def print_summary(self) -> None:
        """Write the end-of-session counters."""
        metrics = self._controller.metrics
        counters = (
            ("Full loads", "full_loads"),
            ("Load failures", "load_failures"),
            ("Refreshes", "refreshes"),
            ("Refresh failures", "refresh_failures"),
            ("Skipped ticks", "refreshes_skipped"),
        )

        lines = [
            "",
            "=" * 50,
            "  SESSION SUMMARY",
            "=" * 50,
            f"  Uptime: {format_uptime(metrics.uptime_seconds)}",
            f"  Pairs tracked: {len(self._controller.records)}",
            "",
            "  REFRESH:",
        ]
        lines += [f"    {label + ':':<18}{metrics.get_counter(name):,}" for label, name in counters]
        lines.append("=" * 50)

        self._output.write("\n".join(lines) + "\n")
        self._output.flush()
