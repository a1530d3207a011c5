"""tmux-host-stats - Textual preview of the status line."""

from queue import Empty, Queue

from textual.app import App, ComposeResult
from textual.css.query import NoMatches
from textual.widgets import Footer, Static

from hoststats.config import StatsConfig
from hoststats.models import StatusReport
from hoststats.monitor import HostStatsCollector, StatusMonitor

BAR_WIDTH = 20


def render_bar(percent: float | None, color: str) -> str:
    """Render a 20 cell usage bar with Rich markup."""
    if percent is None:
        return "\\[" + "[dim]░[/dim]" * BAR_WIDTH + "]    n/a"
    bar_len = min(max(int(percent / 5), 0), BAR_WIDTH)
    bar = f"[{color}]█[/{color}]" * bar_len + "[dim]░[/dim]" * (BAR_WIDTH - bar_len)
    # Escaped bracket for the bar container
    return f"\\[{bar}] {percent:5.1f}%"


class StatusLine(Static):
    """The status line exactly as tmux receives it."""

    DEFAULT_CSS = """
    StatusLine {
        height: 3;
        padding: 1;
        background: $surface;
    }
    """

    def show(self, report: StatusReport) -> None:
        self.update(report.line)


class MetricBars(Static):
    """Bars for CPU, memory usage and load."""

    DEFAULT_CSS = """
    MetricBars {
        height: auto;
        padding: 1;
    }
    """

    def show(self, report: StatusReport) -> None:
        memory = report.memory
        mem_percent = memory.used_mem / memory.total_mem * 100.0 if memory.total_mem else 0.0
        self.update(
            f"CPU  {render_bar(report.cpu_percent, 'green')}\n"
            f"Mem  {render_bar(mem_percent, 'cyan')}\n"
            f"Load {render_bar(report.loads.load_percent, 'yellow')}"
        )


class HostStatsApp(App):
    """Live preview of the tmux status line."""

    TITLE = "tmux-host-stats"
    SUB_TITLE = "Status line preview"

    CSS = """
    Screen {
        layout: vertical;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        config: StatsConfig | None = None,
        collector: HostStatsCollector | None = None,
    ) -> None:
        """Initialize the HostStatsApp."""
        super().__init__()
        self._update_queue: Queue[StatusReport] = Queue()
        self._monitor = StatusMonitor(self._update_queue, collector=collector, config=config)
        self._last_report: StatusReport | None = None

    @property
    def last_report(self) -> StatusReport | None:
        """Get the most recent report shown."""
        return self._last_report

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        # markup=False keeps the line verbatim
        yield StatusLine("Sampling...", id="status-line", markup=False)
        yield MetricBars(id="metric-bars")
        yield Footer()

    def on_mount(self) -> None:
        """Start the status monitor when the app is mounted."""
        self._monitor.start()
        # Set up a timer to poll the queue for updates
        self.set_interval(0.5, self._check_for_updates)

    def _check_for_updates(self) -> None:
        """Show the newest report from the queue, if any."""
        # Drain the queue to get the most recent
        report = None
        while True:
            try:
                report = self._update_queue.get_nowait()
            except Empty:
                break

        if report is not None:
            self._update_ui(report)

    def _update_ui(self, report: StatusReport) -> None:
        self._last_report = report
        try:
            self.query_one("#status-line", StatusLine).show(report)
            self.query_one("#metric-bars", MetricBars).show(report)
        except NoMatches:
            pass  # Screen is shutting down

    def action_quit(self) -> None:
        """Handle quit action with graceful cleanup."""
        self._monitor.stop()
        self.exit()
