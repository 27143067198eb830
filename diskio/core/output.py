"""Plugin output: status line, perfdata and exit code."""

import json
from typing import Any

from diskio.core.fixedpoint import format_decimal
from diskio.core.models import Metrics, Status

# (summary label, perfdata label, metric name)
LABELS = [
    ("tps", "tps", "tps"),
    ("KB_read/s", "KB_read/s", "kb_read"),
    ("KB_written/s", "KB_written/s", "kb_written"),
    ("%io-utilisation", "io-utilisation", "util_pct"),
]


class Output:
    """Collects the result of a check and renders it for the supervisor."""

    def __init__(self):
        self.data: dict[str, Any] = {}
        self.errors: list[str] = []
        self.details: list[str] = []
        self.status: Status = Status.UNKNOWN
        self.metrics: Metrics | None = None
        self.first_run: bool = False
        self._printed: bool = False

    def emit(self, data: dict[str, Any]) -> None:
        """Store extra structured data (device, thresholds, state file)."""
        self.data.update(data)

    def error(self, message: str) -> None:
        """Record an error; the check result becomes UNKNOWN."""
        self.errors.append(message)
        self.status = Status.UNKNOWN

    def detail(self, line: str) -> None:
        """Add a long-output line shown after the status line."""
        self.details.append(line)

    def set_result(self, status: Status, metrics: Metrics | None = None, first_run: bool = False) -> None:
        """Record the evaluated status and the metrics behind it."""
        self.status = status
        self.metrics = metrics
        self.first_run = first_run

    @property
    def exit_code(self) -> int:
        return int(self.status)

    def formatted_values(self) -> list[str]:
        """Metric values as printed: one decimal, or 0 on a first run."""
        if self.first_run or self.metrics is None:
            return ["0"] * len(LABELS)
        values = self.metrics.values()
        return [format_decimal(values[name]) for _, _, name in LABELS]

    def status_line(self) -> str:
        """The single line the supervisor parses."""
        if self.errors:
            return f"{Status.UNKNOWN.name} - {self.errors[0]}"

        values = self.formatted_values()
        stats = " ".join(f"{label}={v}" for (label, _, _), v in zip(LABELS, values))
        perfdata = " ".join(f"'{label}'={v};" for (_, label, _), v in zip(LABELS, values))
        return f"{self.status.name} - I/O stats {stats} | {perfdata}"

    def to_plain(self) -> str:
        """Status line followed by long output."""
        lines = [self.status_line()]
        lines.extend(self.errors[1:])
        lines.extend(self.details)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Result as a JSON-serializable mapping."""
        result: dict[str, Any] = {
            "status": self.status.name,
            "exit_code": self.exit_code,
            "first_run": self.first_run,
            **self.data,
        }
        if self.errors:
            result["errors"] = list(self.errors)
        elif self.first_run or self.metrics is None:
            result["metrics"] = {name: "0" for _, _, name in LABELS}
        else:
            result["metrics"] = self.metrics.values()
            result["deltas"] = self.metrics.deltas()
            if self.metrics.clamped:
                result["clamped"] = list(self.metrics.clamped)
        return result

    def to_json(self) -> str:
        """Return result as JSON string."""
        return json.dumps(self.to_dict(), indent=2, default=str)

    def render(self, format: str = "nagios", usage: str | None = None) -> None:
        """Print output in the specified format.

        Args:
            format: Output format - "nagios" or "json"
            usage: Help text printed after the status line on usage errors
        """
        if self._printed:
            return
        self._printed = True

        if format == "json":
            print(self.to_json())
            return

        print(self.to_plain())
        if usage:
            print(usage)
