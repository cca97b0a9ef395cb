"""Structured output helper for commands."""

import json
from typing import Any


class Output:
    """Collects command results and renders them as plain text or JSON."""

    def __init__(self):
        self.data: dict[str, Any] = {}
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def emit(self, data: dict[str, Any]) -> None:
        """Store structured output data."""
        self.data.update(data)

    def error(self, message: str) -> None:
        """Record an error message."""
        self.errors.append(message)

    def warning(self, message: str) -> None:
        """Record a warning message."""
        self.warnings.append(message)

    @property
    def ok(self) -> bool:
        """True if no errors were recorded."""
        return not self.errors

    def to_json(self) -> str:
        """Return data, errors and warnings as a JSON string."""
        payload = dict(self.data)
        if self.errors:
            payload["errors"] = self.errors
        if self.warnings:
            payload["warnings"] = self.warnings
        return json.dumps(payload, indent=2, default=str)

    def to_plain(self, title: str | None = None) -> str:
        """Return data as plain text."""
        lines = []

        if title:
            lines.append(title)
            lines.append("=" * len(title))

        for key, value in self.data.items():
            self._render_value(lines, key, value, indent=0)

        for error in self.errors:
            lines.append(f"[ERROR] {error}")
        for warning in self.warnings:
            lines.append(f"[WARNING] {warning}")

        return "\n".join(lines)

    def render(self, format: str = "plain", title: str | None = None) -> None:
        """Print output in the specified format.

        Args:
            format: Output format - "json" or "plain"
            title: Optional title for plain text output
        """
        if format == "json":
            print(self.to_json())
        else:
            print(self.to_plain(title))

    def _render_value(self, lines: list, key: str, value: Any, indent: int) -> None:
        prefix = "  " * indent

        if isinstance(value, dict):
            lines.append(f"{prefix}{key}:")
            for k, v in value.items():
                self._render_value(lines, k, v, indent + 1)
        elif isinstance(value, list):
            if not value:
                lines.append(f"{prefix}{key}: (none)")
            elif all(isinstance(x, dict) for x in value):
                lines.append(f"{prefix}{key}:")
                for item in value:
                    summary = ", ".join(f"{k}={v}" for k, v in item.items())
                    lines.append(f"{prefix}  - {summary}")
            else:
                lines.append(f"{prefix}{key}: {', '.join(str(x) for x in value)}")
        elif isinstance(value, bool):
            lines.append(f"{prefix}{key}: {'true' if value else 'false'}")
        else:
            lines.append(f"{prefix}{key}: {value}")
