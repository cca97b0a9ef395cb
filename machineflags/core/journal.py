"""Journal of create invocations, one JSON record per line."""

import json
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any


RESOLVED = "resolved"
REJECTED = "rejected"
OUTCOMES = (RESOLVED, REJECTED)


def default_journal_dir() -> Path:
    """Return the default journal directory (~/var/log/machineflags)."""
    return Path.home() / "var" / "log" / "machineflags"


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


@dataclass
class Invocation:
    """One create run: which machine, which driver, and what it resolved to."""

    machine: str
    driver: str
    outcome: str = RESOLVED
    swarm_discovery: str = ""
    options: dict[str, Any] = field(default_factory=dict)
    error: str = ""
    timestamp: str = ""

    def __post_init__(self):
        if self.outcome not in OUTCOMES:
            raise ValueError(f"Unknown outcome: {self.outcome}")
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()
        # raises ValueError on a malformed timestamp
        date.fromisoformat(self.timestamp[:10])

    @property
    def day(self) -> date:
        """UTC date the invocation was recorded on."""
        return date.fromisoformat(self.timestamp[:10])

    def to_record(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_record(cls, record: Any) -> "Invocation":
        """
        Rebuild an invocation from a decoded journal line.

        Raises:
            KeyError: If machine or driver is missing
            TypeError: If the record or its options are the wrong shape
            ValueError: If the outcome or timestamp is invalid
        """
        if not isinstance(record, dict):
            raise TypeError("journal record must be an object")
        return cls(
            machine=str(record["machine"]),
            driver=str(record["driver"]),
            outcome=record.get("outcome", RESOLVED),
            swarm_discovery=str(record.get("swarm_discovery") or ""),
            options=dict(record.get("options") or {}),
            error=str(record.get("error") or ""),
            timestamp=str(record.get("timestamp") or ""),
        )


class InvocationJournal:
    """
    Append-only store of create invocations.

    Records go to one file per UTC day: {base}/{date}.jsonl
    """

    def __init__(self, base_path: Path | None = None):
        self.base_path = base_path or default_journal_dir()

    def path_for(self, day: date) -> Path:
        return self.base_path / f"{day.isoformat()}.jsonl"

    def record(self, invocation: Invocation) -> Path:
        """Append an invocation and return the file it was written to."""
        path = self.path_for(invocation.day)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a") as f:
            f.write(json.dumps(invocation.to_record(), default=str) + "\n")
        return path

    def read(
        self,
        day: date | None = None,
        driver: str | None = None,
        machine: str | None = None,
        outcome: str | None = None,
        last: int | None = None,
    ) -> list[Invocation]:
        """
        Read invocations recorded on a day, oldest first.

        Args:
            day: UTC date to read (default: today)
            driver: Only invocations using this driver
            machine: Only invocations for this machine name
            outcome: Only resolved or only rejected invocations
            last: Keep only the most recent N matches

        Returns:
            Matching invocations; unreadable lines are skipped
        """
        path = self.path_for(day or _utc_today())
        if not path.exists():
            return []

        matches = []
        with open(path) as f:
            for line in f:
                if not line.strip():
                    continue
                try:
                    invocation = Invocation.from_record(json.loads(line))
                except (ValueError, KeyError, TypeError):
                    continue
                if driver and invocation.driver != driver:
                    continue
                if machine and invocation.machine != machine:
                    continue
                if outcome and invocation.outcome != outcome:
                    continue
                matches.append(invocation)

        if last:
            matches = matches[-last:]
        return matches
