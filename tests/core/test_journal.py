"""Tests for the invocation journal."""

import json
from datetime import date

import pytest

from machineflags.core.journal import (
    REJECTED,
    RESOLVED,
    Invocation,
    InvocationJournal,
    default_journal_dir,
)


def invocation(machine="web1", driver="generic", **kwargs) -> Invocation:
    kwargs.setdefault("timestamp", "2026-03-04T10:00:00+00:00")
    return Invocation(machine=machine, driver=driver, **kwargs)


class TestInvocation:
    """Tests for Invocation records."""

    def test_defaults(self):
        """New invocations are resolved and stamped with the current UTC time."""
        inv = Invocation(machine="web1", driver="generic")

        assert inv.outcome == RESOLVED
        assert inv.options == {}
        assert inv.timestamp.endswith("+00:00")

    def test_day_from_timestamp(self):
        """day is the date part of the timestamp."""
        assert invocation().day == date(2026, 3, 4)

    def test_unknown_outcome(self):
        """Only resolved and rejected are valid outcomes."""
        with pytest.raises(ValueError, match="outcome"):
            invocation(outcome="pending")

    def test_malformed_timestamp(self):
        """A timestamp without a date is rejected."""
        with pytest.raises(ValueError):
            invocation(timestamp="yesterday")

    def test_record_keeps_option_types(self):
        """Options keep their JSON types through a record."""
        inv = invocation(options={"generic-ssh-port": 22, "generic-engine-opt": ["a"]})

        rebuilt = Invocation.from_record(json.loads(json.dumps(inv.to_record())))

        assert rebuilt == inv

    @pytest.mark.parametrize("record", [
        ["web1"],
        {"driver": "generic"},
        {"machine": "web1", "driver": "generic", "options": ["x"]},
        {"machine": "web1", "driver": "generic", "outcome": "maybe"},
    ])
    def test_from_record_rejects_malformed(self, record):
        """Records of the wrong shape raise."""
        with pytest.raises((KeyError, TypeError, ValueError)):
            Invocation.from_record(record)


class TestInvocationJournal:
    """Tests for InvocationJournal."""

    def test_default_dir(self, tmp_path, monkeypatch):
        """The journal defaults to ~/var/log/machineflags."""
        monkeypatch.setenv("HOME", str(tmp_path))

        assert default_journal_dir() == tmp_path / "var" / "log" / "machineflags"
        assert InvocationJournal().base_path == default_journal_dir()

    def test_one_file_per_day(self, tmp_path):
        """Records land in {base}/{date}.jsonl."""
        journal = InvocationJournal(tmp_path / "journal")

        path = journal.record(invocation())

        assert path == tmp_path / "journal" / "2026-03-04.jsonl"
        assert json.loads(path.read_text())["machine"] == "web1"

    def test_appends(self, tmp_path):
        """Later records do not overwrite earlier ones."""
        journal = InvocationJournal(tmp_path)
        journal.record(invocation(machine="a"))
        journal.record(invocation(machine="b"))

        assert [i.machine for i in journal.read(date(2026, 3, 4))] == ["a", "b"]

    def test_reads_today_by_default(self, tmp_path):
        """read() without a day reads today's file."""
        journal = InvocationJournal(tmp_path)
        recorded = Invocation(machine="now", driver="azure")
        journal.record(recorded)

        assert journal.read() == [recorded]

    def test_missing_day(self, tmp_path):
        """A day with no file reads as empty."""
        assert InvocationJournal(tmp_path).read(date(2020, 1, 1)) == []

    def test_filters(self, tmp_path):
        """driver, machine and outcome narrow the result."""
        journal = InvocationJournal(tmp_path)
        journal.record(invocation(machine="web1", driver="generic"))
        journal.record(invocation(machine="vm1", driver="azure"))
        journal.record(invocation(machine="vm2", driver="azure", outcome=REJECTED, error="bad"))
        day = date(2026, 3, 4)

        assert [i.machine for i in journal.read(day, driver="azure")] == ["vm1", "vm2"]
        assert [i.machine for i in journal.read(day, machine="web1")] == ["web1"]
        assert [i.error for i in journal.read(day, outcome=REJECTED)] == ["bad"]
        assert journal.read(day, driver="generic", outcome=REJECTED) == []

    def test_last_keeps_most_recent(self, tmp_path):
        """last keeps the newest matches in order."""
        journal = InvocationJournal(tmp_path)
        for name in ("a", "b", "c"):
            journal.record(invocation(machine=name))

        assert [i.machine for i in journal.read(date(2026, 3, 4), last=2)] == ["b", "c"]

    def test_skips_unreadable_lines(self, tmp_path):
        """Corrupt or partial lines are skipped."""
        journal = InvocationJournal(tmp_path)
        path = journal.record(invocation())
        with open(path, "a") as f:
            f.write('not json\n\n{"machine": "x"}\n[1, 2]\n{"machine": "y", "driver": "generic", "timestamp": "2026-03-04T11:00:00+00:00"}\n')

        assert [i.machine for i in journal.read(date(2026, 3, 4))] == ["web1", "y"]
