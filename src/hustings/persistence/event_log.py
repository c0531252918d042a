"""Append-only campaign log: the audit trail of a simulated election.

Every notable step of a run produces a record that is appended to the
log: the campaign starting, each quiet electorate-day, each resolved
event, the post-campaign coattail adjustments, each electorate tallied
and the final verdict. Records are immutable once written. The log can
be persisted to a JSONL file (one JSON object per line) and loaded back;
loading recomputes every record hash and fails closed on tampering or
replayed record IDs.
"""

from __future__ import annotations

import enum
import hashlib
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


class RecordKind(str, enum.Enum):
    """Classification of campaign log records."""
    CAMPAIGN_STARTED = "campaign_started"
    QUIET_DAY = "quiet_day"
    EVENT_RESOLVED = "event_resolved"
    COATTAILS_APPLIED = "coattails_applied"
    ELECTORATE_TALLIED = "electorate_tallied"
    VERDICT_DECLARED = "verdict_declared"


def _record_hash(
    record_id: str,
    record_kind: str,
    timestamp_utc: str,
    actor_id: str,
    payload: dict[str, Any],
) -> str:
    canonical = json.dumps(
        {
            "record_id": record_id,
            "record_kind": record_kind,
            "timestamp_utc": timestamp_utc,
            "actor_id": actor_id,
            "payload": payload,
        },
        sort_keys=True,
        ensure_ascii=False,
    ).encode("utf-8")
    return f"sha256:{hashlib.sha256(canonical).hexdigest()}"


@dataclass(frozen=True)
class LogRecord:
    """A single immutable record in the campaign log.

    The record_hash is computed at creation time over the canonical
    JSON of every other field.
    """
    record_id: str
    record_kind: RecordKind
    timestamp_utc: str
    actor_id: str
    payload: dict[str, Any]
    record_hash: str

    @staticmethod
    def create(
        record_id: str,
        record_kind: RecordKind,
        actor_id: str,
        payload: dict[str, Any],
        timestamp_utc: Optional[datetime] = None,
    ) -> LogRecord:
        """Create a new record with computed hash."""
        ts = timestamp_utc or datetime.now(timezone.utc)
        ts_str = ts.strftime("%Y-%m-%dT%H:%M:%SZ")
        return LogRecord(
            record_id=record_id,
            record_kind=record_kind,
            timestamp_utc=ts_str,
            actor_id=actor_id,
            payload=payload,
            record_hash=_record_hash(
                record_id, record_kind.value, ts_str, actor_id, payload,
            ),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "record_id": self.record_id,
            "record_kind": self.record_kind.value,
            "timestamp_utc": self.timestamp_utc,
            "actor_id": self.actor_id,
            "payload": self.payload,
            "record_hash": self.record_hash,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LogRecord:
        """Rebuild a stored record. Raises ValueError if its hash does not verify."""
        record = cls(
            record_id=data["record_id"],
            record_kind=RecordKind(data["record_kind"]),
            timestamp_utc=data["timestamp_utc"],
            actor_id=data["actor_id"],
            payload=data["payload"],
            record_hash=data["record_hash"],
        )
        computed = _record_hash(
            record.record_id, record.record_kind.value, record.timestamp_utc,
            record.actor_id, record.payload,
        )
        if record.record_hash != computed:
            raise ValueError(
                f"Integrity check failed: record {record.record_id} "
                f"stored hash {record.record_hash} != computed {computed}"
            )
        return record


class CampaignLog:
    """Append-only campaign log with optional file persistence.

    Records can only be appended, never modified or deleted.
    """

    def __init__(self, storage_path: Optional[Path] = None) -> None:
        self._records: list[LogRecord] = []
        self._storage_path = storage_path
        self._record_ids: set[str] = set()

        if storage_path and storage_path.exists():
            self._load_from_file(storage_path)

    def append(self, record: LogRecord) -> None:
        """Append a record to the log.

        Raises ValueError if record_id is a duplicate (replay protection).
        """
        if record.record_id in self._record_ids:
            raise ValueError(f"Duplicate record ID: {record.record_id}")

        self._remember(record)
        if self._storage_path:
            self._append_to_file(record)

    def record(
        self,
        record_kind: RecordKind,
        actor_id: str,
        payload: dict[str, Any],
    ) -> LogRecord:
        """Create and append a record with the next sequential ID."""
        entry = LogRecord.create(
            record_id=f"R-{self.count + 1:06d}",
            record_kind=record_kind,
            actor_id=actor_id,
            payload=payload,
        )
        self.append(entry)
        return entry

    def records(self, kind: Optional[RecordKind] = None) -> list[LogRecord]:
        """Return records, optionally filtered by kind."""
        if kind is None:
            return list(self._records)
        return [r for r in self._records if r.record_kind == kind]

    @property
    def count(self) -> int:
        return len(self._records)

    @property
    def last_record(self) -> Optional[LogRecord]:
        return self._records[-1] if self._records else None

    def _append_to_file(self, record: LogRecord) -> None:
        self._storage_path.parent.mkdir(parents=True, exist_ok=True)
        with self._storage_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record.as_dict(), sort_keys=True, ensure_ascii=False) + "\n")

    def _remember(self, record: LogRecord) -> None:
        self._records.append(record)
        self._record_ids.add(record.record_id)

    def _load_from_file(self, path: Path) -> None:
        """Replay a JSONL log, verifying every record. Fails closed on any defect."""
        with path.open("r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                if not line.strip():
                    continue
                try:
                    record = LogRecord.from_dict(json.loads(line))
                except ValueError as e:
                    raise ValueError(f"{path.name} line {line_num}: {e}") from None
                if record.record_id in self._record_ids:
                    raise ValueError(
                        f"Duplicate record ID on load ({path.name} line {line_num}): "
                        f"{record.record_id}"
                    )
                self._remember(record)
