"""Election snapshots: JSON-serialisable dumps of full election state.

A snapshot captures every trait, stance, vote counter and seat count,
plus the verdict when one is supplied. Two runs over the same draw
stream produce byte-identical snapshots.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from hustings.models.election import Election
from hustings.tally.aggregator import ElectionVerdict


def election_snapshot(
    election: Election,
    verdict: Optional[ElectionVerdict] = None,
    seed: Optional[int] = None,
) -> dict[str, Any]:
    snapshot = election.as_dict()
    snapshot["seed"] = seed
    snapshot["verdict"] = verdict.as_payload() if verdict else None
    return snapshot


def write_snapshot(path: Path, snapshot: dict[str, Any]) -> None:
    """Write a snapshot as canonical (sorted-key) JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(snapshot, f, sort_keys=True, indent=2, ensure_ascii=False)
        f.write("\n")


def read_snapshot(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)
