"""Policy resolver: typed access to the campaign parameters artifact.

All tunable numbers of the simulation (roll tables, deviations, pass
rolls, generation ranges, limits) live in config/campaign_params.json.
The resolver validates the document once at load time and fails closed
on any structural problem; engines only ever read from it.

Usage:
    resolver = PolicyResolver.from_config_dir(Path("config"))
    sides = resolver.event_roll_sides()
    table = resolver.event_thresholds()
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from hustings.models.event import SOLO_ROLL_KINDS, EventKind
from hustings.models.traits import Characteristic


@dataclass(frozen=True)
class IntRange:
    """Inclusive integer range."""
    low: int
    high: int

    def contains(self, value: int) -> bool:
        return self.low <= value <= self.high


def _int_range(raw: Any, label: str) -> IntRange:
    if not isinstance(raw, list) or len(raw) != 2:
        raise ValueError(f"{label} must be a [low, high] pair, got {raw!r}")
    low, high = int(raw[0]), int(raw[1])
    if low > high:
        raise ValueError(f"{label} has low {low} > high {high}")
    return IntRange(low, high)


class PolicyResolver:
    """Validated, read-only view of campaign_params.json."""

    PARAMS_FILENAME = "campaign_params.json"

    def __init__(self, params: dict[str, Any]) -> None:
        self._params = params
        self._thresholds: list[tuple[int, EventKind]] = []
        self._validate()

    @classmethod
    def from_config_dir(cls, config_dir: Path) -> PolicyResolver:
        """Load the parameters artifact from a config directory.

        Raises:
            FileNotFoundError: If campaign_params.json does not exist.
            ValueError: If the document is structurally invalid.
        """
        path = config_dir / cls.PARAMS_FILENAME
        if not path.exists():
            raise FileNotFoundError(f"Campaign parameters not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            return cls(json.load(f))

    def _validate(self) -> None:
        for section in (
            "event_schedule", "event_resolution", "influence",
            "tally", "generation", "coattails", "limits",
        ):
            if section not in self._params:
                raise ValueError(f"Campaign parameters missing '{section}' section")

        schedule = self._params["event_schedule"]
        sides = int(schedule["roll_sides"])
        if sides < 1:
            raise ValueError("event_schedule.roll_sides must be >= 1")
        if not 1 <= int(schedule["fire_on"]) <= int(schedule["coin_sides"]):
            raise ValueError("event_schedule.fire_on must be a face of the coin")

        previous = 0
        seen: set[EventKind] = set()
        for entry in schedule["thresholds"]:
            bound, kind_name = int(entry[0]), entry[1]
            kind = EventKind(kind_name)
            if bound <= previous:
                raise ValueError(
                    f"event_schedule.thresholds must be strictly increasing "
                    f"({bound} after {previous})"
                )
            if kind in seen:
                raise ValueError(f"event_schedule.thresholds repeats {kind.value}")
            seen.add(kind)
            self._thresholds.append((bound, kind))
            previous = bound
        if previous != sides:
            raise ValueError(
                f"event_schedule.thresholds must end at roll_sides {sides}, "
                f"ends at {previous}"
            )
        missing = [k.value for k in EventKind if k not in seen]
        if missing:
            raise ValueError(f"event_schedule.thresholds missing {missing}")

        resolution = self._params["event_resolution"]
        for kind_name in resolution["pass_rolls"]:
            EventKind(kind_name)
        missing = sorted(k.value for k in SOLO_ROLL_KINDS if k.value not in resolution["pass_rolls"])
        if missing:
            raise ValueError(f"event_resolution.pass_rolls missing {missing}")
        for label in ("head_to_head_stddev", "solo_stddev"):
            if float(resolution[label]) < 0:
                raise ValueError(f"event_resolution.{label} must be >= 0")

        step = self.influence_step()
        if step.low < 0:
            raise ValueError("influence.step must be non-negative")

        if int(self._params["tally"]["popularity_divisor"]) <= 0:
            raise ValueError("tally.popularity_divisor must be > 0")
        if int(self._params["coattails"]["leader_popularity_divisor"]) <= 0:
            raise ValueError("coattails.leader_popularity_divisor must be > 0")
        if self.clusters_per_electorate() < 1:
            raise ValueError("generation.clusters_per_electorate must be >= 1")

        # Touch every range so malformed pairs surface at load time.
        self.cluster_significance()
        self.cluster_approach()
        self.managerial_event_handling()
        self.leader_trait_ranges()
        self.candidate_trait_ranges()
        self.electorate_limits()
        self.day_limits()
        self.synthetic_significance()
        self.synthetic_approach()

    # ------------------------------------------------------------------
    # Event schedule
    # ------------------------------------------------------------------

    def event_coin_sides(self) -> int:
        return int(self._params["event_schedule"]["coin_sides"])

    def event_fire_face(self) -> int:
        return int(self._params["event_schedule"]["fire_on"])

    def event_roll_sides(self) -> int:
        return int(self._params["event_schedule"]["roll_sides"])

    def event_thresholds(self) -> list[tuple[int, EventKind]]:
        """Cumulative (upper bound, kind) pairs, ascending."""
        return list(self._thresholds)

    # ------------------------------------------------------------------
    # Event resolution
    # ------------------------------------------------------------------

    def head_to_head_stddev(self) -> float:
        return float(self._params["event_resolution"]["head_to_head_stddev"])

    def solo_stddev(self) -> float:
        return float(self._params["event_resolution"]["solo_stddev"])

    def pass_roll(self, kind: EventKind) -> int:
        rolls = self._params["event_resolution"]["pass_rolls"]
        if kind.value not in rolls:
            raise KeyError(f"No pass roll configured for {kind.value!r}")
        return int(rolls[kind.value])

    def international_check_sides(self) -> int:
        return int(self._params["event_resolution"]["international_issue"]["check_sides"])

    def international_fire_face(self) -> int:
        return int(self._params["event_resolution"]["international_issue"]["fire_on"])

    def synthetic_significance(self) -> IntRange:
        return _int_range(
            self._params["event_resolution"]["international_issue"]["significance"],
            "international_issue.significance",
        )

    def synthetic_approach(self) -> IntRange:
        return _int_range(
            self._params["event_resolution"]["international_issue"]["approach"],
            "international_issue.approach",
        )

    def influence_step(self) -> IntRange:
        return _int_range(self._params["influence"]["step"], "influence.step")

    # ------------------------------------------------------------------
    # Tally
    # ------------------------------------------------------------------

    def stance_vote_stddev(self) -> float:
        return float(self._params["tally"]["stance_vote_stddev"])

    def popularity_divisor(self) -> int:
        return int(self._params["tally"]["popularity_divisor"])

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def clusters_per_electorate(self) -> int:
        return int(self._params["generation"]["clusters_per_electorate"])

    def cluster_significance(self) -> IntRange:
        return _int_range(
            self._params["generation"]["cluster_significance"],
            "generation.cluster_significance",
        )

    def cluster_approach(self) -> IntRange:
        return _int_range(
            self._params["generation"]["cluster_approach"],
            "generation.cluster_approach",
        )

    def leader_trait_ranges(self) -> dict[Characteristic, IntRange]:
        return self._trait_ranges("leader_traits")

    def candidate_trait_ranges(self) -> dict[Characteristic, IntRange]:
        return self._trait_ranges("candidate_traits")

    def managerial_event_handling(self) -> IntRange:
        return _int_range(
            self._params["generation"]["managerial_event_handling"],
            "generation.managerial_event_handling",
        )

    def _trait_ranges(self, key: str) -> dict[Characteristic, IntRange]:
        raw = self._params["generation"][key]
        return {
            Characteristic(name): _int_range(pair, f"generation.{key}.{name}")
            for name, pair in raw.items()
        }

    # ------------------------------------------------------------------
    # Coattails and limits
    # ------------------------------------------------------------------

    def coattails_enabled(self) -> bool:
        return bool(self._params["coattails"]["enabled"])

    def coattail_divisor(self) -> int:
        return int(self._params["coattails"]["leader_popularity_divisor"])

    def electorate_limits(self) -> IntRange:
        return _int_range(self._params["limits"]["electorates"], "limits.electorates")

    def day_limits(self) -> IntRange:
        return _int_range(self._params["limits"]["days"], "limits.days")

    @property
    def version(self) -> str:
        return self._params.get("version", "unknown")
