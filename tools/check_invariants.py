#!/usr/bin/env python3
"""Hustings invariant checks against the configuration artifacts."""

import json
from pathlib import Path
from typing import Optional


ROOT = Path(__file__).resolve().parents[1]
CONFIG_DIR = ROOT / "config"

EVENT_KINDS = [
    "candidate_debate",
    "candidate_scandal",
    "candidate_prank",
    "leader_bout",
    "leader_debate",
    "international_issue",
    "issue_disclosure",
]
ISSUE_CATEGORIES = {"economic", "social", "logistics", "environmental", "health"}
EVENT_CATEGORIES = {
    "candidate_debate": "debate",
    "candidate_scandal": "candidate_related",
    "candidate_prank": "candidate_related",
    "leader_bout": "leader_related",
    "leader_debate": "leader_related",
    "international_issue": "issue_related",
    "issue_disclosure": "issue_related",
}


def load_json(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def check_range(raw, label: str, low: int, high: int, errors: list[str]) -> None:
    """Validate a [low, high] pair lies inside [low, high] bounds."""
    if not isinstance(raw, list) or len(raw) != 2:
        errors.append(f"{label} must be a [low, high] pair")
        return
    if raw[0] > raw[1]:
        errors.append(f"{label} is inverted: {raw}")
    if raw[0] < low or raw[1] > high:
        errors.append(f"{label} must lie within [{low}, {high}], got {raw}")


def check(config_dir: Optional[Path] = None) -> int:
    config_dir = config_dir or CONFIG_DIR
    params = load_json(config_dir / "campaign_params.json")
    catalog = load_json(config_dir / "catalog.json")
    roster = load_json(config_dir / "roster.json")
    errors: list[str] = []

    # --- Event schedule invariants ---
    schedule = params["event_schedule"]
    if not 1 <= schedule["fire_on"] <= schedule["coin_sides"]:
        errors.append("event_schedule.fire_on must be a face of the coin")
    bounds = [entry[0] for entry in schedule["thresholds"]]
    kinds = [entry[1] for entry in schedule["thresholds"]]
    if kinds != EVENT_KINDS:
        errors.append("event_schedule.thresholds must list every event kind in id order")
    if any(b <= a for a, b in zip(bounds, bounds[1:])) or (bounds and bounds[0] < 1):
        errors.append("event_schedule.thresholds must be strictly increasing from >= 1")
    if not bounds or bounds[-1] != schedule["roll_sides"]:
        errors.append("event_schedule.thresholds must cover the whole roll")

    # --- Resolution invariants ---
    resolution = params["event_resolution"]
    for kind in ("candidate_scandal", "candidate_prank", "issue_disclosure"):
        if kind not in resolution["pass_rolls"]:
            errors.append(f"event_resolution.pass_rolls missing {kind}")
    if resolution["head_to_head_stddev"] < 0 or resolution["solo_stddev"] < 0:
        errors.append("event_resolution stddevs must be >= 0")
    international = resolution["international_issue"]
    check_range(international["significance"], "international_issue.significance", 1, 9, errors)
    check_range(international["approach"], "international_issue.approach", 0, 100, errors)
    check_range(params["influence"]["step"], "influence.step", 0, 100, errors)

    # --- Generation invariants ---
    generation = params["generation"]
    if generation["clusters_per_electorate"] < 1:
        errors.append("generation.clusters_per_electorate must be >= 1")
    check_range(generation["cluster_significance"], "generation.cluster_significance", 1, 9, errors)
    check_range(generation["cluster_approach"], "generation.cluster_approach", 0, 100, errors)
    check_range(
        generation["managerial_event_handling"], "generation.managerial_event_handling", 0, 100, errors,
    )
    for group in ("leader_traits", "candidate_traits"):
        for name, pair in generation[group].items():
            check_range(pair, f"generation.{group}.{name}", 0, 100, errors)
    if "debating" not in generation["candidate_traits"]:
        errors.append("candidate_traits must include debating (debates roll on it)")

    # --- Tally and limits ---
    if params["tally"]["popularity_divisor"] <= 0:
        errors.append("tally.popularity_divisor must be > 0")
    if params["coattails"]["leader_popularity_divisor"] <= 0:
        errors.append("coattails.leader_popularity_divisor must be > 0")
    limits = params["limits"]
    if limits["electorates"][1] > len(roster.get("electorates", [])):
        errors.append("limits.electorates exceeds the electorates defined in the roster")

    # --- Catalog invariants ---
    issues = catalog.get("issues", [])
    if {i.get("category") for i in issues} != ISSUE_CATEGORIES or len(issues) != 5:
        errors.append("catalog must define exactly one issue per category")
    if [e.get("kind") for e in catalog.get("events", [])] != EVENT_KINDS:
        errors.append("catalog events must list every event kind in id order")
    for event in catalog.get("events", []):
        expected = EVENT_CATEGORIES.get(event.get("kind"))
        if expected and event.get("category") != expected:
            errors.append(f"catalog event {event.get('kind')} must be in category {expected}")

    # --- Roster invariants ---
    parties = roster.get("parties", [])
    if len(parties) < 2:
        errors.append("roster must register at least 2 parties")
    for party in parties:
        ranges = party.get("stance_ranges", [])
        if len(ranges) != len(issues):
            errors.append(f"{party.get('name')}: stance template must have {len(issues)} rows")
        for idx, row in enumerate(ranges):
            if len(row) != 4:
                errors.append(f"{party.get('name')}: stance row {idx} must have 4 values")
                continue
            check_range(row[:2], f"{party.get('name')} row {idx} significance", 1, 9, errors)
            check_range(row[2:], f"{party.get('name')} row {idx} approach", 0, 100, errors)
        if len(party.get("candidates", [])) < len(roster.get("electorates", [])):
            errors.append(f"{party.get('name')}: not enough candidates for every electorate")

    if errors:
        print("Invariant check failed:")
        for err in errors:
            print(f"- {err}")
        return 1

    print("Invariant check passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(check())
