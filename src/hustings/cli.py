"""Hustings CLI: command-line interface for the election simulator.

Usage:
    python -m hustings.cli run --electorates 5 --days 10
    python -m hustings.cli run --electorates 3 --days 7 --seed 42 --log data/campaign.jsonl
    python -m hustings.cli catalog
    python -m hustings.cli check-invariants

Environment (read from .env at the repository root when present):
    HUSTINGS_CONFIG_DIR  config directory (default: config/)
    HUSTINGS_SEED        default seed for `run`
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from hustings.catalog import Catalog
from hustings.engine.random_source import RandomSource
from hustings.persistence.event_log import CampaignLog
from hustings.persistence.snapshot import write_snapshot
from hustings.reporting.formatter import (
    format_campaign,
    format_overview,
    format_standings,
    format_tally,
    format_verdict,
)
from hustings.service import CampaignService


ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG = ROOT / "config"


def _env_seed() -> Optional[int]:
    raw = os.getenv("HUSTINGS_SEED")
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise SystemExit(f"HUSTINGS_SEED must be an integer, got {raw!r}") from None


def _print_lines(lines: list[str]) -> None:
    for line in lines:
        print(line)


def cmd_run(args: argparse.Namespace) -> int:
    log = CampaignLog(storage_path=args.log) if args.log else None
    try:
        service = CampaignService.from_config_dir(args.config, log=log)
    except (FileNotFoundError, ValueError) as e:
        print(f"Failed: {e}", file=sys.stderr)
        return 1

    rng = RandomSource(args.seed)
    generated = service.generate(args.electorates, args.days, rng)
    if not generated.success:
        print(f"Failed: {'; '.join(generated.errors)}", file=sys.stderr)
        return 1
    if not args.quiet:
        _print_lines(format_overview(generated.data["election"]))

    result = service.run_election(generated.data["election"], rng)
    if not result.success:
        print(f"Failed: {'; '.join(result.errors)}", file=sys.stderr)
        return 1

    run = result.data["run"]
    if not args.quiet:
        _print_lines(format_campaign(run.election, run.campaign))
        _print_lines(format_standings(run.election))
        _print_lines(format_tally(run.tallies))
    _print_lines(format_verdict(run.verdict))

    if args.snapshot:
        write_snapshot(args.snapshot, run.snapshot())
        print(f"Snapshot written: {args.snapshot}")
    return 0


def cmd_catalog(args: argparse.Namespace) -> int:
    try:
        catalog = Catalog.from_config_dir(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Failed: {e}", file=sys.stderr)
        return 1
    print(f"Catalog version {catalog.version}")
    print("Issues:")
    for issue in catalog.issues:
        print(f"  [{issue.category.value}] {issue.code}: {issue.statement}")
    print("Events:")
    for template in catalog.events:
        print(
            f"  {template.kind.event_id} {template.kind.value} "
            f"(impact {template.impact} on {template.impacted_trait.value}): "
            f"{template.message}"
        )
    return 0


def cmd_check_invariants(args: argparse.Namespace) -> int:
    """Run configuration invariant checks."""
    tools_dir = ROOT / "tools"
    sys.path.insert(0, str(tools_dir))
    from check_invariants import check
    return check(args.config)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hustings",
        description="Hustings: multi-party election campaign simulator",
    )
    env_config = os.getenv("HUSTINGS_CONFIG_DIR")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(env_config) if env_config else DEFAULT_CONFIG,
        help="Path to config directory (default: config/)",
    )

    sub = parser.add_subparsers(dest="command")

    # run
    p_run = sub.add_parser("run", help="Simulate an election")
    p_run.add_argument("--electorates", type=int, required=True, help="Electorates to contest (1-10)")
    p_run.add_argument("--days", type=int, required=True, help="Campaign length in days (1-30)")
    p_run.add_argument("--seed", type=int, default=_env_seed(), help="Random seed (default: $HUSTINGS_SEED)")
    p_run.add_argument("--log", type=Path, help="Append the campaign log to this JSONL file")
    p_run.add_argument("--snapshot", type=Path, help="Write the final election state to this JSON file")
    p_run.add_argument("--quiet", action="store_true", help="Only print the verdict")

    # catalog
    sub.add_parser("catalog", help="List the issues and events")

    # check-invariants
    sub.add_parser("check-invariants", help="Run configuration invariant checks")

    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv(ROOT / ".env")
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "run": cmd_run,
        "catalog": cmd_catalog,
        "check-invariants": cmd_check_invariants,
    }

    handler = commands.get(args.command)
    if handler is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    return handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
