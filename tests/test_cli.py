"""Tests for Hustings CLI: proves CLI dispatches correctly."""

import json
from pathlib import Path

from hustings.cli import build_parser, main
from hustings.persistence.event_log import CampaignLog, RecordKind


class TestCLIParsing:
    def test_run_command(self) -> None:
        parser = build_parser()
        args = parser.parse_args([
            "run", "--electorates", "4", "--days", "9", "--seed", "3",
        ])
        assert args.command == "run"
        assert args.electorates == 4
        assert args.days == 9
        assert args.seed == 3
        assert args.quiet is False

    def test_run_paths(self) -> None:
        parser = build_parser()
        args = parser.parse_args([
            "run", "--electorates", "1", "--days", "1",
            "--log", "out/log.jsonl", "--snapshot", "out/state.json",
        ])
        assert args.log == Path("out/log.jsonl")
        assert args.snapshot == Path("out/state.json")


class TestCLIExecution:
    def test_quiet_run(self, capsys) -> None:
        exit_code = main(["run", "--electorates", "2", "--days", "2", "--seed", "7", "--quiet"])
        assert exit_code == 0
        out = capsys.readouterr().out
        assert "RESULTS" in out
        assert "CAMPAIGNING HAS STARTED" not in out

    def test_full_run_prints_every_phase(self, capsys) -> None:
        assert main(["run", "--electorates", "3", "--days", "2", "--seed", "1"]) == 0
        out = capsys.readouterr().out
        for heading in ("ISSUES", "CAMPAIGNING HAS STARTED", "VOTING HAS STARTED", "RESULTS"):
            assert heading in out

    def test_bad_electorates_fails(self, capsys) -> None:
        exit_code = main(["run", "--electorates", "11", "--days", "2", "--seed", "7"])
        assert exit_code == 1
        assert "Failed:" in capsys.readouterr().err

    def test_log_and_snapshot(self, tmp_path: Path) -> None:
        log_path = tmp_path / "campaign.jsonl"
        snapshot_path = tmp_path / "state.json"
        exit_code = main([
            "run", "--electorates", "2", "--days", "3", "--seed", "11", "--quiet",
            "--log", str(log_path), "--snapshot", str(snapshot_path),
        ])
        assert exit_code == 0

        log = CampaignLog(storage_path=log_path)
        assert log.last_record.record_kind == RecordKind.VERDICT_DECLARED
        snapshot = json.loads(snapshot_path.read_text(encoding="utf-8"))
        assert snapshot["seed"] == 11
        assert snapshot["verdict"] == log.last_record.payload

    def test_catalog_runs(self, capsys) -> None:
        assert main(["catalog"]) == 0
        assert "Toilet Paper Shortage" in capsys.readouterr().out

    def test_check_invariants_runs(self) -> None:
        exit_code = main(["check-invariants"])
        assert exit_code == 0

    def test_missing_config_fails(self, tmp_path: Path) -> None:
        exit_code = main(["--config", str(tmp_path), "catalog"])
        assert exit_code == 1

    def test_no_command_shows_help(self, capsys) -> None:
        exit_code = main([])
        assert exit_code == 0
