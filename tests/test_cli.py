"""Tests for the command line interface."""

from __future__ import annotations

import io
import json

import pytest

from rotation_schedule.cli import EXIT_INFEASIBLE, EXIT_INVALID, EXIT_OK, main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("ROTATION_RESET_PERIOD", raising=False)
    monkeypatch.delenv("ROTATION_MAX_CHANGES_PER_DAY", raising=False)


class TestSchedule:

    def test_text_listing(self, ages_txt, capsys):
        assert main(["schedule", str(ages_txt)]) == EXIT_OK
        out = capsys.readouterr().out
        blocks = out.strip().split("\n\n")
        assert blocks[0] == "0\n    email/personal.gpg"
        assert "215\n    web/bank.gpg" in blocks

    def test_json_output(self, credentials_json, capsys):
        code = main(
            ["schedule", str(credentials_json), "--format", "json",
             "--reset-period", "30", "--max-per-day", "1"]
        )
        assert code == EXIT_OK
        doc = json.loads(capsys.readouterr().out)
        assert doc["reset_period"] == 30
        assert doc["max_changes_per_day"] == 1
        ids = [cid for d in doc["days"] for cid in d["ids"]]
        assert sorted(ids) == sorted(
            ["email/personal.gpg", "web/bank.gpg", "web/new account.gpg", "ssh/host.gpg"]
        )

    def test_start_date_and_chart(self, ages_txt, capsys):
        code = main(
            ["schedule", str(ages_txt), "--start-date", "2025-01-06", "--chart"]
        )
        assert code == EXIT_OK
        out = capsys.readouterr().out
        assert out.startswith("0  Mon 2025-01-06\n")
        assert "total=4 peak=1/5" in out

    def test_reads_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("400 a\n400 b\n"))
        assert main(["schedule", "-"]) == EXIT_OK
        assert capsys.readouterr().out == "0\n    a\n    b\n"

    def test_environment_parameters(self, monkeypatch, capsys):
        monkeypatch.setenv("ROTATION_RESET_PERIOD", "10")
        monkeypatch.setattr("sys.stdin", io.StringIO("3 a\n"))
        assert main(["schedule"]) == EXIT_OK
        assert capsys.readouterr().out.splitlines()[0] == "7"

    def test_flag_overrides_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("ROTATION_RESET_PERIOD", "10")
        monkeypatch.setattr("sys.stdin", io.StringIO("3 a\n"))
        assert main(["schedule", "--reset-period", "20"]) == EXIT_OK
        assert capsys.readouterr().out.splitlines()[0] == "17"


class TestDue:

    def test_due_today(self, ages_txt, capsys):
        assert main(["due", str(ages_txt)]) == EXIT_OK
        assert capsys.readouterr().out == "email/personal.gpg\n"

    def test_due_other_day(self, ages_txt, capsys):
        assert main(["due", str(ages_txt), "--day", "215"]) == EXIT_OK
        assert capsys.readouterr().out == "web/bank.gpg\n"

    def test_nothing_due(self, ages_txt, capsys):
        assert main(["due", str(ages_txt), "--day", "1"]) == EXIT_OK
        assert capsys.readouterr().out == ""


class TestErrors:

    def test_infeasible(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("5 a\n5 b\n5 c\n"))
        code = main(["schedule", "--reset-period", "1", "--max-per-day", "2"])
        assert code == EXIT_INFEASIBLE
        assert "Infeasible" in capsys.readouterr().err

    def test_invalid_line(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("abc x\n"))
        assert main(["schedule"]) == EXIT_INVALID
        assert "line 1" in capsys.readouterr().err

    def test_invalid_parameter(self, ages_txt, capsys):
        assert main(["schedule", str(ages_txt), "--max-per-day", "0"]) == EXIT_INVALID
        assert "max_changes_per_day" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["schedule", str(tmp_path / "absent.txt")]) == EXIT_INVALID
        assert "cannot read" in capsys.readouterr().err

    def test_malformed_json(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        assert main(["schedule", str(path)]) == EXIT_INVALID
        assert "cannot read" in capsys.readouterr().err

    @pytest.mark.parametrize("name", ["ages.txt", "ages.json"])
    def test_undecodable_file(self, tmp_path, capsys, name):
        path = tmp_path / name
        path.write_bytes(b"3 caf\xe9.gpg\n")
        assert main(["schedule", str(path)]) == EXIT_INVALID
        err = capsys.readouterr().err
        assert "not valid UTF-8" in err
        assert name in err

    def test_undecodable_stdin(self, monkeypatch, capsys):
        raw = io.TextIOWrapper(io.BytesIO(b"3 caf\xe9.gpg\n"), encoding="utf-8")
        monkeypatch.setattr("sys.stdin", raw)
        assert main(["due"]) == EXIT_INVALID
        assert "not valid UTF-8" in capsys.readouterr().err

    def test_no_command(self, capsys):
        assert main([]) == EXIT_INVALID
        assert "usage" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "rotation-schedule" in capsys.readouterr().out
