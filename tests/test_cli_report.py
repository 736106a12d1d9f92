"""Tests for the slo-report CLI."""

import argparse
import csv

import pytest
import respx
from helpers import history_payload, slo_payload
from httpx import Response

from sloreport.cli import report as report_cli
from sloreport.cli.report import build_parser, main, parse_duration
from sloreport.config import DEFAULT_REPORT_PATH, DatadogSettings, get_settings
from sloreport.core.errors import ExitCode

BASE_URL = "https://api.datadoghq.com"


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv("DD_API_KEY", "api-key")
    monkeypatch.setenv("DD_APP_KEY", "app-key")
    monkeypatch.delenv("DD_SITE", raising=False)
    monkeypatch.setattr(report_cli, "configure_logging", lambda level, **kwargs: None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestParseDuration:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("100ms", 0.1),
            ("1s", 1.0),
            ("1m30s", 90.0),
            ("1.5h", 5400.0),
            ("250us", 0.00025),
            ("2", 2.0),
            ("0", 0.0),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_duration(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["", "fast", "10x", "ms", "1s junk", "-1"])
    def test_invalid(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_duration(value)


class TestBuildParser:
    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.path == DEFAULT_REPORT_PATH
        assert args.tag_query == ""
        assert args.limit == 1000
        assert args.sleep == pytest.approx(0.1)
        assert args.report_path is None
        assert args.log_format == "json"

    def test_flags(self):
        args = build_parser().parse_args(
            ["--path", "out.csv", "--tagQuery", "team:ninja", "--limit", "50", "--sleep", "1s"]
        )

        assert args.path == "out.csv"
        assert args.tag_query == "team:ninja"
        assert args.limit == 50
        assert args.sleep == 1.0

    def test_rejects_non_positive_limit(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--limit", "0"])

    def test_help_mentions_credentials(self, capsys):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--help"])

        out = capsys.readouterr().out
        assert "DD_API_KEY" in out
        assert "DD_APP_KEY" in out
        assert "/tmp/slo_report.csv" in out


class TestMain:
    def test_writes_report(self, tmp_path):
        path = tmp_path / "report.csv"
        with respx.mock:
            respx.get(f"{BASE_URL}/api/v1/slo").mock(
                return_value=Response(
                    200,
                    json={
                        "data": [slo_payload("abc", "Checkout")],
                        "metadata": {"page": {"total_count": 1}},
                    },
                )
            )
            respx.get(f"{BASE_URL}/api/v1/slo/abc/history").mock(
                return_value=Response(200, json=history_payload(99.95, 40.0))
            )

            exit_code = main([str(path), "--sleep", "0"])

        assert exit_code == ExitCode.SUCCESS
        with open(path, encoding="utf-8", newline="") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 1
        assert rows[0]["slo_id"] == "abc"
        assert float(rows[0]["error_budget_consumed"]) == pytest.approx(60.0)

    def test_positional_path_overrides_flag(self, tmp_path, monkeypatch):
        captured = {}

        def fake_command(options):
            captured["options"] = options
            return ExitCode.SUCCESS

        monkeypatch.setattr(report_cli, "report_command", fake_command)

        main([str(tmp_path / "positional.csv"), "--path", str(tmp_path / "flag.csv")])

        assert captured["options"].path == str(tmp_path / "positional.csv")

    def test_log_options_reach_logging_setup(self, tmp_path, monkeypatch):
        calls = []
        monkeypatch.setattr(
            report_cli, "configure_logging", lambda level, **kwargs: calls.append((level, kwargs))
        )
        monkeypatch.setattr(report_cli, "report_command", lambda options: ExitCode.SUCCESS)

        main([str(tmp_path / "r.csv"), "--log-level", "DEBUG", "--log-format", "console"])

        assert calls == [("DEBUG", {"log_format": "console"})]

    def test_list_failure_is_fatal(self, tmp_path):
        path = tmp_path / "report.csv"
        with respx.mock:
            respx.get(f"{BASE_URL}/api/v1/slo").mock(
                return_value=Response(403, json={"errors": ["Forbidden"]})
            )

            exit_code = main(["--path", str(path), "--sleep", "0"])

        assert exit_code == ExitCode.FATAL
        assert len(path.read_text(encoding="utf-8").splitlines()) == 1

    def test_missing_credentials(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DD_API_KEY")
        monkeypatch.setattr(report_cli, "get_settings", lambda: DatadogSettings(_env_file=None))

        exit_code = main(["--path", str(tmp_path / "report.csv")])

        assert exit_code == ExitCode.FATAL
        assert not (tmp_path / "report.csv").exists()

    def test_unwritable_path(self, tmp_path):
        exit_code = main(["--path", str(tmp_path / "missing" / "report.csv")])

        assert exit_code == ExitCode.FATAL
