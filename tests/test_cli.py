# file: tests/test_cli.py
from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from teluri.cli import main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in ("TELURI_STRICT", "TELURI_LOG_LEVEL", "TELURI_JSON_LOGGING", "TELURI_CONFIG"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def test_parse_prints_fields() -> None:
    result = CliRunner().invoke(main, ["parse", "tel:7042;phone-context=example.com;a=b"])
    assert result.exit_code == 0, result.output
    assert "Number: 7042" in result.output
    assert "Phone context: example.com (domain)" in result.output
    assert "a=b" in result.output


def test_parse_json() -> None:
    result = CliRunner().invoke(main, ["parse", "--json", "tel:+1-201-555-0123;ext=1"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["extension"] == "1"
    assert payload["is_global_number"] is True


def test_parse_invalid_value_fails() -> None:
    result = CliRunner().invoke(main, ["parse", "tel:abc"])
    assert result.exit_code != 0
    assert "Invalid tel: URI" in result.output


def test_parse_lenient_accepts_anything() -> None:
    result = CliRunner().invoke(main, ["parse", "--lenient", "tel:abc"])
    assert result.exit_code == 0, result.output
    assert "stored without validation" in result.output


def test_parse_honours_strict_setting_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TELURI_STRICT", "false")
    result = CliRunner().invoke(main, ["parse", "tel:abc"])
    assert result.exit_code == 0, result.output


def test_compare_equal_and_not_equal() -> None:
    runner = CliRunner()
    same = runner.invoke(main, ["compare", "tel:+12015550123;a=1;b=2", "tel:+12015550123;b=2;a=1"])
    assert same.exit_code == 0
    assert same.output.strip() == "equal"

    different = runner.invoke(main, ["compare", "tel:+12015550123", "tel:+12015550124"])
    assert different.exit_code == 1
    assert different.output.strip() == "not equal"


def test_compare_parses_strictly_even_when_lenient_is_configured(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("TELURI_STRICT", "false")
    runner = CliRunner()

    invalid = runner.invoke(main, ["compare", "tel:+1", "garbage"])
    assert invalid.exit_code != 0
    assert "Invalid tel: URI" in invalid.output
    assert "equal" not in invalid.output

    different = runner.invoke(main, ["compare", "tel:+1", "tel:+2"])
    assert different.exit_code == 1
    assert different.output.strip() == "not equal"


def test_build_local_json() -> None:
    result = CliRunner().invoke(
        main,
        ["build-local", "--subscriber", "555-0123", "--country-code", "1", "--area-code", "201", "--json"],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["value"] == "tel:555-0123;phone-context=+1-201"


def test_build_local_without_context_fails() -> None:
    result = CliRunner().invoke(main, ["build-local", "--subscriber", "555"])
    assert result.exit_code != 0
    assert "domain_name or a country_code" in result.output


def test_build_global_with_params() -> None:
    result = CliRunner().invoke(
        main, ["build-global", "12015550123", "--ext", "42", "--param", "tgrp=x", "--json"]
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["value"] == "tel:+12015550123;ext=42;tgrp=x"
    assert payload["params"] == {"tgrp": "x"}


def test_build_global_rejects_malformed_param() -> None:
    result = CliRunner().invoke(main, ["build-global", "1", "--param", "novalue"])
    assert result.exit_code != 0


def test_export_csv(tmp_path: Path) -> None:
    out = tmp_path / "r.csv"
    result = CliRunner().invoke(
        main, ["export", "tel:+12015550123", "--format", "csv", "--output", str(out)]
    )
    assert result.exit_code == 0, result.output
    assert out.exists()
    assert "section,key,value" in out.read_text(encoding="utf-8").splitlines()[0]


def test_export_json_to_stdout() -> None:
    result = CliRunner().invoke(main, ["export", "tel:+12015550123"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["canonical"]["number"] == "+12015550123"
