from __future__ import annotations

import json

import pytest
import typer
from typer.testing import CliRunner

from whichport import cli
from whichport.errors import AllMethodsFailed
from whichport.models import CollectionResult, Listener

runner = CliRunner()

LISTENERS = [
    Listener(80, 10, "nginx", "root", "[::]:80"),
    Listener(80, 10, "nginx", "root", "*:80"),
    Listener(5432, 123, "postgres", "rexfelix", "127.0.0.1:5432"),
]


@pytest.fixture
def collected(monkeypatch: pytest.MonkeyPatch) -> list:
    calls: list = []

    def fake_collect(strategies, settings):
        calls.append([s.name for s in strategies])
        return CollectionResult(listeners=list(LISTENERS), source="lsof", errors=["failed to run ss: gone"])

    monkeypatch.setattr(cli, "collect_listeners", fake_collect)
    monkeypatch.setattr(cli, "unix_timestamp", lambda: 1700000000)
    return calls


def test_parse_port() -> None:
    assert cli.parse_port("8080") == 8080
    with pytest.raises(typer.BadParameter, match="reserved"):
        cli.parse_port("0")
    with pytest.raises(typer.BadParameter, match="invalid port: abc"):
        cli.parse_port("abc")
    with pytest.raises(typer.BadParameter, match="invalid port: 99999"):
        cli.parse_port("99999")


def test_ports_text(collected: list) -> None:
    result = runner.invoke(cli.app, ["80", "8080"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "port 80: nginx (pid 10, user root) on [*:80, [::]:80] | Web server or reverse proxy (high)",
        "port 8080: not listening",
    ]


def test_verbose_meta(collected: list) -> None:
    result = runner.invoke(cli.app, ["5432", "--verbose"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "meta source: lsof",
        "meta timestamp: 1700000000",
        "meta errors: 1",
        "meta error: failed to run ss: gone",
        "port 5432: postgres (pid 123, user rexfelix) on [127.0.0.1:5432] | PostgreSQL database (high)",
    ]


def test_all_json(collected: list) -> None:
    result = runner.invoke(cli.app, ["--all", "--json", "22"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["mode"] == "all"
    assert data["source"] == "lsof"
    assert data["timestamp"] == 1700000000
    assert data["errors"] == ["failed to run ss: gone"]
    assert [r["port"] for r in data["results"]] == [80, 5432]
    assert data["results"][0]["endpoint"] == "*:80"


def test_ports_json(collected: list) -> None:
    result = runner.invoke(cli.app, ["443", "80", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["mode"] == "ports"
    assert [(r["port"], r["listening"]) for r in data["results"]] == [(443, False), (80, True)]
    assert data["results"][1]["listeners"][0]["pid"] == 10


def test_table(collected: list) -> None:
    result = runner.invoke(cli.app, ["--all", "--table"])

    assert result.exit_code == 0
    assert "Listening Ports" in result.stdout


def test_source_option(collected: list) -> None:
    result = runner.invoke(cli.app, ["--all", "--source", "psutil"])

    assert result.exit_code == 0
    assert collected == [["psutil"]]


def test_bad_source(collected: list) -> None:
    result = runner.invoke(cli.app, ["--all", "--source", "netstat"])

    assert result.exit_code != 0
    assert collected == []


def test_no_ports_is_usage_error(collected: list) -> None:
    result = runner.invoke(cli.app, [])

    assert result.exit_code == 1
    assert "no ports specified and --all not provided" in result.output
    assert collected == []


@pytest.mark.parametrize("arg", ["0", "abc", "70000"])
def test_invalid_port_rejected(collected: list, arg: str) -> None:
    result = runner.invoke(cli.app, [arg])

    assert result.exit_code != 0
    assert collected == []


def test_all_methods_failed(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing(strategies, settings):
        raise AllMethodsFailed(["failed to run ss: gone", "command lsof returned error: denied"])

    monkeypatch.setattr(cli, "collect_listeners", failing)
    result = runner.invoke(cli.app, ["80"])

    assert result.exit_code == 1
    assert "error: all collection methods failed" in result.output
    assert "port 80" not in result.stdout


def test_ipv6_endpoint_printed_verbatim(monkeypatch: pytest.MonkeyPatch) -> None:
    listener = Listener(631, 7, "cupsd", "root", "[2001:db8:0:a:0:0:0:1]:631")
    monkeypatch.setattr(
        cli,
        "collect_listeners",
        lambda strategies, settings: CollectionResult(listeners=[listener], source="ss"),
    )
    result = runner.invoke(cli.app, ["631"])

    assert result.exit_code == 0
    assert result.stdout == (
        "port 631: cupsd (pid 7, user root) on [[2001:db8:0:a:0:0:0:1]:631]"
        " | Unknown application service (medium)\n"
    )


@pytest.mark.parametrize("arg", ["8_0", " 80", "٨٠", "-"])
def test_parse_port_rejects_non_ascii_digits(arg: str) -> None:
    with pytest.raises(typer.BadParameter, match="invalid port"):
        cli.parse_port(arg)


def test_parse_port_accepts_plus_sign() -> None:
    assert cli.parse_port("+80") == 80
