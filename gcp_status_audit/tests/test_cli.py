"""Tests for the command line entry point."""

from __future__ import annotations

import json

import pytest

from gcp_status_audit import cli
from gcp_status_audit.errors import StatusFetchError
from gcp_status_audit.statuses import ClusterStatus, SqlInstanceStatus

SPEC_DOCUMENT = """\
- operator: GKEClusterStatus
  project: p
  location: l
  cluster: c1
  status: [Provisioning, Running]
- operator: CloudSqlInstanceStatus
  project: p
  instance: db-1
  status: [Runnable]
"""


@pytest.fixture
def spec_file(tmp_path):
    path = tmp_path / "specs.yaml"
    path.write_text(SPEC_DOCUMENT, encoding="utf-8")
    return path


@pytest.fixture
def use_stub(monkeypatch, stub_fetchers):
    """Replace the Google Cloud provider with canned answers."""

    def install(answers):
        fetchers = stub_fetchers(answers)
        monkeypatch.setattr(cli, "GoogleCloudFetchers", lambda timeout=None: fetchers)
        return fetchers

    return install


def test_all_green_exits_zero(spec_file, use_stub, capsys) -> None:
    """A fully passing run prints the report and exits 0."""

    use_stub(
        {
            ("p", "l", "c1"): ClusterStatus.Running,
            ("p", "db-1"): SqlInstanceStatus.Runnable,
        }
    )

    exit_code = cli.main([str(spec_file), "--max-workers", "1"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.startswith("summary:\n  total: 2\n  success: 2\n  failure: 0\n  error: 0\n")
    assert "description: c1 is Running" in out
    assert "description: db-1 is Runnable" in out


def test_error_record_exits_one(spec_file, use_stub, capsys) -> None:
    """A fetch failure is reported and makes the run fail."""

    use_stub(
        {
            ("p", "l", "c1"): ClusterStatus.Running,
            ("p", "db-1"): StatusFetchError("Connection refused"),
        }
    )

    exit_code = cli.main([str(spec_file)])

    out = capsys.readouterr().out
    assert exit_code == 1
    assert "error: 1" in out
    assert "description: Connection refused" in out


def test_json_export(spec_file, use_stub, tmp_path, capsys) -> None:
    """--json writes the same report mapping to disk."""

    use_stub(
        {
            ("p", "l", "c1"): ClusterStatus.Degraded,
            ("p", "db-1"): SqlInstanceStatus.Runnable,
        }
    )
    json_path = tmp_path / "report.json"

    exit_code = cli.main([str(spec_file), "--json", str(json_path)])

    captured = capsys.readouterr()
    data = json.loads(json_path.read_text(encoding="utf-8"))
    assert exit_code == 1
    assert data["summary"] == {"total": 2, "success": 1, "failure": 1, "error": 0}
    assert data["detail"][0]["spec_result"] == {"code": "failure", "description": "c1 is Degraded"}
    assert "JSON report written to" in captured.err


def test_invalid_spec_file(tmp_path, use_stub, capsys) -> None:
    """Parse errors abort before any check runs."""

    fetchers = use_stub({})
    path = tmp_path / "bad.yaml"
    path.write_text("- operator: Nope\n", encoding="utf-8")

    exit_code = cli.main([str(path)])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "unknown operator 'Nope'" in captured.err
    assert captured.out == ""
    assert fetchers.calls == []


def test_invalid_worker_count(spec_file, use_stub, capsys) -> None:
    """Invalid configuration is reported without running checks."""

    use_stub({})

    exit_code = cli.main([str(spec_file), "--max-workers", "0"])

    assert exit_code == 1
    assert "invalid configuration" in capsys.readouterr().err
