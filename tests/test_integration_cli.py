"""Integration tests for CLI functionality."""

import json
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]


def run_cli(*args, stdin=""):
    return subprocess.run(
        [sys.executable, "-m", "kalkmem_pkg", *args],
        input=stdin,
        capture_output=True,
        text=True,
        encoding="utf-8",
        timeout=30,
        cwd=REPO_ROOT,
    )


def test_cli_version():
    """Test --version flag."""
    result = run_cli("--version")
    assert result.returncode == 0
    assert result.stdout.strip() != ""


def test_cli_help():
    """Test --help flag."""
    result = run_cli("--help")
    assert result.returncode == 0
    assert "usage" in result.stdout.lower()


def test_cli_health_check():
    """Test --health-check command."""
    result = run_cli("--health-check")
    assert result.returncode in [0, 1]
    assert "health check" in result.stdout.lower()


def test_cli_session_scenario():
    """Test a piped session ending with exit."""
    result = run_cli(stdin="12,5\n+ 7.5\nM+\nAC\nexit\n")
    assert result.returncode == 0
    assert "Current: 20    Memory: 20" in result.stdout
    assert result.stdout.rstrip().endswith("Done.")


def test_cli_end_of_input():
    """Test that end of input terminates normally."""
    result = run_cli(stdin="5\n/ 0\n")
    assert result.returncode == 0
    assert "Error: Division by zero." in result.stdout
    assert "Done." in result.stdout


def test_cli_precision_flag():
    """Test -p flag limits significant digits."""
    result = run_cli("-p", "3", stdin="3,14159\n")
    assert result.returncode == 0
    assert "Current: 3.14    Memory: 0" in result.stdout


def test_cli_json_format():
    """Test JSON output is one object per line."""
    result = run_cli("--format", "json", stdin="2\nsq\nfoo\n")
    assert result.returncode == 0
    records = [json.loads(line) for line in result.stdout.splitlines() if line.strip()]
    assert records[-2] == {"ok": True, "current": 4.0, "memory": 0.0}
    assert records[-1]["code"] == "UNKNOWN_COMMAND"


def test_cli_unknown_locale_is_not_fatal():
    """Test that an unavailable locale falls back with a warning."""
    result = run_cli("--locale", "xx_NOPE.UTF-8", stdin="1,5\n")
    assert result.returncode == 0
    assert "Current: 1.5    Memory: 0" in result.stdout
    assert "unavailable" in result.stderr


@pytest.mark.slow
def test_root_launcher():
    """Test the kalkmem.py wrapper delegates to the package."""
    result = subprocess.run(
        [sys.executable, "kalkmem.py", "--version"],
        capture_output=True,
        text=True,
        timeout=30,
        cwd=REPO_ROOT,
    )
    assert result.returncode == 0


@pytest.mark.parametrize("value", ["-1", "0", "abc"])
def test_cli_invalid_precision_env_falls_back(monkeypatch, value):
    """Test a bad KALKMEM_OUTPUT_PRECISION uses the default precision."""
    monkeypatch.setenv("KALKMEM_OUTPUT_PRECISION", value)
    result = run_cli(stdin="5\n1/x\n")
    assert result.returncode == 0
    assert "Current: 5    Memory: 0" in result.stdout
    assert "Current: 0.2    Memory: 0" in result.stdout


def test_cli_precision_env(monkeypatch):
    """Test KALKMEM_OUTPUT_PRECISION overrides the default precision."""
    monkeypatch.setenv("KALKMEM_OUTPUT_PRECISION", "4")
    result = run_cli(stdin="3,14159\n")
    assert result.returncode == 0
    assert "Current: 3.142    Memory: 0" in result.stdout


def test_cli_help_command_shows_version():
    """Test the help command prints the versioned help text."""
    result = run_cli(stdin="help\n")
    assert result.returncode == 0
    assert "Memory calculator version" in result.stdout
    assert "AC" in result.stdout
