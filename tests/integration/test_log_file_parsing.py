"""
Integration tests for parsing complete TeX log files and the diagnostics CLI.
"""

import functools
import importlib.util
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from texdiag.contexts.diagnostics import (
    LogFileNotFoundError,
    LogInputError,
    LogLevel,
    parse_log_file,
)

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"
THESIS_LOG = FIXTURES_PATH / "thesis.log"
PROJECT_ROOT = Path(__file__).parent.parent.parent
CLI_PATH = PROJECT_ROOT / "scripts" / "diagnose_log.py"


def _load_cli():
    spec = importlib.util.spec_from_file_location("diagnose_log", CLI_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(autouse=True)
def restore_logger():
    """The CLI reconfigures loguru; put the default stderr sink back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.integration
def test_parse_thesis_log():
    """Every diagnostic in a full pdflatex log, with file and line attribution."""
    items = parse_log_file(THESIS_LOG, min_level=LogLevel.DEBUG)

    assert [(item.level, item.file, item.line) for item in items] == [
        (LogLevel.WARNING, "./chapters/intro.tex", 12),
        (LogLevel.TYPESETTING, "./chapters/intro.tex", 20),
        (LogLevel.WARNING, "./chapters/intro.tex", 37),
        (LogLevel.ERROR, "./chapters/methods.tex", 8),
        (LogLevel.WARNING, "./thesis.tex", 31),
        (LogLevel.ERROR, "./thesis.tex", 40),
        (LogLevel.TYPESETTING, "./thesis.tex", None),
    ]


@pytest.mark.integration
def test_thesis_log_messages():
    items = parse_log_file(THESIS_LOG, min_level=LogLevel.DEBUG)

    assert items[2].message == (
        "Citation `knuth1984texbooks' on page 1 undefined on input line 37."
    )
    assert items[3].message == "Undefined control sequence."
    assert "l.8 \\foo" in items[3].content
    assert "was never \\def'ed." in items[3].content
    assert items[4].message.startswith("Package hyperref Warning: Token not allowed")
    assert items[4].message.endswith("removing `\\textbf' on input line 31.")
    assert items[5].message == "LaTeX Error: Environment foo undefined."
    assert "l.40 \\begin{foo}" in items[5].raw
    assert "Your command was ignored." in items[5].content


@pytest.mark.integration
def test_min_level_on_file():
    errors = parse_log_file(THESIS_LOG, min_level="error")
    warnings = parse_log_file(THESIS_LOG, min_level=LogLevel.WARNING)

    assert [item.line for item in errors] == [8, 40]
    assert len(warnings) == 5


@pytest.mark.integration
def test_default_min_level_keeps_typesetting():
    items = parse_log_file(THESIS_LOG)

    assert len(items) == 7


@pytest.mark.integration
def test_latin1_log(tmp_path):
    log_file = tmp_path / "latin1.log"
    log_file.write_bytes(
        b"(./main.tex\n"
        b"LaTeX Warning: Reference `caf\xe9' on page 1 undefined on input line 5.\n"
        b")\n"
    )

    items = parse_log_file(log_file)

    assert len(items) == 1
    assert "café" in items[0].message
    assert items[0].file == "./main.tex"


@pytest.mark.integration
def test_crlf_log(tmp_path):
    log_file = tmp_path / "windows.log"
    log_file.write_bytes(b"(./main.tex\r\n./main.tex:7: Missing $ inserted.\r\nl.7 x\r\n\r\n")

    items = parse_log_file(log_file)

    assert [(item.file, item.line, item.message) for item in items] == [
        ("./main.tex", 7, "Missing $ inserted.")
    ]


@pytest.mark.integration
def test_missing_log_file(tmp_path):
    with pytest.raises(LogFileNotFoundError) as excinfo:
        parse_log_file(tmp_path / "missing.log")

    assert excinfo.value.log_path == tmp_path / "missing.log"
    assert "missing.log" in str(excinfo.value)


@pytest.mark.integration
def test_undecodable_log_file(tmp_path):
    log_file = tmp_path / "binary.log"
    log_file.write_bytes(b"(./main.tex\n\xff\xfe\n)\n")

    with pytest.raises(LogInputError) as excinfo:
        parse_log_file(log_file, encoding="utf-8")

    assert excinfo.value.log_path == log_file
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


@pytest.mark.integration
def test_unknown_min_level_on_file():
    with pytest.raises(ValueError, match="verbose"):
        parse_log_file(THESIS_LOG, min_level="verbose")


@pytest.mark.integration
def test_import_with_bad_level_in_environment():
    """A bad TEXDIAG_MIN_LEVEL only fails when a file is parsed."""
    env = {**os.environ, "TEXDIAG_MIN_LEVEL": "verbose"}
    result = subprocess.run(
        [sys.executable, "-c", "import texdiag.contexts.diagnostics"],
        cwd=PROJECT_ROOT,
        env=env,
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0, result.stderr


class TestDiagnoseLogCLI:
    """Tests for scripts/diagnose_log.py."""

    runner = CliRunner()

    @pytest.mark.integration
    def test_show_json(self, tmp_path):
        cli = _load_cli()
        result = self.runner.invoke(
            cli.app,
            ["show", str(THESIS_LOG), "--json", "--level", "warning", "--log-dir", str(tmp_path)],
        )

        assert result.exit_code == 1
        records = json.loads(result.stdout)
        assert [record["level"] for record in records] == [
            "warning",
            "warning",
            "error",
            "warning",
            "error",
        ]
        assert records[3]["file"] == "./thesis.tex"
        assert (tmp_path / "diag.log").exists()

    @pytest.mark.integration
    def test_show_lines(self, tmp_path):
        cli = _load_cli()
        result = self.runner.invoke(
            cli.app,
            ["show", str(THESIS_LOG), "-l", "error", "-c", "--log-dir", str(tmp_path)],
        )

        assert result.exit_code == 1
        assert "[error] ./chapters/methods.tex:8: Undefined control sequence." in result.stdout
        assert "    l.8 \\foo" in result.stdout

    @pytest.mark.integration
    def test_show_clean_log_exits_zero(self, tmp_path):
        cli = _load_cli()
        log_file = tmp_path / "clean.log"
        log_file.write_text("(./main.tex\nLaTeX Warning: Label(s) may have changed.\n)\n")

        result = self.runner.invoke(
            cli.app, ["show", str(log_file), "--log-dir", str(tmp_path / "session")]
        )

        assert result.exit_code == 0
        assert "[warning] ./main.tex: Label(s) may have changed." in result.stdout

    @pytest.mark.integration
    def test_summary(self, tmp_path):
        cli = _load_cli()
        result = self.runner.invoke(
            cli.app, ["summary", str(THESIS_LOG), "--log-dir", str(tmp_path)]
        )

        assert result.exit_code == 1
        assert "TeX diagnostics: thesis.log" in result.stdout
        assert "Total: 7" in result.stdout

    @pytest.mark.integration
    def test_unknown_level(self, tmp_path):
        cli = _load_cli()
        result = self.runner.invoke(
            cli.app, ["show", str(THESIS_LOG), "--level", "fatal", "--log-dir", str(tmp_path)]
        )

        assert result.exit_code == 2

    @pytest.mark.integration
    def test_missing_file(self, tmp_path):
        cli = _load_cli()
        result = self.runner.invoke(
            cli.app, ["show", str(tmp_path / "nope.log"), "--log-dir", str(tmp_path)]
        )

        assert result.exit_code == 2

    @pytest.mark.integration
    def test_bad_level_in_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TEXDIAG_MIN_LEVEL", "verbose")
        cli = _load_cli()

        result = self.runner.invoke(cli.app, ["show", str(THESIS_LOG), "--log-dir", str(tmp_path)])

        assert result.exit_code == 2

    @pytest.mark.integration
    def test_undecodable_file(self, tmp_path, monkeypatch):
        cli = _load_cli()
        monkeypatch.setattr(
            cli, "parse_log_file", functools.partial(parse_log_file, encoding="utf-8")
        )
        log_file = tmp_path / "binary.log"
        log_file.write_bytes(b"(./main.tex\n\xff\xfe\n)\n")

        result = self.runner.invoke(
            cli.app, ["show", str(log_file), "--log-dir", str(tmp_path / "session")]
        )

        assert result.exit_code == 2
