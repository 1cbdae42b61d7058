"""SystemProbe のテスト"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pytest

from envmod_report.probes import SystemProbe

requires_sh = pytest.mark.skipif(shutil.which("sh") is None, reason="sh が見つからない")


class TestRun:
    @requires_sh
    def test_non_zero_exit_keeps_stdout(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="envmod_report.probes"):
            output = SystemProbe().run(["sh", "-c", "echo abc; echo oops >&2; exit 3"])
        assert output == "abc\n"
        assert "終了ステータス 3" in caplog.text
        assert "oops" in caplog.text

    @requires_sh
    def test_success_is_not_logged(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="envmod_report.probes"):
            output = SystemProbe().run(["sh", "-c", "echo ok"])
        assert output == "ok\n"
        assert caplog.records == []

    def test_missing_command_returns_empty(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="envmod_report.probes"):
            output = SystemProbe().run(["/nonexistent/tool"])
        assert output == ""
        assert "/nonexistent/tool" in caplog.text

    @requires_sh
    def test_timeout_returns_partial_output(self):
        output = SystemProbe(timeout=0.5).run(["sh", "-c", "echo early; exec sleep 5"])
        assert output in ("", "early\n")


class TestFileChecks:
    def test_exists_and_readable(self, tmp_path: Path):
        target = tmp_path / "admin.list"
        target.write_text("", encoding="utf-8")
        probe = SystemProbe()
        assert probe.exists(target)
        assert probe.readable(target)
        assert not probe.exists(tmp_path / "missing.list")
        assert not probe.exists(tmp_path)
