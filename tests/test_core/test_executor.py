from __future__ import annotations

import subprocess
import sys
from unittest.mock import patch

from rod_cli.core.executor import CommandExecutor, CommandOutcome, SubprocessExecutor


def test_subprocess_executor_satisfies_protocol() -> None:
    assert isinstance(SubprocessExecutor(), CommandExecutor)


def test_captures_output() -> None:
    outcome = SubprocessExecutor().run([sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr)"])

    assert outcome.ok
    assert outcome.stdout.strip() == "out"
    assert outcome.stderr.strip() == "err"


def test_missing_binary_is_reported_not_raised() -> None:
    outcome = SubprocessExecutor().run(["definitely-not-a-real-binary-rod"])

    assert outcome.returncode == 127
    assert not outcome.ok


def test_timeout_is_reported() -> None:
    with patch("rod_cli.core.executor.subprocess.run", side_effect=subprocess.TimeoutExpired(["npm"], 60)):
        outcome = SubprocessExecutor().run(["npm", "install", "-g", "pkg"], timeout=60)

    assert outcome.timed_out
    assert not outcome.ok
    assert "timed out after 60 seconds" in outcome.error_text


def test_error_text_prefers_stderr() -> None:
    assert CommandOutcome(1, stdout="out", stderr="err\n").error_text == "err"
    assert CommandOutcome(1, stdout="only stdout\n").error_text == "only stdout"
