import subprocess

import pytest

from notify_relay.services.dispatcher import (
    DispatchResult,
    ITermDispatcher,
    NullDispatcher,
    applescript_quote,
    build_dispatcher,
)


def _fake_run(calls, *, stdout="sent\n", returncode=0, raises=None):
    def run(args, **kwargs):
        calls.append((args, kwargs))
        if raises is not None:
            raise raises
        return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr="boom" if returncode else "")

    return run


def test_iterm_dispatch_success(monkeypatch):
    calls = []
    monkeypatch.setattr(subprocess, "run", _fake_run(calls))

    result = ITermDispatcher(timeout=3).send("w0t1p0:ABC-123", 'echo "hi" \\ bye')
    assert result is DispatchResult.ok

    args, kwargs = calls[0]
    assert args[0] == "osascript"
    assert args[1] == "-e"
    assert 'unique ID of s is "ABC-123"' in args[2]
    assert 'write text "echo \\"hi\\" \\\\ bye"' in args[2]
    assert kwargs["timeout"] == 3


def test_iterm_dispatch_session_not_found(monkeypatch):
    monkeypatch.setattr(subprocess, "run", _fake_run([], stdout="session_not_found\n"))
    assert ITermDispatcher().send("XYZ", "y") is DispatchResult.session_not_found


@pytest.mark.parametrize(
    "kwargs",
    [
        {"returncode": 1, "stdout": ""},
        {"raises": subprocess.TimeoutExpired(cmd="osascript", timeout=10)},
        {"raises": FileNotFoundError("osascript")},
    ],
)
def test_iterm_dispatch_failures(monkeypatch, kwargs):
    monkeypatch.setattr(subprocess, "run", _fake_run([], **kwargs))
    assert ITermDispatcher().send("XYZ", "y") is DispatchResult.failure


def test_applescript_quote():
    assert applescript_quote('a"b\\c') == 'a\\"b\\\\c'


def test_build_dispatcher():
    assert isinstance(build_dispatcher("iterm", 5), ITermDispatcher)
    assert build_dispatcher("none", 5).send("T1", "y") is DispatchResult.session_not_found
    assert isinstance(build_dispatcher("none", 5), NullDispatcher)
    with pytest.raises(ValueError):
        build_dispatcher("tmux", 5)
