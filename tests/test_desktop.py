import subprocess

from notify_relay.hooks.desktop import notify_desktop


class RecordingPopen:
    def __init__(self):
        self.calls = []

    def __call__(self, args, **kwargs):
        self.calls.append((args, kwargs))
        return object()


def test_runs_terminal_notifier_without_waiting():
    popen = RecordingPopen()

    assert notify_desktop("Task Complete", "done", which=lambda name: f"/opt/bin/{name}", popen=popen) is True

    args, kwargs = popen.calls[0]
    assert args == [
        "/opt/bin/terminal-notifier",
        "-title",
        "Task Complete",
        "-message",
        "done",
        "-sound",
        "default",
        "-group",
        "claude-notify",
    ]
    assert kwargs["stdout"] is subprocess.DEVNULL


def test_skips_when_terminal_notifier_is_missing():
    popen = RecordingPopen()
    assert notify_desktop("t", "m", which=lambda name: None, popen=popen) is False
    assert popen.calls == []


def test_launch_failure_is_reported_not_raised():
    def broken(*args, **kwargs):
        raise PermissionError("not executable")

    assert notify_desktop("t", "m", which=lambda name: "/bin/tn", popen=broken) is False
