from notify_relay.models.records import ActionRecord, NotificationKind
from notify_relay.services.pages import project_label, render_control_page, render_expired_page


def _action(**overrides):
    fields = dict(
        token="tok-1",
        session_id="S1",
        kind=NotificationKind.idle,
        message="waiting for input",
        project="",
        tool="",
        created_at=1_700_000_000.5,
    )
    fields.update(overrides)
    return ActionRecord(**fields)


def test_control_page_substitutes_every_placeholder():
    page = render_control_page(_action(tool="Bash"), "widgets")
    assert "{{" not in page
    assert 'data-token="tok-1"' in page
    assert 'data-created-at="1700000000500"' in page
    assert "Claude Code is Idle" in page
    assert "idle prompt" in page
    assert "widgets" in page
    assert "⌛" in page


def test_placeholders_inside_values_are_not_expanded():
    page = render_control_page(_action(message="{{TOKEN}}"), "{{MESSAGE}}")
    assert "{{TOKEN}}" in page
    assert "{{MESSAGE}}" in page


def test_unspecified_kind_uses_generic_title():
    page = render_control_page(_action(kind=NotificationKind.unspecified), "")
    assert "<h1>Claude Code</h1>" in page
    assert "notification" in page


def test_project_label_prefers_explicit_project():
    assert project_label(_action(project="explicit"), "/home/dev/other") == "explicit"
    assert project_label(_action(), "/home/dev/other/") == "other"
    assert project_label(_action(), None) == ""


def test_expired_page():
    assert "Link Expired" in render_expired_page()
