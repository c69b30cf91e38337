"""Tests for the logging clipboard, notification and action sinks."""

from contour_engine.adapters.sinks import LoggingActionSink, LoggingClipboard, LoggingNotificationSink


def test_clipboard_keeps_history():
    """The last copied value is exposed."""
    clipboard = LoggingClipboard()
    assert clipboard.last is None
    clipboard.copy("one")
    clipboard.copy("two")
    assert clipboard.history == ["one", "two"]
    assert clipboard.last == "two"


def test_notification_and_action_sinks_record_calls():
    notifications = LoggingNotificationSink()
    notifications.notify("Contour Timer", "5m timer complete!")
    assert notifications.sent == [("Contour Timer", "5m timer complete!")]

    actions = LoggingActionSink()
    actions.navigate("/history")
    actions.switch_mode("music-compose")
    actions.open_external("https://example.com")
    assert actions.actions == [
        ("navigate", "/history"),
        ("mode", "music-compose"),
        ("external", "https://example.com"),
    ]
