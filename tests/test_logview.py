from bonobo.log import Logger, LogType, OutputTarget
from bonobo.logview import BUFFER_ROWS, BUFFER_WIDTH, LogView, pass_filter


def test_feed_and_entries():
    view = LogView()
    view.feed(LogType.INFO, "first")
    view.feed(LogType.ERROR, "second")
    texts = [e.text for e in view.entries()]
    assert texts == ["first", "second"]
    assert view.entries()[1].log_type is LogType.ERROR


def test_empty_message_is_skipped():
    view = LogView()
    view.feed(LogType.INFO, "")
    assert view.entries() == []


def test_truncation_keeps_length():
    view = LogView()
    message = "y" * 1000
    view.feed(LogType.INFO, message)
    entry = view.entries()[0]
    assert len(entry.text) == BUFFER_WIDTH - 1
    assert entry.length == len(message)


def test_ring_buffer_wraps_in_order():
    view = LogView()
    for i in range(BUFFER_ROWS + 6):
        view.feed(LogType.INFO, f"m{i}")
    texts = [e.text for e in view.entries()]
    assert len(texts) == BUFFER_ROWS
    assert texts[0] == "m6"
    assert texts[-1] == f"m{BUFFER_ROWS + 5}"


def test_clear():
    view = LogView()
    view.feed(LogType.INFO, "a")
    view.clear()
    assert view.entries() == []
    view.feed(LogType.INFO, "b")
    assert [e.text for e in view.entries()] == ["b"]


def test_entries_with_filter():
    view = LogView()
    view.feed(LogType.INFO, "Loading mesh")
    view.feed(LogType.INFO, "Loading texture")
    view.feed(LogType.INFO, "Done")
    assert [e.text for e in view.entries("loading,-texture")] == ["Loading mesh"]


def test_pass_filter_rules():
    assert pass_filter("", "anything")
    assert pass_filter("  , ", "anything")
    assert pass_filter("abc", "xxABCxx")
    assert not pass_filter("abc", "xyz")
    assert not pass_filter("-bad", "a bad line")
    assert pass_filter("-bad", "a good line")
    assert pass_filter("foo,bar", "has bar")


def test_colors():
    view = LogView()
    assert view.color_for(LogType.WARNING) == (0.7, 0.4, 0.0, 1.0)
    assert view.color_for(LogType.ERROR) == view.color_for(LogType.PARAM)
    assert view.color_for(LogType.INFO) == (1.0, 1.0, 1.0, 1.0)


def test_scroll_request():
    view = LogView()
    assert view.consume_scroll_request() is True
    assert view.consume_scroll_request() is False
    view.feed(LogType.INFO, "x")
    assert view.consume_scroll_request() is True


def test_attached_to_logger():
    logger = Logger()
    view = LogView(logger)
    logger.set_output_targets(OutputTarget.CUSTOM)
    logger.report(0, "f", "g", 1, LogType.INFO, "hi %s", "there")
    entries = view.entries()
    assert [e.text for e in entries] == ["hi there\n"]
    assert entries[0].log_type is LogType.INFO