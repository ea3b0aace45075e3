"""Tests for the session-tracking message decorator."""

from __future__ import annotations

import threading

from debuglog.config import SinkConfig
from debuglog.decorators import DEFAULT_SEPARATOR, DecoratorContext, SessionDecorator
from debuglog.levels import Level
from debuglog.sinks import DebugLogSink


class TestSessionDecorator:
    def test_first_event_gets_separator(self, make_event):
        deco = SessionDecorator()
        first = deco(make_event(timestamp=100.0))
        second = deco(make_event(timestamp=101.25))
        assert first == f"{DEFAULT_SEPARATOR}\nlogin ok +0.000s"
        assert second == "login ok +1.250s"

    def test_reset_starts_new_session(self, make_event):
        deco = SessionDecorator(separator="==")
        deco(make_event(timestamp=1.0))
        deco.reset()
        assert deco(make_event(timestamp=5.0)) == "==\nlogin ok +0.000s"

    def test_no_separator(self, make_event):
        deco = SessionDecorator(separator=None)
        assert deco(make_event()) == "login ok +0.000s"

    def test_render_receives_context(self, make_event):
        seen: list[DecoratorContext] = []

        def render(event, ctx):
            seen.append(ctx)
            return event.message.upper()

        deco = SessionDecorator(render=render, separator="")
        e1 = make_event(timestamp=10.0, message="a")
        e2 = make_event(timestamp=12.0, message="b")
        assert deco(e1) == "A"
        assert deco(e2) == "B"
        assert seen[0] == DecoratorContext(previous=None, started_at=10.0)
        assert seen[1].previous is e1
        assert seen[1].started_at == 10.0

    def test_separator_once_across_threads(self, make_event):
        deco = SessionDecorator(separator="SEP")
        results: list[str] = []
        lock = threading.Lock()

        def worker():
            for _ in range(50):
                text = deco(make_event())
                with lock:
                    results.append(text)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert sum(r.startswith("SEP\n") for r in results) == 1

    def test_plugs_into_sink(self, channel, make_event, logfile):
        deco = SessionDecorator(separator="--")
        sink = DebugLogSink(
            SinkConfig(
                filename=str(logfile),
                message_decorator=deco,
                timezone="UTC",
                forward_to_system_log=False,
            ),
            channel=channel,
        )
        sink.add(make_event(level=Level.INFO))
        assert logfile.read_text() == (
            "2023-11-14 22:13:20.123456 auth::[INFO] --\nlogin ok +0.000s\n"
        )

    def test_separator_survives_filtered_first_event(self, channel, make_event, logfile):
        deco = SessionDecorator(separator="--")
        sink = DebugLogSink(
            SinkConfig(
                filename=str(logfile),
                min_level=Level.INFO,
                message_decorator=deco,
                timezone="UTC",
            ),
            channel=channel,
        )
        sink.add(make_event(level=Level.DEBUG, timestamp=1700000000.0))
        sink.add(make_event(level=Level.INFO))
        expected = "2023-11-14 22:13:20.123456 auth::[INFO] --\nlogin ok +0.000s"
        assert logfile.read_text() == expected + "\n"
        assert channel.records == [(expected, Level.INFO)]
