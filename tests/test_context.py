"""
Tests for the Context Assembler.

Covers:
- chat context: 7-day window, newest first, capped at 10 lines, line format
- report context: labelled block with HH:00 peak hour and joined top words
"""
from datetime import datetime, timedelta
from types import SimpleNamespace as NS

from app.services.context import build_chat_context, build_report_context, render_chat_line
from app.services.log_store import insert_log
from app.services.statistics import summarize

NOW = datetime(2026, 10, 19, 21, 0)


class TestRenderChatLine:
    def test_acted_yes(self):
        log = NS(datetime=datetime(2026, 10, 18, 9, 5), feeling="wanted cake", acted="yes")
        assert render_chat_line(log) == "2026-10-18 09:05: wanted cake (行动: 是)"

    def test_acted_no(self):
        log = NS(datetime=datetime(2026, 10, 18, 23, 59), feeling="doomscrolling", acted="no")
        assert render_chat_line(log) == "2026-10-18 23:59: doomscrolling (行动: 否)"


class TestChatContext:
    def test_keeps_ten_most_recent_newest_first(self, db):
        for i in range(12):
            insert_log(db, NOW - timedelta(hours=i + 1), f"urge-{i}", "no")

        lines = build_chat_context(db, now=NOW).splitlines()

        assert len(lines) == 10
        assert [line.split(": ", 1)[1].split(" (")[0] for line in lines] == [
            f"urge-{i}" for i in range(10)
        ]

    def test_excludes_logs_older_than_seven_days(self, db):
        insert_log(db, NOW - timedelta(days=8), "ancient", "yes")
        insert_log(db, NOW - timedelta(days=2), "recent", "no")

        context = build_chat_context(db, now=NOW)

        assert "recent" in context
        assert "ancient" not in context

    def test_excludes_future_logs(self, db):
        insert_log(db, NOW + timedelta(hours=2), "later tonight", "no")
        assert build_chat_context(db, now=NOW) == ""

    def test_empty_when_no_logs(self, db):
        assert build_chat_context(db, now=NOW) == ""

    def test_custom_limit(self, db):
        for i in range(5):
            insert_log(db, NOW - timedelta(minutes=i + 1), f"u{i}", "yes")
        assert len(build_chat_context(db, now=NOW, limit=3).splitlines()) == 3


class TestReportContext:
    def _summary(self):
        logs = [
            NS(datetime=datetime(2026, 10, 14, 8, 0), feeling="anxious about deadline", acted="no"),
            NS(datetime=datetime(2026, 10, 14, 8, 30), feeling="anxious", acted="yes"),
            NS(datetime=datetime(2026, 10, 15, 14, 0), feeling="bored", acted="no"),
        ]
        return summarize(logs, NOW - timedelta(days=7), NOW)

    def test_contains_all_statistics(self):
        block = build_report_context(self._summary())
        assert "2026-10-12 - 2026-10-19" in block
        assert "- 总冲动次数: 3" in block
        assert "- 行动次数: 1" in block
        assert "- 抵抗次数: 2" in block
        assert "- 抵抗成功率: 67%" in block
        assert "- 高发时段: 08:00" in block
        assert "- 主要情绪: anxious, about, deadline" in block

    def test_without_window_bounds(self):
        s = self._summary()
        s.window_start = s.window_end = None
        block = build_report_context(s)
        assert block.startswith("冲动日志数据:")
