"""
Tests for the Report Assembler and the Report Store.

Covers:
- happy path: statistics → context → narrative → persisted Report
- window is [now - 7 days, now]; logs outside are ignored
- no logs in window → InsufficientDataError, no Report row, no AI call
- AI failure → ServiceUnavailableError, no Report row
- repeated generation appends (no per-week dedup)
- round trip by id; list order newest first; unknown id → ReportNotFoundError
"""
import pytest
from datetime import date, datetime, timedelta

from app.core.errors import InsufficientDataError, ReportNotFoundError, ServiceUnavailableError
from app.models.report import Report
from app.services.log_store import insert_log
from app.services.report_assembler import generate_weekly_report, report_window
from app.services.report_store import get_report, insert_report, list_reports
from tests.conftest import FakeCompletionService, TransactionRecordingCompletion

NOW = datetime(2026, 10, 19, 20, 0)


def _seed_scenario(db) -> None:
    insert_log(db, datetime(2026, 10, 19, 8, 0), "anxious about deadline", "no")
    insert_log(db, datetime(2026, 10, 19, 8, 30), "anxious", "yes")
    insert_log(db, datetime(2026, 10, 19, 14, 0), "bored", "no")


def _report_count(db) -> int:
    return db.query(Report).count()


class TestReportWindow:
    def test_seven_days_back(self):
        start, end = report_window(NOW)
        assert end == NOW
        assert start == NOW - timedelta(days=7)

    def test_custom_length(self):
        start, _ = report_window(NOW, days=30)
        assert start == NOW - timedelta(days=30)


class TestGenerateWeeklyReport:
    def test_persists_narrative(self, db):
        _seed_scenario(db)
        fake = FakeCompletionService(reply="本周你抵抗了大部分冲动。")

        report = generate_weekly_report(db, fake, now=NOW)

        assert report.id is not None
        assert report.content == "本周你抵抗了大部分冲动。"
        assert report.week_start == date(2026, 10, 12)
        assert report.week_end == date(2026, 10, 19)
        assert _report_count(db) == 1

    def test_narrative_prompt_contains_statistics(self, db):
        _seed_scenario(db)
        fake = FakeCompletionService(reply="report")

        generate_weekly_report(db, fake, now=NOW)

        user_turn = fake.calls[0]["conversation"][0]["content"]
        assert "- 总冲动次数: 3" in user_turn
        assert "- 抵抗成功率: 67%" in user_turn
        assert "- 高发时段: 08:00" in user_turn
        assert "- 主要情绪: anxious" in user_turn

    def test_logs_outside_window_ignored(self, db):
        _seed_scenario(db)
        insert_log(db, NOW - timedelta(days=7, minutes=1), "too old", "yes")
        insert_log(db, NOW + timedelta(minutes=1), "future", "yes")
        fake = FakeCompletionService(reply="report")

        generate_weekly_report(db, fake, now=NOW)

        user_turn = fake.calls[0]["conversation"][0]["content"]
        assert "- 总冲动次数: 3" in user_turn
        assert "- 行动次数: 1" in user_turn

    def test_window_bounds_inclusive(self, db):
        insert_log(db, NOW - timedelta(days=7), "edge start", "no")
        insert_log(db, NOW, "edge end", "no")
        fake = FakeCompletionService(reply="report")

        generate_weekly_report(db, fake, now=NOW)

        assert "- 总冲动次数: 2" in fake.calls[0]["conversation"][0]["content"]

    def test_no_logs_raises_insufficient_data(self, db):
        fake = FakeCompletionService(reply="should not be used")

        with pytest.raises(InsufficientDataError):
            generate_weekly_report(db, fake, now=NOW)

        assert _report_count(db) == 0
        assert fake.calls == []

    def test_only_old_logs_raises_insufficient_data(self, db):
        insert_log(db, NOW - timedelta(days=30), "last month", "yes")
        with pytest.raises(InsufficientDataError):
            generate_weekly_report(db, FakeCompletionService(), now=NOW)
        assert _report_count(db) == 0

    def test_service_failure_persists_nothing(self, db):
        _seed_scenario(db)

        with pytest.raises(ServiceUnavailableError):
            generate_weekly_report(db, FakeCompletionService(fail=True), now=NOW)

        assert _report_count(db) == 0

    def test_repeated_generation_appends(self, db):
        _seed_scenario(db)
        fake = FakeCompletionService(reply="again")

        first = generate_weekly_report(db, fake, now=NOW)
        second = generate_weekly_report(db, fake, now=NOW)

        assert first.id != second.id
        assert first.week_start == second.week_start
        assert _report_count(db) == 2

    def test_no_transaction_open_during_completion_call(self, db):
        _seed_scenario(db)
        fake = TransactionRecordingCompletion(db, reply="narrative")

        generate_weekly_report(db, fake, now=NOW)

        assert fake.in_transaction == [False]


class TestReportStore:
    def test_round_trip_by_id(self, db):
        created = insert_report(db, date(2026, 10, 12), date(2026, 10, 19), "narrative text")
        db.expire_all()

        fetched = get_report(db, created.id)

        assert fetched.week_start == date(2026, 10, 12)
        assert fetched.week_end == date(2026, 10, 19)
        assert fetched.content == "narrative text"
        assert fetched.created_at is not None

    def test_unknown_id(self, db):
        with pytest.raises(ReportNotFoundError):
            get_report(db, 999_999)

    def test_list_newest_first(self, db):
        a = insert_report(db, date(2026, 10, 1), date(2026, 10, 8), "a")
        b = insert_report(db, date(2026, 10, 8), date(2026, 10, 15), "b")
        ids = [r.id for r in list_reports(db)]
        assert ids.index(b.id) < ids.index(a.id)
