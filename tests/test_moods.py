# =============================================================================
# tests/test_moods.py - Mood & work-status upserts
# =============================================================================

from datetime import datetime, date, timezone

from app.models import Mood, WorkStatus
from app.modules.moods import local_today, upsert_mood_for_today, get_mood_for_day
from app.modules.work_status import upsert_work_status, get_work_status
from app.modules.pairing import resolve_user
from app.schemas import MoodCreate, WorkStatusUpdate

from tests.conftest import PROFILES


class TestLocalToday:

    def test_uses_configured_timezone(self, settings):
        # 02:00 UTC on the 15th is still the evening of the 14th in Toronto
        now = datetime(2025, 3, 15, 2, 0, tzinfo=timezone.utc)
        assert local_today(settings, now) == date(2025, 3, 15)
        settings.timezone = "America/Toronto"
        assert local_today(settings, now) == date(2025, 3, 14)


class TestMoodUpsert:

    def test_same_day_twice_keeps_one_row_with_latest_content(self, session, settings):
        user = resolve_user(session, PROFILES["alex"], settings)
        morning = datetime(2025, 6, 1, 8, 0, tzinfo=timezone.utc)
        evening = datetime(2025, 6, 1, 21, 0, tzinfo=timezone.utc)

        first = upsert_mood_for_today(session, user, MoodCreate(emoji="😴", message="tired"), settings, now=morning)
        second = upsert_mood_for_today(session, user, MoodCreate(emoji="🥰"), settings, now=evening)

        assert first.id == second.id
        assert session.query(Mood).filter(Mood.user_id == user.id).count() == 1
        stored = get_mood_for_day(session, user.id, date(2025, 6, 1))
        assert stored.emoji == "🥰"
        assert stored.message is None

    def test_new_day_gets_new_row(self, session, settings):
        user = resolve_user(session, PROFILES["alex"], settings)
        upsert_mood_for_today(session, user, MoodCreate(emoji="🙂"), settings, now=datetime(2025, 6, 1, 12, tzinfo=timezone.utc))
        upsert_mood_for_today(session, user, MoodCreate(emoji="🙃"), settings, now=datetime(2025, 6, 2, 12, tzinfo=timezone.utc))
        assert session.query(Mood).count() == 2

    def test_partners_moods_are_independent(self, session, settings):
        alex = resolve_user(session, PROFILES["alex"], settings)
        sam = resolve_user(session, PROFILES["sam"], settings)
        now = datetime(2025, 6, 1, 12, tzinfo=timezone.utc)
        upsert_mood_for_today(session, alex, MoodCreate(emoji="🙂"), settings, now=now)
        upsert_mood_for_today(session, sam, MoodCreate(emoji="😎"), settings, now=now)
        assert get_mood_for_day(session, alex.id, now.date()).emoji == "🙂"
        assert get_mood_for_day(session, sam.id, now.date()).emoji == "😎"


class TestWorkStatusUpsert:

    def test_second_update_replaces_first(self, session, settings):
        user = resolve_user(session, PROFILES["sam"], settings)
        first = upsert_work_status(session, user, WorkStatusUpdate(status="busy", note="deadline"))
        second = upsert_work_status(session, user, WorkStatusUpdate(status="in-meeting"))

        assert first.id == second.id
        assert session.query(WorkStatus).count() == 1
        stored = get_work_status(session, user.id)
        assert stored.status == "in-meeting"
        assert stored.note is None

    def test_none_before_first_update(self, session, settings):
        user = resolve_user(session, PROFILES["sam"], settings)
        assert get_work_status(session, user.id) is None
