"""Title condition checks."""

from officing.gamification.titles import CHECKIN_CONDITIONS, QUEST_CONDITIONS, UserStats, condition_met


class TestConditionMet:

    def test_streak(self):
        assert condition_met("streak", {"threshold": 3}, UserStats(current_streak=3))
        assert not condition_met("streak", {"threshold": 3}, UserStats(current_streak=2))

    def test_attendance(self):
        assert condition_met("attendance", {"count": 1}, UserStats(total_attendance=1))
        assert not condition_met("attendance", {"count": 20}, UserStats(total_attendance=19))

    def test_level(self):
        assert condition_met("level", {"level": 5}, UserStats(level=6))
        assert not condition_met("level", {"level": 5}, UserStats(level=4))

    def test_quest(self):
        assert condition_met("quest", {"count": 1}, UserStats(completed_quests=1))
        assert not condition_met("quest", {"count": 2}, UserStats(completed_quests=1))

    def test_tag(self):
        stats = UserStats(tag_counts={"cafe": 5})
        assert condition_met("tag", {"tag": "cafe", "count": 5}, stats)
        assert not condition_met("tag", {"tag": "cafe", "count": 6}, stats)

    def test_tag_not_in_stats(self):
        assert not condition_met("tag", {"tag": "home", "count": 1}, UserStats(tag_counts={"cafe": 9}))

    def test_missing_threshold_never_unlocks(self):
        stats = UserStats(level=99, current_streak=99, total_attendance=99, completed_quests=99)
        for ctype in ("streak", "attendance", "level", "quest", "tag"):
            assert not condition_met(ctype, {}, stats)

    def test_unknown_type_never_unlocks(self):
        assert not condition_met("lottery", {"count": 0}, UserStats(level=50))


class TestConditionRouting:

    def test_checkin_owns_streak_attendance_tag(self):
        assert {"streak", "attendance", "tag", "level"} == CHECKIN_CONDITIONS

    def test_quest_completion_owns_quest_count(self):
        assert {"quest", "level"} == QUEST_CONDITIONS
