"""Streak transitions."""

from officing.gamification.streak import compute_streak


class TestComputeStreak:

    def test_first_checkin(self):
        result = compute_streak(0, 0, checked_in_yesterday=False, first_checkin=True)
        assert (result.current, result.max, result.is_new_record) == (1, 1, True)

    def test_consecutive_day_extends(self):
        result = compute_streak(3, 5, checked_in_yesterday=True)
        assert result.current == 4
        assert result.max == 5
        assert not result.is_new_record

    def test_gap_resets_to_one(self):
        result = compute_streak(7, 7, checked_in_yesterday=False)
        assert result.current == 1
        assert result.max == 7
        assert not result.is_new_record

    def test_new_record(self):
        result = compute_streak(5, 5, checked_in_yesterday=True)
        assert result.current == 6
        assert result.max == 6
        assert result.is_new_record

    def test_tying_max_is_not_a_record(self):
        result = compute_streak(4, 5, checked_in_yesterday=True)
        assert result.current == 5
        assert result.max == 5
        assert not result.is_new_record

    def test_existing_row_without_history_counts_as_record(self):
        # Progress row created by a shop purchase, first ever check-in.
        result = compute_streak(0, 0, checked_in_yesterday=False)
        assert (result.current, result.max, result.is_new_record) == (1, 1, True)
