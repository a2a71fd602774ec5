"""XP curve and level rollover."""

import math

import pytest

from officing.gamification.leveling import apply_xp, xp_required_for_level


class TestXPRequiredForLevel:
    """floor(100 * level ** 1.5)."""

    def test_level_1(self):
        assert xp_required_for_level(1) == 100

    def test_level_2(self):
        assert xp_required_for_level(2) == 282

    def test_level_3(self):
        assert xp_required_for_level(3) == 519

    def test_level_10(self):
        assert xp_required_for_level(10) == math.floor(100 * 10 ** 1.5) == 3162

    def test_strictly_increasing(self):
        for level in range(1, 200):
            assert xp_required_for_level(level) < xp_required_for_level(level + 1)

    def test_level_zero_rejected(self):
        with pytest.raises(ValueError):
            xp_required_for_level(0)


class TestApplyXP:
    """Level-up detection and remainder."""

    def test_below_threshold_stays(self):
        result = apply_xp(1, 0, 99)
        assert result.level == 1
        assert result.current_xp == 99
        assert not result.leveled_up
        assert result.levels_gained == 0

    def test_single_level_up_keeps_remainder(self):
        result = apply_xp(1, 0, 300)
        assert result.level == 2
        assert result.current_xp == 300 - 282
        assert result.leveled_up
        assert result.levels_gained == 1

    def test_exact_threshold_levels_up_with_zero_remainder(self):
        result = apply_xp(1, 200, 82)
        assert result.level == 2
        assert result.current_xp == 0

    def test_multi_level_rollover(self):
        # 282 (->2) + 519 (->3) + 100 left over
        result = apply_xp(1, 0, 282 + 519 + 100)
        assert result.level == 3
        assert result.current_xp == 100
        assert result.levels_gained == 2

    def test_existing_xp_counts(self):
        result = apply_xp(2, 500, 19)
        assert result.level == 3
        assert result.current_xp == 0

    def test_zero_gain(self):
        result = apply_xp(4, 10, 0)
        assert (result.level, result.current_xp, result.leveled_up) == (4, 10, False)

    def test_xp_for_next_level(self):
        assert apply_xp(1, 0, 0).xp_for_next_level == 282

    def test_negative_gain_rejected(self):
        with pytest.raises(ValueError):
            apply_xp(1, 0, -1)

    def test_invalid_level_rejected(self):
        with pytest.raises(ValueError):
            apply_xp(0, 0, 10)
