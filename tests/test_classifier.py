import pytest

from academy.domain.attendance.classifier import (
    COLOR_ABSENT,
    COLOR_BLANK,
    COLOR_EXCUSED,
    COLOR_FULL,
    COLOR_PARTIAL,
    RULES,
    DayContext,
    classify_day,
    compute_net_minutes,
    match_rule,
)
from academy.domain.attendance.entities import DayCategory

from conftest import make_log


class TestRuleOrder:
    def test_rule_table_order(self):
        assert [rule.name for rule in RULES] == [
            "prior_dropout",
            "no_log",
            "dropout",
            "absent",
            "excused",
            "incomplete_timestamps",
            "present",
        ]

    def test_dropout_code_beats_absent_label(self, day_schedule):
        ctx = DayContext(log=make_log(code="99", status="결석"), schedule=day_schedule)
        assert match_rule(ctx).name == "dropout"

    def test_absent_label_beats_excused(self, day_schedule):
        ctx = DayContext(log=make_log(code="", status="결석"), schedule=day_schedule)
        assert match_rule(ctx).name == "absent"

    def test_excused_beats_missing_timestamps(self, day_schedule):
        ctx = DayContext(log=make_log(code="06", status="공가", check_in=None, check_out=None), schedule=day_schedule)
        assert match_rule(ctx).name == "excused"


class TestClassifyDay:
    def test_prior_dropout_is_blank(self, day_schedule):
        day = classify_day(make_log(), day_schedule, prior_dropout=True)

        assert day.category == DayCategory.BLANK
        assert (day.net_minutes, day.uncompleted_minutes) == (0, 0)
        assert (day.display_text, day.display_color) == ("", COLOR_BLANK)

    def test_no_log_is_absent(self, day_schedule):
        day = classify_day(None, day_schedule)

        assert day.category == DayCategory.ABSENT
        assert (day.net_minutes, day.uncompleted_minutes) == (0, 480)
        assert (day.display_text, day.display_color) == ("-", COLOR_ABSENT)

    def test_dropout(self, day_schedule):
        day = classify_day(make_log(code="99", status="중도탈락"), day_schedule)

        assert day.category == DayCategory.DROPOUT
        assert (day.net_minutes, day.uncompleted_minutes) == (0, 0)
        assert day.display_text == "중도탈락"

    @pytest.mark.parametrize("code, status", [("02", "결석"), ("02", ""), ("", "결석")])
    def test_absent(self, day_schedule, code, status):
        day = classify_day(make_log(code=code, status=status), day_schedule)

        assert day.category == DayCategory.ABSENT
        assert day.uncompleted_minutes == 480
        assert day.display_text == "결석"

    @pytest.mark.parametrize("code, status", [("", "공가"), ("06", "공가"), ("07", "출석인정"), ("09", "훈련기관사유")])
    def test_excused_gets_full_credit(self, day_schedule, code, status):
        day = classify_day(make_log(code=code, status=status, check_in=None, check_out=None), day_schedule)

        assert day.category == DayCategory.EXCUSED
        assert (day.net_minutes, day.uncompleted_minutes) == (480, 0)
        assert (day.display_text, day.display_color) == (status, COLOR_EXCUSED)

    @pytest.mark.parametrize("check_in, check_out", [(None, "1800"), ("0900", None), ("090", "1800"), ("", "")])
    def test_missing_timestamp_earns_nothing(self, day_schedule, check_in, check_out):
        day = classify_day(make_log(check_in=check_in, check_out=check_out), day_schedule)

        assert day.category == DayCategory.PRESENT_INCOMPLETE
        assert (day.net_minutes, day.uncompleted_minutes) == (0, 480)
        assert day.display_text == "-"

    def test_perfect_day(self, day_schedule):
        day = classify_day(make_log(check_in="0900", check_out="1800"), day_schedule)

        assert day.category == DayCategory.PRESENT_COMPLETE
        assert (day.net_minutes, day.uncompleted_minutes) == (480, 0)
        assert (day.display_text, day.display_color) == ("O", COLOR_FULL)

    def test_partial_day_shows_times(self, day_schedule):
        day = classify_day(make_log(check_in="09:11", check_out="18:00"), day_schedule)

        assert day.net_minutes == 469
        assert day.uncompleted_minutes == 11
        assert (day.display_text, day.display_color) == ("09:11\n18:00", COLOR_PARTIAL)

    def test_unknown_status_with_timestamps_is_present(self, day_schedule):
        day = classify_day(make_log(code="", status="", check_in="0900", check_out="1800"), day_schedule)
        assert day.category == DayCategory.PRESENT_COMPLETE


class TestGraceWindow:
    @pytest.mark.parametrize("check_in", ["0800", "0900", "0905", "0910"])
    def test_check_in_within_grace_snaps_to_start(self, day_schedule, check_in):
        assert compute_net_minutes(check_in[:2] + ":" + check_in[2:], "18:00", day_schedule) == 480

    def test_check_in_after_grace_does_not_snap(self, day_schedule):
        assert compute_net_minutes("09:11", "18:00", day_schedule) == 469

    def test_check_out_within_grace_snaps_to_end(self, day_schedule):
        assert compute_net_minutes("09:00", "17:50", day_schedule) == 480
        assert compute_net_minutes("09:00", "19:30", day_schedule) == 480

    def test_check_out_before_grace_does_not_snap(self, day_schedule):
        assert compute_net_minutes("09:00", "17:49", day_schedule) == 469


class TestNetMinutes:
    def test_lunch_overlap_uses_adjusted_window(self, day_schedule):
        # 12:30 입실 → 점심 중 30분만 공제
        assert compute_net_minutes("12:30", "18:00", day_schedule) == 300

    def test_leaving_before_lunch(self, day_schedule):
        assert compute_net_minutes("09:00", "11:00", day_schedule) == 120

    def test_inconsistent_times_clamp_to_zero(self, day_schedule):
        assert compute_net_minutes("17:00", "10:00", day_schedule) == 0

    @pytest.mark.parametrize(
        "check_in, check_out",
        [("0900", "1800"), ("0930", "1700"), ("1230", "1800"), ("1700", "1000"), ("0911", "1749")],
    )
    def test_conservation(self, day_schedule, check_in, check_out):
        day = classify_day(make_log(check_in=check_in, check_out=check_out), day_schedule)

        assert day.net_minutes + day.uncompleted_minutes == day_schedule.full_credit_minutes
        assert 0 <= day.net_minutes <= day_schedule.full_credit_minutes
