from datetime import date, datetime, time, timedelta

import pytest

from slotbook.core.enums import SlotAnchor
from slotbook.utils.slot_grid import (
    available_starts,
    blocked_flags,
    grid_points,
    occupied_start,
    slots_needed,
    walk_runs,
)

DAY = date(2026, 10, 19)
HOUR = timedelta(hours=1)
HALF = timedelta(minutes=30)


def at(hh: int, mm: int = 0) -> datetime:
    return datetime.combine(DAY, time(hh, mm))


class TestSlotsNeeded:
    def test_multiples_of_the_step(self) -> None:
        assert slots_needed(HALF) == 1
        assert slots_needed(HOUR) == 2
        assert slots_needed(timedelta(minutes=150)) == 5

    @pytest.mark.parametrize(
        "duration", [timedelta(0), timedelta(minutes=-30), timedelta(minutes=45)]
    )
    def test_rejects_durations_off_the_grid(self, duration: timedelta) -> None:
        with pytest.raises(ValueError):
            slots_needed(duration)


class TestGridPoints:
    def test_points_stop_before_window_end(self) -> None:
        points = grid_points(DAY, time(10, 0), time(12, 0))
        assert points == [at(10), at(10, 30), at(11), at(11, 30)]

    def test_unaligned_end_keeps_last_partial_point(self) -> None:
        points = grid_points(DAY, time(10, 0), time(11, 15))
        assert points == [at(10), at(10, 30), at(11)]

    @pytest.mark.parametrize(
        "starting, ending", [(time(10, 0), time(10, 0)), (time(18, 0), time(10, 0))]
    )
    def test_degenerate_window_has_no_points(self, starting: time, ending: time) -> None:
        assert grid_points(DAY, starting, ending) == []


class TestBlockedFlags:
    def test_touching_appointments_do_not_block(self) -> None:
        points = grid_points(DAY, time(11, 0), time(14, 0))
        flags = blocked_flags(points, [(at(12), at(13))])
        # 11:00 11:30 12:00 12:30 13:00 13:30
        assert flags == [False, False, True, True, False, False]

    def test_partial_overlap_blocks_every_touched_slot(self) -> None:
        points = grid_points(DAY, time(10, 0), time(11, 30))
        flags = blocked_flags(points, [(at(10, 15), at(10, 45))])
        assert flags == [True, True, False]

    def test_empty_intervals_are_ignored(self) -> None:
        points = grid_points(DAY, time(10, 0), time(11, 0))
        assert blocked_flags(points, [(at(10), at(10))]) == [False, False]


class TestWalkRuns:
    def test_length_mismatch_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            walk_runs([at(10)], [], 1)

    def test_k_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            walk_runs([at(10)], [False], 0)

    def test_single_slot_services_get_every_open_point(self) -> None:
        points = [at(10), at(10, 30), at(11)]
        blocked = [False, True, False]
        for anchor in SlotAnchor:
            assert walk_runs(points, blocked, 1, anchor) == [at(10), at(11)]

    def test_run_resets_on_blocked_point(self) -> None:
        points = [at(10), at(10, 30), at(11), at(11, 30), at(12)]
        blocked = [False, True, False, False, False]
        assert walk_runs(points, blocked, 2, SlotAnchor.START) == [at(11), at(11, 30)]
        assert walk_runs(points, blocked, 2, SlotAnchor.END) == [at(11, 30), at(12)]


class TestAvailableStarts:
    def test_free_day_count_matches_grid_minus_run_length(self) -> None:
        for minutes in (30, 60, 90, 120):
            duration = timedelta(minutes=minutes)
            k = slots_needed(duration)
            starts = available_starts(DAY, time(10, 0), time(18, 0), [], duration)
            assert len(starts) == 16 - k + 1

    def test_start_anchor_fits_inside_the_window(self) -> None:
        starts = available_starts(DAY, time(10, 0), time(18, 0), [], HOUR)
        assert starts[0] == at(10)
        assert starts[-1] == at(17)
        assert all(start + HOUR <= at(18) for start in starts)

    def test_end_anchor_trails_by_k_minus_one_steps(self) -> None:
        duration = timedelta(minutes=90)
        starts = available_starts(DAY, time(10, 0), time(18, 0), [], duration, SlotAnchor.END)
        k = slots_needed(duration)
        assert starts[0] >= at(10) + HALF * (k - 1)
        assert starts[0] == at(11)
        assert starts[-1] == at(17, 30)

    def test_results_are_chronological_and_unique(self) -> None:
        busy = [(at(12), at(13)), (at(15, 30), at(16))]
        for anchor in SlotAnchor:
            starts = available_starts(DAY, time(10, 0), time(18, 0), busy, HOUR, anchor)
            assert starts == sorted(set(starts))

    def test_lunch_appointment_start_anchor(self) -> None:
        starts = available_starts(
            DAY, time(10, 0), time(18, 0), [(at(12), at(13))], HOUR, SlotAnchor.START
        )
        assert at(12) not in starts
        assert at(11, 30) not in starts
        assert at(12, 30) not in starts
        assert starts[:3] == [at(10), at(10, 30), at(11)]
        assert starts[3] == at(13)
        assert len(starts) == 12
        assert all(not (s < at(13) and s + HOUR > at(12)) for s in starts)

    def test_lunch_appointment_end_anchor(self) -> None:
        starts = available_starts(
            DAY, time(10, 0), time(18, 0), [(at(12), at(13))], HOUR, SlotAnchor.END
        )
        assert at(12) not in starts
        assert at(12, 30) not in starts
        assert starts[:3] == [at(10, 30), at(11), at(11, 30)]
        assert starts[3] == at(13, 30)
        assert len(starts) == 12

    def test_window_shorter_than_service(self) -> None:
        assert available_starts(DAY, time(10, 0), time(10, 30), [], HOUR) == []

    def test_degenerate_window(self) -> None:
        assert available_starts(DAY, time(18, 0), time(10, 0), [], HALF) == []

    def test_fully_booked_window(self) -> None:
        assert available_starts(DAY, time(10, 0), time(12, 0), [(at(10), at(12))], HALF) == []


class TestOccupiedStart:
    def test_start_anchor_keeps_instant(self) -> None:
        assert occupied_start(at(13, 30), HOUR, SlotAnchor.START) == at(13, 30)

    def test_end_anchor_steps_back_to_run_start(self) -> None:
        assert occupied_start(at(13, 30), HOUR, SlotAnchor.END) == at(13)
        assert occupied_start(at(12), timedelta(minutes=90), SlotAnchor.END) == at(11)
        assert occupied_start(at(12), HALF, SlotAnchor.END) == at(12)

    def test_end_anchor_run_is_free_for_every_emitted_instant(self) -> None:
        busy = [(at(12), at(13))]
        for instant in available_starts(
            DAY, time(10, 0), time(18, 0), busy, HOUR, SlotAnchor.END
        ):
            start = occupied_start(instant, HOUR, SlotAnchor.END)
            assert start + HOUR <= at(12) or start >= at(13)
            assert start >= at(10) and start + HOUR <= at(18)
