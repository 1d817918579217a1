"""
Slot grid helpers for availability.

A day's schedule window is cut into grid points every ``SLOT_MINUTES``
minutes. A grid point is blocked when an existing appointment overlaps the
half-open interval ``[point, point + step)``. Start instants are found by
walking the grid with a run counter of consecutive open points.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Sequence, Tuple

from ..core.constants import SLOT_MINUTES
from ..core.enums import SlotAnchor

SLOT_STEP = timedelta(minutes=SLOT_MINUTES)

Interval = Tuple[datetime, datetime]


def slots_needed(duration: timedelta, step: timedelta = SLOT_STEP) -> int:
    """Number of consecutive grid points a booking of ``duration`` occupies."""
    if duration <= timedelta(0) or duration % step:
        raise ValueError(f"duration {duration} is not a positive multiple of {step}")
    return duration // step


def grid_points(
    on_date: date, starting: time, ending: time, step: timedelta = SLOT_STEP
) -> List[datetime]:
    """Grid points from ``starting`` strictly before ``ending`` on ``on_date``.

    A window with ``starting >= ending`` yields no points.
    """
    first = datetime.combine(on_date, starting)
    last = datetime.combine(on_date, ending)
    points: List[datetime] = []
    point = first
    while point < last:
        points.append(point)
        point += step
    return points


def blocked_flags(
    points: Sequence[datetime], busy: Iterable[Interval], step: timedelta = SLOT_STEP
) -> List[bool]:
    """For each grid point, whether any busy interval overlaps ``[point, point + step)``."""
    intervals = [(s, e) for s, e in busy if e > s]
    flags: List[bool] = []
    for point in points:
        slot_end = point + step
        flags.append(any(s < slot_end and e > point for s, e in intervals))
    return flags


def walk_runs(
    points: Sequence[datetime],
    blocked: Sequence[bool],
    k: int,
    anchor: SlotAnchor = SlotAnchor.START,
    step: timedelta = SLOT_STEP,
) -> List[datetime]:
    """
    Emit start instants wherever the run of open points reaches ``k``.

    With ``SlotAnchor.START`` the first point of the satisfying run is
    emitted, so ``[instant, instant + k * step)`` is entirely open. With
    ``SlotAnchor.END`` the current point is emitted instead.
    """
    if len(points) != len(blocked):
        raise ValueError("points and blocked flags must have the same length")
    if k < 1:
        raise ValueError("k must be at least 1")

    back = step * (k - 1)
    out: List[datetime] = []
    run = 0
    for point, is_blocked in zip(points, blocked):
        if is_blocked:
            run = 0
            continue
        run += 1
        if run >= k:
            out.append(point - back if anchor == SlotAnchor.START else point)
    return out


def available_starts(
    on_date: date,
    starting: time,
    ending: time,
    busy: Iterable[Interval],
    duration: timedelta,
    anchor: SlotAnchor = SlotAnchor.START,
    step: timedelta = SLOT_STEP,
) -> List[datetime]:
    """Ordered bookable start instants for one day of one schedule window."""
    k = slots_needed(duration, step)
    points = grid_points(on_date, starting, ending, step)
    if not points:
        return []
    return walk_runs(points, blocked_flags(points, busy, step), k, anchor, step)


def occupied_start(
    instant: datetime,
    duration: timedelta,
    anchor: SlotAnchor = SlotAnchor.START,
    step: timedelta = SLOT_STEP,
) -> datetime:
    """
    First grid point of the run that made ``instant`` available.

    Under ``SlotAnchor.END`` an emitted instant is the last point of its run,
    so the appointment occupies the ``k`` points ending at ``instant``.
    """
    if anchor == SlotAnchor.START:
        return instant
    return instant - step * (slots_needed(duration, step) - 1)
