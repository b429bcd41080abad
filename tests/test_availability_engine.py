from datetime import date, datetime, timedelta, timezone

import pytest

from valet_api.domain.availability.engine import (
    ClosedReason,
    DayOfWeek,
    RotaDay,
    SlotSettings,
    WeeklyRota,
    compute_availability,
    compute_day,
    format_minutes,
    parse_minutes,
)

NOW = datetime(2030, 1, 7, 8, 0, tzinfo=timezone.utc)  # Monday
MONDAY = date(2030, 1, 7)
NEXT_MONDAY = date(2030, 1, 14)
SUNDAY = date(2030, 1, 13)

SETTINGS = SlotSettings.from_times("09:00", "17:00", 30, "12:00", "13:00", 2)


def weekday_rota(capacity=3):
    days = {day: RotaDay(True, capacity) for day in DayOfWeek}
    days[DayOfWeek.SATURDAY] = RotaDay(False, capacity)
    days[DayOfWeek.SUNDAY] = RotaDay(False, capacity)
    return WeeklyRota(days)


def test_day_of_week_follows_calendar_date():
    assert DayOfWeek.from_date(MONDAY) is DayOfWeek.MONDAY
    assert DayOfWeek.from_date(SUNDAY) is DayOfWeek.SUNDAY
    assert DayOfWeek.from_date(date(2024, 2, 29)) is DayOfWeek.THURSDAY


def test_parse_and_format_minutes():
    assert parse_minutes("09:30") == 570
    assert parse_minutes("17:00:00") == 1020
    assert format_minutes(570) == "09:30"
    with pytest.raises(ValueError):
        parse_minutes("25:00")


def test_settings_reject_inverted_windows():
    with pytest.raises(ValueError):
        SlotSettings.from_times("17:00", "09:00", 30, "12:00", "13:00")
    with pytest.raises(ValueError):
        SlotSettings.from_times("09:00", "17:00", 30, "13:00", "12:00")
    with pytest.raises(ValueError):
        SlotSettings.from_times("09:00", "17:00", 0, "12:00", "12:00")


def test_full_day_with_lunch_break_has_fourteen_slots():
    result = compute_day(SETTINGS, weekday_rota(), NEXT_MONDAY, {}, now=NOW)

    assert result.total == 14
    assert result.available == 14
    assert result.capacity == 3
    assert result.is_open


def test_full_slot_counts_towards_total_only():
    counts = {(NEXT_MONDAY, "09:00"): 3}

    result = compute_day(SETTINGS, weekday_rota(), NEXT_MONDAY, counts, now=NOW)

    assert result.total == 14
    assert result.available == 13


def test_slot_count_without_break_is_ceiling_of_steps():
    no_break = SlotSettings.from_times("09:00", "17:00", 25, "12:00", "12:00")

    starts = no_break.slot_starts()

    # 480 minutes / 25 leaves a partial step; the 16:55 start still counts
    assert len(starts) == 20
    assert format_minutes(starts[-1]) == "16:55"


def test_break_skips_only_starts_inside_the_window():
    starts = [format_minutes(m) for m in SETTINGS.slot_starts()]

    assert "11:30" in starts
    assert "12:00" not in starts
    assert "12:30" not in starts
    assert "13:00" in starts


@pytest.mark.parametrize(
    "day, holidays, reason",
    [
        (SUNDAY, set(), ClosedReason.UNAVAILABLE),
        (NEXT_MONDAY, {NEXT_MONDAY}, ClosedReason.HOLIDAY),
        (MONDAY - timedelta(days=1), set(), ClosedReason.PAST),
        (MONDAY - timedelta(days=30), set(), ClosedReason.PAST),
    ],
)
def test_closed_days_have_no_slots_even_with_bookings(day, holidays, reason):
    counts = {(day, "09:00"): 1}

    result = compute_day(SETTINGS, weekday_rota(), day, counts, holidays, now=NOW)

    assert result.summary() == {"available": 0, "total": 0}
    assert result.closed_reason is reason


def test_yesterday_is_closed_even_when_rota_allows_every_day():
    every_day = WeeklyRota({day: RotaDay(True, 5) for day in DayOfWeek})

    result = compute_day(SETTINGS, every_day, MONDAY - timedelta(days=1), {}, now=NOW)

    assert result.summary() == {"available": 0, "total": 0}


def test_missing_rota_yields_no_slots():
    result = compute_day(SETTINGS, None, NEXT_MONDAY, {}, now=NOW)

    assert result.total == 0
    assert result.closed_reason is ClosedReason.NO_ROTA


def test_unset_or_zero_capacity_defaults_to_three():
    rota = WeeklyRota({DayOfWeek.MONDAY: RotaDay(True, 0)})
    counts = {(NEXT_MONDAY, "09:00"): 2, (NEXT_MONDAY, "09:30"): 3}

    result = compute_day(SETTINGS, rota, NEXT_MONDAY, counts, now=NOW)

    assert result.capacity == 3
    assert result.available == 13


def test_lead_time_blocks_early_slots_today():
    result = compute_day(SETTINGS, weekday_rota(), MONDAY, {}, now=NOW, detail=True)
    by_time = {slot.time: slot for slot in result.slots}

    # now 08:00 + 2h lead -> only slots strictly after 10:00 are bookable
    assert by_time["09:30"].can_book is False
    assert by_time["10:00"].can_book is False
    assert by_time["10:30"].can_book is True
    assert all(slot.available for slot in result.slots)


def test_future_slots_can_book_mirrors_availability():
    counts = {(NEXT_MONDAY, "09:00"): 3}

    result = compute_day(SETTINGS, weekday_rota(), NEXT_MONDAY, counts, now=NOW, detail=True)
    by_time = {slot.time: slot for slot in result.slots}

    assert by_time["09:00"].available is False
    assert by_time["09:00"].can_book is False
    assert by_time["09:00"].booked_count == 3
    assert by_time["09:30"].can_book is True
    assert by_time["09:30"].capacity == 3


def test_naive_now_is_treated_as_utc():
    naive = NOW.replace(tzinfo=None)

    assert compute_day(SETTINGS, weekday_rota(), MONDAY, {}, now=naive) == compute_day(
        SETTINGS, weekday_rota(), MONDAY, {}, now=NOW
    )


def test_batch_is_idempotent_and_matches_single_day():
    dates = [MONDAY, NEXT_MONDAY, SUNDAY]
    counts = {(NEXT_MONDAY, "14:00"): 3, (MONDAY, "16:30"): 1}

    first = compute_availability(SETTINGS, weekday_rota(), counts, set(), dates, now=NOW)
    second = compute_availability(SETTINGS, weekday_rota(), counts, set(), dates, now=NOW)

    assert first == second
    for day in dates:
        single = compute_day(SETTINGS, weekday_rota(), day, counts, now=NOW, detail=True)
        assert first[day].summary() == {
            "available": len([s for s in single.slots if s.available]),
            "total": single.total,
        }


def test_more_bookings_never_increase_availability():
    previous = None
    for booked in range(0, 6):
        counts = {(NEXT_MONDAY, "09:00"): booked, (NEXT_MONDAY, "13:00"): booked}
        result = compute_day(SETTINGS, weekday_rota(capacity=2), NEXT_MONDAY, counts, now=NOW)
        if previous is not None:
            assert result.available <= previous
        previous = result.available

    assert previous == 12
