"""
Availability engine

Pure slot and capacity computation. Callers load settings, the valet's rota,
booking counts and holidays from the database and pass them in; nothing here
touches the session, and the clock is only read when ``now`` is omitted.

All clock values are UTC. Slot times are handled as minutes since midnight.
"""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Iterable, Mapping, Optional, Union

from ...config import DEFAULT_DAILY_CAPACITY

# (booking_date, "HH:MM") -> number of pending bookings in that slot
BookingCounts = Mapping[tuple[date, str], int]


class DayOfWeek(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_date(cls, day: date) -> "DayOfWeek":
        # Member order matches date.weekday(): Monday == 0
        return list(cls)[day.weekday()]


class ClosedReason(str, Enum):
    NO_ROTA = "No active rota"
    PAST = "Date is in the past"
    UNAVAILABLE = "Not available"
    HOLIDAY = "Holiday"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_minutes(value: Union[str, time]) -> int:
    """Convert "HH:MM", "HH:MM:SS" or a time to minutes since midnight."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute

    parts = str(value).strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid time of day: {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid time of day: {value!r}")
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class SlotSettings:
    """Global slot template, all times in minutes since midnight."""

    slot_start: int
    slot_end: int
    slot_duration: int
    break_start: int
    break_end: int
    lead_time_hours: int = 0

    def __post_init__(self):
        if self.slot_duration <= 0:
            raise ValueError("Slot duration must be a positive number of minutes")
        if self.slot_start >= self.slot_end:
            raise ValueError("Slot start time must be before slot end time")
        if self.break_start > self.break_end:
            raise ValueError("Break start time must not be after break end time")
        if self.lead_time_hours < 0:
            raise ValueError("Lead time cannot be negative")

    @classmethod
    def from_times(
        cls,
        slot_start_time: Union[str, time],
        slot_end_time: Union[str, time],
        slot_duration_minutes: int,
        break_start_time: Union[str, time],
        break_end_time: Union[str, time],
        lead_time_hours: Optional[int] = 0,
    ) -> "SlotSettings":
        return cls(
            slot_start=parse_minutes(slot_start_time),
            slot_end=parse_minutes(slot_end_time),
            slot_duration=int(slot_duration_minutes),
            break_start=parse_minutes(break_start_time),
            break_end=parse_minutes(break_end_time),
            lead_time_hours=int(lead_time_hours or 0),
        )

    def in_break(self, minute: int) -> bool:
        return self.break_start <= minute < self.break_end

    def slot_starts(self) -> list[int]:
        """Start minutes in [slot_start, slot_end), stepping by duration, minus the break."""
        return [
            minute
            for minute in range(self.slot_start, self.slot_end, self.slot_duration)
            if not self.in_break(minute)
        ]


@dataclass(frozen=True)
class RotaDay:
    available: bool = False
    capacity: Optional[int] = None

    @property
    def effective_capacity(self) -> int:
        return self.capacity or DEFAULT_DAILY_CAPACITY


@dataclass(frozen=True)
class WeeklyRota:
    days: Mapping[DayOfWeek, RotaDay] = field(default_factory=dict)

    def for_date(self, day: date) -> RotaDay:
        return self.days.get(DayOfWeek.from_date(day), RotaDay())


@dataclass(frozen=True)
class SlotDetail:
    time: str
    available: bool
    booked_count: int
    capacity: int
    can_book: bool

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DayAvailability:
    available: int
    total: int
    capacity: int = 0
    slots: tuple[SlotDetail, ...] = ()
    closed_reason: Optional[ClosedReason] = None

    @property
    def is_open(self) -> bool:
        return self.closed_reason is None

    def summary(self) -> dict:
        return {"available": self.available, "total": self.total}


@dataclass(frozen=True)
class CapacityCheck:
    accepted: bool
    max_capacity: int
    current_count: int


def _as_utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return utc_now()
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def is_past(day: date, now: datetime) -> bool:
    """Anything before today's UTC calendar date counts as past, yesterday included."""
    return day < _as_utc(now).date()


def _closed(reason: ClosedReason, capacity: int = 0) -> DayAvailability:
    return DayAvailability(available=0, total=0, capacity=capacity, closed_reason=reason)


def compute_day(
    settings: SlotSettings,
    rota: Optional[WeeklyRota],
    day: date,
    booking_counts: BookingCounts,
    holidays: Iterable[date] = (),
    now: Optional[datetime] = None,
    detail: bool = False,
) -> DayAvailability:
    """Availability for one valet on one date."""
    if rota is None:
        return _closed(ClosedReason.NO_ROTA)

    now = _as_utc(now)
    rota_day = rota.for_date(day)
    capacity = rota_day.effective_capacity

    if is_past(day, now):
        return _closed(ClosedReason.PAST, capacity)
    if not rota_day.available:
        return _closed(ClosedReason.UNAVAILABLE, capacity)
    if day in set(holidays):
        return _closed(ClosedReason.HOLIDAY, capacity)

    earliest_bookable = now + timedelta(hours=settings.lead_time_hours)
    is_today = day == now.date()

    available = 0
    total = 0
    slots = []
    for minute in settings.slot_starts():
        slot_time = format_minutes(minute)
        booked = booking_counts.get((day, slot_time), 0)
        is_open = booked < capacity

        total += 1
        if is_open:
            available += 1

        if detail:
            can_book = is_open
            if is_today:
                slot_at = datetime.combine(day, time(minute // 60, minute % 60), tzinfo=timezone.utc)
                can_book = is_open and slot_at > earliest_bookable
            slots.append(SlotDetail(slot_time, is_open, booked, capacity, can_book))

    return DayAvailability(available=available, total=total, capacity=capacity, slots=tuple(slots))


def compute_availability(
    settings: SlotSettings,
    rota: Optional[WeeklyRota],
    booking_counts: BookingCounts,
    holidays: Iterable[date],
    dates: Iterable[date],
    now: Optional[datetime] = None,
    detail: bool = False,
) -> dict[date, DayAvailability]:
    """Availability for every requested date; see ``compute_day``."""
    now = _as_utc(now)
    holiday_set = set(holidays)
    return {
        day: compute_day(settings, rota, day, booking_counts, holiday_set, now, detail)
        for day in dates
    }


def check_capacity(rota: WeeklyRota, day: date, existing_count: int) -> CapacityCheck:
    """Accept a new booking only while the day's pending bookings are under capacity."""
    max_capacity = rota.for_date(day).effective_capacity
    return CapacityCheck(
        accepted=existing_count < max_capacity,
        max_capacity=max_capacity,
        current_count=existing_count,
    )
