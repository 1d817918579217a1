from datetime import date, datetime, time, timedelta, timezone

import pytest
from sqlalchemy.orm import Session

from slotbook.core.config import Settings
from slotbook.core.enums import SlotAnchor
from slotbook.core.exceptions import (
    BookingConflictException,
    InvalidTimeException,
    ServiceNotFoundException,
)
from slotbook.models import Appointment
from slotbook.services.booking_service import BookingService

MONDAY = date(2026, 10, 19)


def at(hh: int, mm: int = 0) -> datetime:
    return datetime.combine(MONDAY, time(hh, mm))


@pytest.fixture
def booking_service(db: Session) -> BookingService:
    return BookingService(db, config=Settings(availability_slot_anchor=SlotAnchor.START))


class TestCreateAppointment:
    def test_books_offered_start(
        self, db: Session, booking_service: BookingService, make_service, make_window, customer_id
    ) -> None:
        service = make_service(duration=timedelta(hours=1))
        make_window(weekday=1)

        appointment = booking_service.create_appointment(service.id, customer_id, at(10))

        stored = db.query(Appointment).filter(Appointment.id == appointment.id).one()
        assert stored.personnel_id == service.personnel_id
        assert stored.customer_id == customer_id
        assert stored.starting == at(10)
        assert stored.ending == at(11)
        assert stored.duration_minutes == 60

    def test_booked_start_leaves_availability(
        self, booking_service: BookingService, make_service, make_window, customer_id
    ) -> None:
        service = make_service(duration=timedelta(hours=1))
        make_window(weekday=1)

        booking_service.create_appointment(service.id, customer_id, at(10))
        starts = booking_service.availability.compute_available_starts(service.id, MONDAY)

        assert at(10) not in starts
        assert at(10, 30) not in starts
        assert starts[0] == at(11)
        assert starts[-1] == at(17)
        assert len(starts) == 13

    def test_same_start_twice_is_invalid_time(
        self, db: Session, booking_service: BookingService, make_service, make_window, customer_id
    ) -> None:
        service = make_service()
        make_window(weekday=1)
        booking_service.create_appointment(service.id, customer_id, at(10))

        with pytest.raises(InvalidTimeException) as exc_info:
            booking_service.create_appointment(service.id, customer_id, at(10))

        assert exc_info.value.code == "INVALID_TIME"
        assert exc_info.value.to_http_exception().status_code == 400
        assert db.query(Appointment).count() == 1

    def test_start_off_the_grid_is_invalid_time(
        self, db: Session, booking_service: BookingService, make_service, make_window, customer_id
    ) -> None:
        service = make_service()
        make_window(weekday=1)

        with pytest.raises(InvalidTimeException):
            booking_service.create_appointment(service.id, customer_id, at(10, 15))
        assert db.query(Appointment).count() == 0

    def test_overflowing_the_window_is_invalid_time(
        self, booking_service: BookingService, make_service, make_window, customer_id
    ) -> None:
        service = make_service(duration=timedelta(hours=1))
        make_window(weekday=1)

        with pytest.raises(InvalidTimeException):
            booking_service.create_appointment(service.id, customer_id, at(17, 30))

    def test_no_schedule_is_invalid_time(
        self, booking_service: BookingService, make_service, customer_id
    ) -> None:
        service = make_service()
        with pytest.raises(InvalidTimeException):
            booking_service.create_appointment(service.id, customer_id, at(10))

    def test_aware_start_is_read_as_wall_clock(
        self, booking_service: BookingService, make_service, make_window, customer_id
    ) -> None:
        service = make_service()
        make_window(weekday=1)

        appointment = booking_service.create_appointment(
            service.id, customer_id, at(10).replace(tzinfo=timezone.utc)
        )

        assert appointment.starting == at(10)

    def test_unknown_service(self, booking_service: BookingService, customer_id) -> None:
        with pytest.raises(ServiceNotFoundException):
            booking_service.create_appointment("01HF4G12ABCDEF3456789XYZAB", customer_id, at(10))

    def test_service_of_another_tenant(
        self, booking_service: BookingService, make_service, make_window, customer_id
    ) -> None:
        service = make_service()
        make_window(weekday=1)
        with pytest.raises(ServiceNotFoundException):
            booking_service.create_appointment(
                service.id, customer_id, at(10), tenant_id="01HF4G12ABCDEF3456789XYZAB"
            )

    def test_unique_constraint_turns_lost_race_into_conflict(
        self,
        db: Session,
        booking_service: BookingService,
        make_service,
        make_window,
        customer_id,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        service = make_service()
        make_window(weekday=1)
        booking_service.create_appointment(service.id, customer_id, at(10))

        # Simulate a stale read: the recheck still offers the taken start.
        monkeypatch.setattr(
            booking_service.availability, "starts_for", lambda *args, **kwargs: [at(10)]
        )

        with pytest.raises(BookingConflictException) as exc_info:
            booking_service.create_appointment(service.id, "01HF4G12ABCDEF3456789XYZAB", at(10))

        assert exc_info.value.details["conflict_scope"] == "personnel"
        assert exc_info.value.to_http_exception().status_code == 409
        assert db.query(Appointment).count() == 1


class TestOfferedStartsAreBookable:
    @pytest.mark.parametrize("anchor", [SlotAnchor.START, SlotAnchor.END])
    def test_every_offered_start_books_without_overlap(
        self, db: Session, make_service, make_window, customer_id, anchor: SlotAnchor
    ) -> None:
        service = make_service(duration=timedelta(minutes=90))
        make_window(weekday=1)
        db.add(
            Appointment(
                service_id=service.id,
                personnel_id=service.personnel_id,
                customer_id="01HF4G12ABCDEF3456789XYZAB",
                starting=at(13),
                ending=at(14),
                duration_minutes=60,
            )
        )
        db.commit()
        booking_service = BookingService(db, config=Settings(availability_slot_anchor=anchor))

        offered = booking_service.availability.compute_available_starts(service.id, MONDAY)
        assert offered

        for instant in offered:
            appointment = booking_service.create_appointment(service.id, customer_id, instant)

            assert appointment.ending - appointment.starting == timedelta(minutes=90)
            assert at(10) <= appointment.starting and appointment.ending <= at(18)
            assert appointment.ending <= at(13) or appointment.starting >= at(14)

            db.delete(appointment)
            db.commit()

        assert db.query(Appointment).count() == 1


class TestEndAnchorBooking:
    @pytest.fixture
    def booking_service(self, db: Session) -> BookingService:
        return BookingService(db, config=Settings(availability_slot_anchor=SlotAnchor.END))

    def test_stores_the_run_that_was_offered(
        self, booking_service: BookingService, make_service, make_window, customer_id
    ) -> None:
        service = make_service(duration=timedelta(hours=1))
        make_window(weekday=1)

        appointment = booking_service.create_appointment(service.id, customer_id, at(13, 30))

        assert appointment.starting == at(13)
        assert appointment.ending == at(14)

    def test_cannot_double_book_overlapping_run(
        self, db: Session, booking_service: BookingService, make_service, make_window, customer_id
    ) -> None:
        service = make_service(duration=timedelta(hours=1))
        make_window(weekday=1)
        booking_service.create_appointment(service.id, customer_id, at(13, 30))

        with pytest.raises(InvalidTimeException):
            booking_service.create_appointment(service.id, customer_id, at(13))
        with pytest.raises(InvalidTimeException):
            booking_service.create_appointment(service.id, customer_id, at(14))

        rows = db.query(Appointment).all()
        assert [(r.starting, r.ending) for r in rows] == [(at(13), at(14))]
