"""Timetable and booking routes."""

from datetime import timedelta

from fastapi import status


def _timetable(client, tenant_id: str, service_id: str, day: str = "2026-10-19"):
    return client.get(
        f"/api/v1/tenants/{tenant_id}/services/{service_id}/timetable", params={"date": day}
    )


def _book(client, tenant_id: str, service_id: str, starting: str, headers):
    return client.post(
        f"/api/v1/tenants/{tenant_id}/services/{service_id}/appointments",
        json={"starting": starting},
        headers=headers,
    )


class TestTimetable:
    def test_lists_open_starts(self, client, tenant, make_service, make_window):
        service = make_service(duration=timedelta(hours=1))
        make_window(weekday=1)

        res = _timetable(client, tenant.id, service.id)

        assert res.status_code == status.HTTP_200_OK
        times = res.json()["times"]
        assert len(times) == 15
        assert times[0] == "2026-10-19T10:00:00"
        assert times[-1] == "2026-10-19T17:00:00"

    def test_day_without_schedule_is_empty(self, client, tenant, make_service, make_window):
        service = make_service()
        make_window(weekday=1)

        res = _timetable(client, tenant.id, service.id, day="2026-10-20")

        assert res.status_code == status.HTTP_200_OK
        assert res.json() == {"times": []}

    def test_unknown_service(self, client, tenant):
        res = _timetable(client, tenant.id, "01HF4G12ABCDEF3456789XYZAB")
        assert res.status_code == status.HTTP_404_NOT_FOUND
        assert res.json()["detail"]["code"] == "SERVICE_NOT_FOUND"

    def test_date_is_required(self, client, tenant, make_service):
        service = make_service()
        res = client.get(f"/api/v1/tenants/{tenant.id}/services/{service.id}/timetable")
        assert res.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestCreateAppointment:
    def test_books_and_removes_start(
        self, client, tenant, make_service, make_window, customer_headers
    ):
        service = make_service(duration=timedelta(hours=1))
        make_window(weekday=1)

        res = _book(client, tenant.id, service.id, "2026-10-19T10:00:00", customer_headers)

        assert res.status_code == status.HTTP_201_CREATED
        assert res.json()["appointment_id"]
        times = _timetable(client, tenant.id, service.id).json()["times"]
        assert "2026-10-19T10:00:00" not in times
        assert "2026-10-19T10:30:00" not in times
        assert times[0] == "2026-10-19T11:00:00"

    def test_repeat_booking_is_invalid_time(
        self, client, tenant, make_service, make_window, customer_headers
    ):
        service = make_service()
        make_window(weekday=1)
        _book(client, tenant.id, service.id, "2026-10-19T10:00:00", customer_headers)

        res = _book(client, tenant.id, service.id, "2026-10-19T10:00:00", customer_headers)

        assert res.status_code == status.HTTP_400_BAD_REQUEST
        assert res.json()["detail"]["code"] == "INVALID_TIME"

    def test_off_grid_start_is_invalid_time(
        self, client, tenant, make_service, make_window, customer_headers
    ):
        service = make_service()
        make_window(weekday=1)

        res = _book(client, tenant.id, service.id, "2026-10-19T10:15:00", customer_headers)

        assert res.status_code == status.HTTP_400_BAD_REQUEST

    def test_requires_authentication(self, client, tenant, make_service, make_window):
        service = make_service()
        make_window(weekday=1)

        res = client.post(
            f"/api/v1/tenants/{tenant.id}/services/{service.id}/appointments",
            json={"starting": "2026-10-19T10:00:00"},
        )

        assert res.status_code == status.HTTP_401_UNAUTHORIZED

    def test_service_of_another_tenant(self, client, make_service, make_window, customer_headers):
        service = make_service()
        make_window(weekday=1)

        res = _book(
            client, "01HF4G12ABCDEF3456789XYZAB", service.id, "2026-10-19T10:00:00", customer_headers
        )

        assert res.status_code == status.HTTP_404_NOT_FOUND
