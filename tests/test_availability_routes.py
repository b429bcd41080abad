from datetime import timedelta

from conftest import MONDAY, NEXT_MONDAY, SATURDAY, TUESDAY, make_booking, make_valet

from valet_api.models import ValetHoliday


def test_batch_counts_per_date(client, db, slot_settings, valet, frozen_now):
    for _ in range(3):
        make_booking(db, valet, NEXT_MONDAY, "09:00")
    db.add(ValetHoliday(valet_id=valet.valet_id, holiday_date=TUESDAY))
    db.commit()

    response = client.post(
        "/api/availability/batch",
        json={
            "valet_id": valet.valet_id,
            "dates": [NEXT_MONDAY.isoformat(), TUESDAY.isoformat(), SATURDAY.isoformat()],
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["availability"] == {
        NEXT_MONDAY.isoformat(): {"available": 13, "total": 14},
        TUESDAY.isoformat(): {"available": 0, "total": 0},
        SATURDAY.isoformat(): {"available": 0, "total": 0},
    }
    assert body["message"] == "Batch loaded 3 dates"


def test_batch_ignores_cancelled_and_completed(client, db, slot_settings, valet, frozen_now):
    make_booking(db, valet, NEXT_MONDAY, "09:00", status="cancelled")
    make_booking(db, valet, NEXT_MONDAY, "09:00", status="completed")
    make_booking(db, valet, NEXT_MONDAY, "09:00")
    make_booking(db, valet, NEXT_MONDAY, "09:00")

    response = client.post(
        "/api/availability/batch",
        json={"valet_id": valet.valet_id, "dates": [NEXT_MONDAY.isoformat()]},
    )

    assert response.json()["availability"][NEXT_MONDAY.isoformat()] == {"available": 14, "total": 14}


def test_batch_yesterday_is_closed(client, slot_settings, valet, frozen_now):
    yesterday = (MONDAY - timedelta(days=1)).isoformat()

    response = client.post(
        "/api/availability/batch", json={"valet_id": valet.valet_id, "dates": [yesterday]}
    )

    assert response.json()["availability"][yesterday] == {"available": 0, "total": 0}


def test_batch_without_settings_is_configuration_error(client, valet):
    response = client.post(
        "/api/availability/batch",
        json={"valet_id": valet.valet_id, "dates": [NEXT_MONDAY.isoformat()]},
    )

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "configuration_missing",
        "message": "Settings not configured",
    }


def test_batch_unknown_valet_is_404(client, slot_settings):
    response = client.post(
        "/api/availability/batch", json={"valet_id": "missing", "dates": [NEXT_MONDAY.isoformat()]}
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Valet not found"


def test_batch_without_dates_array_is_400(client, slot_settings, valet):
    response = client.post("/api/availability/batch", json={"valet_id": valet.valet_id})

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_batch_without_active_rota(client, db, slot_settings, frozen_now):
    valet = make_valet(db, name="Robin Rest", with_rota=False)

    response = client.post(
        "/api/availability/batch",
        json={"valet_id": valet.valet_id, "dates": [NEXT_MONDAY.isoformat()]},
    )

    body = response.json()
    assert response.status_code == 200
    assert body["message"] == "No active rota"
    assert body["availability"][NEXT_MONDAY.isoformat()] == {"available": 0, "total": 0}


def test_slots_detail_for_future_day(client, db, slot_settings, valet, frozen_now):
    for _ in range(3):
        make_booking(db, valet, NEXT_MONDAY, "09:00")
    make_booking(db, valet, NEXT_MONDAY, "10:00")

    response = client.get(f"/api/availability/slots/{valet.valet_id}/{NEXT_MONDAY.isoformat()}")

    assert response.status_code == 200
    body = response.json()
    assert body["day_of_week"] == "monday"
    assert body["is_available_today"] is True
    assert body["max_slots_per_day"] == 3
    assert body["total_slots_available"] == 14
    assert body["available_slots"] == 13
    assert body["bookable_slots"] == 0
    assert body["lead_time_hours"] == 2
    times = [slot["time"] for slot in body["slots"]]
    assert "09:00" not in times
    ten = next(slot for slot in body["slots"] if slot["time"] == "10:00")
    assert ten == {
        "time": "10:00",
        "available": True,
        "booked_count": 1,
        "capacity": 3,
        "can_book": True,
    }


def test_slots_today_apply_lead_time(client, slot_settings, valet, frozen_now):
    response = client.get(f"/api/availability/slots/{valet.valet_id}/{MONDAY.isoformat()}")

    slots = {slot["time"]: slot for slot in response.json()["slots"]}
    assert slots["10:00"]["can_book"] is False
    assert slots["10:30"]["can_book"] is True


def test_slots_closed_weekday(client, slot_settings, valet, frozen_now):
    response = client.get(f"/api/availability/slots/{valet.valet_id}/{SATURDAY.isoformat()}")

    body = response.json()
    assert body["slots"] == []
    assert body["message"] == "Not available on saturday"
    assert body["is_available_today"] is False


def test_slots_holiday(client, db, slot_settings, valet, frozen_now):
    db.add(ValetHoliday(valet_id=valet.valet_id, holiday_date=NEXT_MONDAY))
    db.commit()

    response = client.get(f"/api/availability/slots/{valet.valet_id}/{NEXT_MONDAY.isoformat()}")

    assert response.json()["message"] == "Holiday"
    assert response.json()["slots"] == []


def test_slots_rejects_bad_date_format(client, slot_settings, valet):
    response = client.get(f"/api/availability/slots/{valet.valet_id}/07-01-2030")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid date format. Expected YYYY-MM-DD"


def test_batch_and_detail_agree(client, db, slot_settings, valet, frozen_now):
    make_booking(db, valet, TUESDAY, "13:30")
    make_booking(db, valet, TUESDAY, "13:30")
    make_booking(db, valet, TUESDAY, "13:30")
    dates = [MONDAY, TUESDAY, SATURDAY, NEXT_MONDAY]

    batch = client.post(
        "/api/availability/batch",
        json={"valet_id": valet.valet_id, "dates": [d.isoformat() for d in dates]},
    ).json()["availability"]

    for day in dates:
        detail = client.get(f"/api/availability/slots/{valet.valet_id}/{day.isoformat()}").json()
        assert batch[day.isoformat()] == {
            "available": detail["available_slots"],
            "total": detail["total_slots_available"],
        }
