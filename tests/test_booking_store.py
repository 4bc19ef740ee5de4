"""Tests for booking persistence against an in-memory Supabase stand-in."""
from unittest.mock import patch

from cleansweep.booking_flow import validate_booking
from cleansweep.booking_store import (
    create_booking,
    delete_booking,
    list_bookings,
    update_booking_status,
)


def _create(client, data, **overrides):
    booking = validate_booking({**data, **overrides}).booking
    result = create_booking(booking, client=client)
    assert result["success"], result
    return result["booking_id"]


def test_create_sets_timestamps_and_pending_status(fake_supabase, booking_data):
    booking_id = _create(fake_supabase, booking_data)

    row = fake_supabase.tables["bookings"][0]
    assert row["id"] == booking_id
    assert row["status"] == "pending"
    assert row["add_ons"] == ["fridge", "windows"]
    assert row["created_at"] == row["updated_at"]


def test_list_orders_by_date_then_creation(fake_supabase, booking_data):
    with patch("cleansweep.booking_store._now", side_effect=["t1", "t2", "t3"]):
        early = _create(fake_supabase, booking_data, service_date="2026-11-01")
        late_first = _create(fake_supabase, booking_data, service_date="2026-11-05")
        late_second = _create(fake_supabase, booking_data, service_date="2026-11-05")

    result = list_bookings(client=fake_supabase)

    assert result["success"]
    assert [b.id for b in result["bookings"]] == [late_second, late_first, early]


def test_list_filters_by_status_and_date(fake_supabase, booking_data):
    keep = _create(fake_supabase, booking_data, service_date="2026-11-05", status="confirmed")
    _create(fake_supabase, booking_data, service_date="2026-11-05")
    _create(fake_supabase, booking_data, service_date="2026-11-06", status="confirmed")

    result = list_bookings(status="confirmed", service_date="2026-11-05", client=fake_supabase)

    assert [b.id for b in result["bookings"]] == [keep]


def test_confirmed_update_is_visible_with_later_timestamp(fake_supabase, booking_data):
    with patch(
        "cleansweep.booking_store._now",
        side_effect=["2026-10-19T10:00:00+00:00", "2026-10-19T11:00:00+00:00"],
    ):
        booking_id = _create(fake_supabase, booking_data)
        assert update_booking_status(booking_id, "confirmed", client=fake_supabase) == {
            "success": True,
            "error": None,
        }

    booking = list_bookings(client=fake_supabase)["bookings"][0]
    assert booking.status == "confirmed"
    assert booking.updated_at > booking.created_at


def test_any_status_can_follow_any_other(fake_supabase, booking_data):
    booking_id = _create(fake_supabase, booking_data, status="cancelled")
    assert update_booking_status(booking_id, "pending", client=fake_supabase)["success"]


def test_invalid_status_is_rejected_without_round_trip(fake_supabase):
    fake_supabase.error = AssertionError("should not be called")
    result = update_booking_status("bk-1", "archived", client=fake_supabase)
    assert not result["success"]
    assert "archived" in result["error"]


def test_update_missing_booking_fails(fake_supabase):
    result = update_booking_status("nope", "confirmed", client=fake_supabase)
    assert not result["success"]


def test_deleted_booking_is_omitted_from_listing(fake_supabase, booking_data):
    gone = _create(fake_supabase, booking_data)
    kept = _create(fake_supabase, booking_data)

    assert delete_booking(gone, client=fake_supabase)["success"]

    ids = [b.id for b in list_bookings(client=fake_supabase)["bookings"]]
    assert ids == [kept]
    assert not delete_booking(gone, client=fake_supabase)["success"]


def test_database_errors_become_generic_failures(fake_supabase, booking_data):
    booking = validate_booking(booking_data).booking
    fake_supabase.error = RuntimeError("connection reset")

    assert create_booking(booking, client=fake_supabase) == {
        "success": False,
        "booking_id": None,
        "error": "Failed to create booking.",
    }
    listed = list_bookings(client=fake_supabase)
    assert listed["bookings"] == [] and listed["error"] == "Failed to load bookings."
    assert update_booking_status("bk-1", "completed", client=fake_supabase)["error"] == (
        "Failed to update booking status."
    )
    assert delete_booking("bk-1", client=fake_supabase)["error"] == "Failed to delete booking."
