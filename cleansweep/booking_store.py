from typing import Dict, Any, Optional
from datetime import datetime, timezone
import logging

from cleansweep.booking_flow import BookingRequest
from cleansweep.db.database import get_supabase_client
from cleansweep.db.models import BOOKINGS_TABLE, BOOKING_STATUSES, Booking

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error_message(e: Exception) -> str:
    # postgrest APIError carries .message / .details
    if getattr(e, "message", None):
        return e.message
    if getattr(e, "details", None):
        return e.details
    return str(e)


# --- CREATE ------------------------------------------------------------------

def create_booking(booking: BookingRequest, client=None) -> Dict[str, Any]:
    try:
        supabase = client or get_supabase_client()

        timestamp = _now()
        row = booking.to_payload()
        row["created_at"] = timestamp
        row["updated_at"] = timestamp

        booking_insert = supabase.table(BOOKINGS_TABLE).insert(row).execute()
        if not booking_insert.data:
            raise RuntimeError("Failed to insert booking. No data returned.")

        booking_id = str(booking_insert.data[0]["id"])
        logger.info(f"Created booking {booking_id} for {booking.service_date}")
        return {"success": True, "booking_id": booking_id, "error": None}

    except Exception as e:
        logger.error(f"Error creating booking: {_error_message(e)}")
        return {"success": False, "booking_id": None, "error": "Failed to create booking."}


# --- LIST --------------------------------------------------------------------

def list_bookings(
    status: Optional[str] = None,
    service_date: Optional[str] = None,
    client=None,
) -> Dict[str, Any]:
    """
    Bookings newest service date first, then newest submission first.
    Filters are exact matches applied by the database.
    """
    try:
        supabase = client or get_supabase_client()

        query = supabase.table(BOOKINGS_TABLE).select("*")
        if status:
            query = query.eq("status", status)
        if service_date:
            query = query.eq("service_date", service_date)
        query = query.order("service_date", desc=True).order("created_at", desc=True)

        result = query.execute()
        bookings = [Booking.from_row(row) for row in result.data or []]
        return {"success": True, "bookings": bookings, "error": None}

    except Exception as e:
        logger.error(f"Error fetching bookings: {_error_message(e)}")
        return {"success": False, "bookings": [], "error": "Failed to load bookings."}


# --- UPDATE STATUS -----------------------------------------------------------

def update_booking_status(booking_id: str, status: str, client=None) -> Dict[str, Any]:
    if status not in BOOKING_STATUSES:
        return {"success": False, "error": f"Invalid status '{status}'."}

    try:
        supabase = client or get_supabase_client()
        result = (
            supabase.table(BOOKINGS_TABLE)
            .update({"status": status, "updated_at": _now()})
            .eq("id", booking_id)
            .execute()
        )
        if not result.data:
            return {"success": False, "error": f"Booking {booking_id} not found."}

    except Exception as e:
        logger.error(f"Error updating booking status: {_error_message(e)}")
        return {"success": False, "error": "Failed to update booking status."}

    if status == "confirmed":
        logger.info(f"Booking {booking_id} confirmed; calendar event not yet synced.")
    return {"success": True, "error": None}


# --- DELETE ------------------------------------------------------------------

def delete_booking(booking_id: str, client=None) -> Dict[str, Any]:
    try:
        supabase = client or get_supabase_client()
        result = supabase.table(BOOKINGS_TABLE).delete().eq("id", booking_id).execute()
        if not result.data:
            return {"success": False, "error": f"Booking {booking_id} not found."}

        logger.info(f"Deleted booking {booking_id}")
        return {"success": True, "error": None}

    except Exception as e:
        logger.error(f"Error deleting booking: {_error_message(e)}")
        return {"success": False, "error": "Failed to delete booking."}
