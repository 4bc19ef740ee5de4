# cleansweep/db/models.py
"""
Supabase does not require ORM model classes; the dataclass below only maps
rows of the `bookings` table to Python objects.

Table: bookings
- id (uuid, PK, default gen_random_uuid())
- name (text)
- email (text)
- service_type (text)
- bedrooms (int)
- bathrooms (int)
- add_ons (jsonb, array of add-on ids)
- service_date (text, YYYY-MM-DD)
- service_time (text, HH:MM, nullable)
- quote (numeric)
- status (text)
- calendar_event_id (text, nullable)
- reminder_notice (text, nullable)
- created_at (timestamptz)
- updated_at (timestamptz)
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any


BOOKINGS_TABLE = "bookings"

BOOKING_STATUSES = ["pending", "confirmed", "completed", "cancelled"]


@dataclass
class Booking:
    id: str
    name: str
    email: str
    service_type: str
    bedrooms: int
    bathrooms: int
    service_date: str
    quote: float
    status: str
    add_ons: List[str] = field(default_factory=list)
    service_time: Optional[str] = None
    calendar_event_id: Optional[str] = None
    reminder_notice: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Booking":
        return cls(
            id=str(row["id"]),
            name=row["name"],
            email=row["email"],
            service_type=row["service_type"],
            bedrooms=int(row["bedrooms"]),
            bathrooms=int(row["bathrooms"]),
            service_date=row["service_date"],
            quote=row["quote"],
            status=row["status"],
            add_ons=list(row.get("add_ons") or []),
            service_time=row.get("service_time"),
            calendar_event_id=row.get("calendar_event_id"),
            reminder_notice=row.get("reminder_notice"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
