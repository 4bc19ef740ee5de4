from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, date, time
from typing import Optional, Dict, Any, List, Mapping, Tuple
import logging
import math
import re

from email_validator import validate_email as _validate_email, EmailNotValidError

from cleansweep.db.models import BOOKING_STATUSES
from cleansweep.pricing import (
    ADD_ON_PRICES,
    BATHROOM_RANGE,
    BEDROOM_RANGE,
    SERVICE_TYPE_LABELS,
    SERVICE_TYPES,
    PricingError,
    calculate_quote,
)

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)


@dataclass
class BookingRequest:
    name: str
    email: str
    service_type: str
    bedrooms: int
    bathrooms: int
    service_date: str
    quote: float
    status: str = "pending"
    add_ons: List[str] = field(default_factory=list)
    service_time: Optional[str] = None
    reminder_notice: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "service_type": self.service_type,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "add_ons": list(self.add_ons),
            "service_date": self.service_date,
            "service_time": self.service_time,
            "quote": self.quote,
            "status": self.status,
            "reminder_notice": self.reminder_notice,
        }


@dataclass
class ValidationResult:
    booking: Optional[BookingRequest] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def messages(self) -> List[str]:
        return [f"{name}: {msg}" for name, msg in self.errors.items()]


# ----------------- VALIDATORS ------------------------

def validate_email(email: str) -> bool:
    return normalize_email(email) is not None


def normalize_email(email: str) -> Optional[str]:
    try:
        return _validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError:
        return None


def parse_date_str(val: str) -> Optional[date]:
    if not isinstance(val, str) or not DATE_PATTERN.match(val.strip()):
        return None
    try:
        return datetime.strptime(val.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_time_str(val: str) -> Optional[time]:
    if not val or not isinstance(val, str):
        return None
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(val.strip(), fmt).time()
        except ValueError:
            continue
    return None


def parse_count(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        return int(value.strip())
    return None


def parse_amount(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(amount) or math.isinf(amount):
        return None
    return amount


# ----------------- FIELD CHECKS ------------------------

def _check_service_fields(
    data: Mapping[str, Any], errors: Dict[str, str]
) -> Tuple[Optional[str], Optional[int], Optional[int], List[str]]:
    service_type = data.get("service_type")
    if service_type not in SERVICE_TYPES:
        errors["service_type"] = (
            "Invalid service type. Choose one of: " + ", ".join(SERVICE_TYPES) + "."
        )
        service_type = None

    bedrooms = parse_count(data.get("bedrooms"))
    low, high = BEDROOM_RANGE
    if bedrooms is None or not low <= bedrooms <= high:
        errors["bedrooms"] = f"Bedrooms must be a whole number from {low} to {high}."
        bedrooms = None

    bathrooms = parse_count(data.get("bathrooms"))
    low, high = BATHROOM_RANGE
    if bathrooms is None or not low <= bathrooms <= high:
        errors["bathrooms"] = f"Bathrooms must be a whole number from {low} to {high}."
        bathrooms = None

    raw_add_ons = data.get("add_ons") or []
    add_ons: List[str] = []
    if isinstance(raw_add_ons, str) or not isinstance(raw_add_ons, (list, tuple, set, frozenset)):
        errors["add_ons"] = "Add-ons must be a list of add-on ids."
    else:
        unknown = [a for a in raw_add_ons if not isinstance(a, str) or a not in ADD_ON_PRICES]
        if unknown:
            errors["add_ons"] = "Unknown add-ons: " + ", ".join(str(a) for a in unknown) + "."
        else:
            # duplicates are dropped, first occurrence wins
            add_ons = list(dict.fromkeys(raw_add_ons))

    return service_type, bedrooms, bathrooms, add_ons


def validate_booking(data: Mapping[str, Any]) -> ValidationResult:
    """
    Check a booking submission and return either a normalized BookingRequest
    or a field -> message map of everything that is wrong with it.
    """
    errors: Dict[str, str] = {}

    # --- Name ---
    raw_name = data.get("name")
    name = raw_name.strip() if isinstance(raw_name, str) else ""
    if not name:
        errors["name"] = "Name is required."
    elif len(name) < 2:
        errors["name"] = "Name must be at least 2 characters."

    # --- Email ---
    raw_email = data.get("email")
    email = None
    if not raw_email or not isinstance(raw_email, str):
        errors["email"] = "Email is required."
    else:
        email = normalize_email(raw_email.strip())
        if email is None:
            errors["email"] = "Invalid email. Please try format: name@example.com"

    # --- Service ---
    service_type, bedrooms, bathrooms, add_ons = _check_service_fields(data, errors)

    # --- Date ---
    service_date = data.get("service_date")
    if not service_date:
        errors["service_date"] = "Service date is required."
    elif parse_date_str(service_date) is None:
        errors["service_date"] = "Invalid date format. Please use YYYY-MM-DD."

    # --- Time (optional) ---
    service_time = data.get("service_time") or None
    if service_time is not None:
        parsed_time = parse_time_str(service_time)
        if parsed_time is None:
            errors["service_time"] = "Invalid time format. Please use HH:MM."
        else:
            service_time = parsed_time.strftime("%H:%M")

    # --- Quote ---
    quote = parse_amount(data.get("quote"))
    if quote is None:
        errors["quote"] = "Quote is required."
    elif quote < 0:
        errors["quote"] = "Quote cannot be negative."

    # --- Status ---
    status = data.get("status") or "pending"
    if status not in BOOKING_STATUSES:
        errors["status"] = "Invalid status. Choose one of: " + ", ".join(BOOKING_STATUSES) + "."

    if errors:
        return ValidationResult(errors=errors)

    reminder = data.get("reminder_notice")
    booking = BookingRequest(
        name=name,
        email=email,
        service_type=service_type,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        service_date=service_date.strip(),
        quote=quote,
        status=status,
        add_ons=add_ons,
        service_time=service_time,
        reminder_notice=reminder.strip() if isinstance(reminder, str) and reminder.strip() else None,
    )
    return ValidationResult(booking=booking)


# ----------------- QUOTES ------------------------

def quote_request(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate the pricing inputs of a form and price them."""
    errors: Dict[str, str] = {}
    service_type, bedrooms, bathrooms, add_ons = _check_service_fields(data, errors)
    if errors:
        return {
            "success": False,
            "price": None,
            "error": "Invalid input: " + "; ".join(f"{k}: {v}" for k, v in errors.items()),
        }

    try:
        price = calculate_quote(service_type, bedrooms, bathrooms, add_ons)
    except PricingError as e:
        logger.error(f"Quote lookup failed: {e}")
        return {
            "success": False,
            "price": None,
            "error": "Invalid service configuration for base price.",
        }

    return {"success": True, "price": price, "error": None}


# ----------------- SUMMARY ------------------------

def generate_confirmation_text(booking: BookingRequest) -> str:
    # Use Markdown bullet points to force new lines
    add_ons = ", ".join(booking.add_ons) if booking.add_ons else "None"
    return (
        f"- **Name:** {booking.name}\n"
        f"- **Email:** {booking.email}\n"
        f"- **Service:** {SERVICE_TYPE_LABELS.get(booking.service_type, booking.service_type)}"
        f" ({booking.bedrooms} bed / {booking.bathrooms} bath)\n"
        f"- **Add-ons:** {add_ons}\n"
        f"- **Date:** {booking.service_date}\n"
        f"- **Time:** {booking.service_time or 'To be confirmed'}\n"
        f"- **Quote:** ${booking.quote:.2f}"
    )
