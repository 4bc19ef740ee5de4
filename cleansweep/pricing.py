from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple


# ---------------------- SERVICE CATALOGUE ----------------------

SERVICE_TYPES = ["standard", "deep", "move-in/out", "airbnb"]

SERVICE_TYPE_LABELS = {
    "standard": "Standard Cleaning",
    "deep": "Deep Cleaning",
    "move-in/out": "Move-In/Out Cleaning",
    "airbnb": "Airbnb Cleaning",
}

BEDROOM_RANGE = (1, 4)
BATHROOM_RANGE = (1, 3)


# ---------------------- PRICE TABLES ----------------------

# (bedrooms, bathrooms) -> base price per service type
BASE_PRICES: Dict[Tuple[int, int], Dict[str, int]] = {
    (1, 1): {"standard": 100, "deep": 160, "move-in/out": 150, "airbnb": 120},
    (1, 2): {"standard": 120, "deep": 190, "move-in/out": 180, "airbnb": 140},
    (1, 3): {"standard": 140, "deep": 220, "move-in/out": 210, "airbnb": 160},
    (2, 1): {"standard": 130, "deep": 220, "move-in/out": 200, "airbnb": 150},
    (2, 2): {"standard": 150, "deep": 250, "move-in/out": 230, "airbnb": 170},
    (2, 3): {"standard": 170, "deep": 280, "move-in/out": 260, "airbnb": 190},
    (3, 1): {"standard": 160, "deep": 280, "move-in/out": 250, "airbnb": 180},
    (3, 2): {"standard": 180, "deep": 310, "move-in/out": 280, "airbnb": 200},
    (3, 3): {"standard": 200, "deep": 340, "move-in/out": 310, "airbnb": 220},
    (4, 1): {"standard": 190, "deep": 340, "move-in/out": 300, "airbnb": 210},
    (4, 2): {"standard": 220, "deep": 370, "move-in/out": 340, "airbnb": 250},
    (4, 3): {"standard": 250, "deep": 400, "move-in/out": 380, "airbnb": 290},
}

ADD_ON_OPTIONS = [
    {"id": "fridge", "label": "Fridge Cleaning", "price": 25},
    {"id": "oven", "label": "Oven Cleaning", "price": 25},
    {"id": "cabinets", "label": "Inside Cabinets", "price": 25},
    {"id": "windows", "label": "Inside Windows", "price": 30},
    {"id": "linen", "label": "Linen Change", "price": 20},
    {"id": "laundry", "label": "Laundry Service", "price": 30},
    {"id": "petHair", "label": "Pet Hair Removal", "price": 30},
]

ADD_ON_PRICES: Dict[str, int] = {opt["id"]: opt["price"] for opt in ADD_ON_OPTIONS}


class PricingError(Exception):
    """Raised when the price table has no entry for a requested combination."""


# ---------------------- LABEL HELPERS ----------------------

def bedroom_label(count: int) -> str:
    return f"{count} Bedroom" if count == 1 else f"{count} Bedrooms"


def bathroom_label(count: int) -> str:
    return f"{count} Bathroom" if count == 1 else f"{count} Bathrooms"


def bedroom_options() -> List[int]:
    return list(range(BEDROOM_RANGE[0], BEDROOM_RANGE[1] + 1))


def bathroom_options() -> List[int]:
    return list(range(BATHROOM_RANGE[0], BATHROOM_RANGE[1] + 1))


# ---------------------- QUOTE ----------------------

def calculate_quote(
    service_type: str,
    bedrooms: int,
    bathrooms: int,
    add_ons: Optional[Iterable[str]] = None,
) -> int:
    """
    Base price for the (bedrooms, bathrooms, service_type) triple plus the
    surcharge of each add-on. Unknown add-ons add nothing and repeated
    add-ons are charged once.
    """
    entry = BASE_PRICES.get((bedrooms, bathrooms))
    if entry is None or service_type not in entry:
        raise PricingError(
            f"No base price configured for {bedrooms} bedroom(s), "
            f"{bathrooms} bathroom(s), service '{service_type}'."
        )

    total = entry[service_type]
    for add_on in dict.fromkeys(add_ons or []):
        total += ADD_ON_PRICES.get(add_on, 0)
    return total
