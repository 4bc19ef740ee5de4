from datetime import date
import logging

import streamlit as st

from cleansweep.booking_flow import generate_confirmation_text, quote_request, validate_booking
from cleansweep.booking_store import create_booking
from cleansweep.config import AppConfig
from cleansweep.pricing import (
    ADD_ON_OPTIONS,
    SERVICE_TYPES,
    SERVICE_TYPE_LABELS,
    bathroom_label,
    bathroom_options,
    bedroom_label,
    bedroom_options,
)
from cleansweep.scheduling import SchedulingError, suggest_booking_time

logger = logging.getLogger(__name__)


def _reset_suggestion():
    st.session_state.suggestion = None


def render_booking_form(cfg: AppConfig):
    st.title("🧽 Book Your Cleaning Service")
    st.caption("Fill out the form below to get an instant quote and schedule your cleaning.")

    if "suggestion" not in st.session_state:
        st.session_state.suggestion = None

    c1, c2 = st.columns(2)
    name = c1.text_input("Full Name", placeholder="John Doe")
    email = c2.text_input("Email Address", placeholder="you@example.com")

    service_date = st.date_input(
        "Preferred Service Date",
        value=None,
        min_value=date.today(),
        on_change=_reset_suggestion,
    )

    c1, c2, c3 = st.columns(3)
    service_type = c1.selectbox(
        "Cleaning Type",
        SERVICE_TYPES,
        format_func=lambda v: SERVICE_TYPE_LABELS[v],
        on_change=_reset_suggestion,
    )
    bedrooms = c2.selectbox(
        "Bedrooms", bedroom_options(), format_func=bedroom_label, on_change=_reset_suggestion
    )
    bathrooms = c3.selectbox(
        "Bathrooms", bathroom_options(), format_func=bathroom_label, on_change=_reset_suggestion
    )

    st.write("**Optional Add-ons**")
    add_on_cols = st.columns(3)
    add_ons = [
        opt["id"]
        for i, opt in enumerate(ADD_ON_OPTIONS)
        if add_on_cols[i % 3].checkbox(f"{opt['label']} (+${opt['price']})", key=f"addon-{opt['id']}")
    ]

    # --- Scheduling suggestion ---
    if service_date is not None and st.button("✨ Suggest a time slot"):
        with st.spinner("Finding the best time slot and crafting a reminder for you..."):
            try:
                st.session_state.suggestion = suggest_booking_time(
                    service_type, bedrooms, bathrooms, service_date.isoformat(), cfg
                )
            except SchedulingError as e:
                logger.error(f"Scheduling suggestion failed: {e}")
                st.session_state.suggestion = None
                st.warning("Could not fetch scheduling suggestion at this time.")

    suggestion = st.session_state.suggestion
    if suggestion is not None:
        st.info(
            f"We suggest booking for **{suggestion.suggested_time}** on your selected date.\n\n"
            f"**Proposed Reminder:** \"{suggestion.reminder_notice}\""
        )

    # --- Quote ---
    st.divider()
    quote = quote_request(
        {
            "service_type": service_type,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "add_ons": add_ons,
        }
    )
    if quote["success"]:
        st.subheader(f"Estimated Quote: ${quote['price']:.2f}")
    else:
        st.error(quote["error"])

    if not st.button("Book Now", type="primary", disabled=not quote["success"]):
        return

    validation = validate_booking(
        {
            "name": name,
            "email": email,
            "service_type": service_type,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "add_ons": add_ons,
            "service_date": service_date.isoformat() if service_date else None,
            "service_time": suggestion.suggested_time if suggestion else None,
            "quote": quote["price"],
            "status": "pending",
            "reminder_notice": suggestion.reminder_notice if suggestion else None,
        }
    )
    if not validation.ok:
        for msg in validation.errors.values():
            st.error(f"⚠️ {msg}")
        return

    result = create_booking(validation.booking)
    if not result["success"]:
        st.error(f"Booking Failed: {result['error']}")
        return

    st.success(
        f"🎉 **Booking Submitted!** Your booking ID is `{result['booking_id']}`. "
        "We will contact you shortly."
    )
    st.markdown(generate_confirmation_text(validation.booking))
    st.session_state.suggestion = None
