from typing import List, Optional
import logging

import streamlit as st
import pandas as pd
import plotly.express as px

from cleansweep.auth import current_admin, sign_in_admin, sign_out_admin
from cleansweep.booking_store import delete_booking, list_bookings, update_booking_status
from cleansweep.config import AppConfig
from cleansweep.db.models import BOOKING_STATUSES, Booking

logger = logging.getLogger(__name__)

DISPLAY_COLUMNS = [
    "id", "name", "email", "service_type", "bedrooms", "bathrooms",
    "add_ons", "service_date", "service_time", "quote", "status",
]


def search_bookings(bookings: List[Booking], term: Optional[str]) -> List[Booking]:
    """Case-insensitive match on name, email or booking id."""
    if not term or not term.strip():
        return list(bookings)
    needle = term.strip().lower()
    return [
        b for b in bookings
        if needle in b.name.lower() or needle in b.email.lower() or needle in b.id.lower()
    ]


def bookings_to_frame(bookings: List[Booking]) -> pd.DataFrame:
    if not bookings:
        return pd.DataFrame(columns=DISPLAY_COLUMNS)
    df = pd.DataFrame([b.to_dict() for b in bookings])
    df["add_ons"] = df["add_ons"].apply(lambda items: ", ".join(items))
    return df[DISPLAY_COLUMNS]


def status_counts(df: pd.DataFrame) -> pd.Series:
    counts = df["status"].value_counts() if "status" in df.columns else pd.Series(dtype=int)
    return counts.reindex(BOOKING_STATUSES, fill_value=0)


def render_admin_login(cfg: AppConfig):
    st.title("🔐 Admin Login")
    st.caption("Enter your credentials to access the dashboard.")

    with st.form("admin-login"):
        email = st.text_input("Email", placeholder="admin@example.com")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login")

    if submitted:
        if not email or len(password) < 6:
            st.error("Please enter a valid email and a password of at least 6 characters.")
            return
        result = sign_in_admin(email, password, cfg)
        if result["success"]:
            st.success("Welcome, Admin!")
            st.rerun()
        else:
            st.error(result["error"])


def render_admin_dashboard(cfg: AppConfig):
    admin = current_admin()
    if admin is None:
        render_admin_login(cfg)
        return

    st.title("📊 Admin Dashboard")
    st.caption("Manage all customer bookings.")

    with st.sidebar:
        st.write(f"Signed in as **{admin.email}**")
        if st.button("Sign out"):
            sign_out_admin()
            st.rerun()

    # --- Filters ---
    f1, f2, f3 = st.columns([2, 1, 1])
    search_term = f1.text_input("Search by name, email, or ID")
    status_choice = f2.selectbox("Status", ["all"] + BOOKING_STATUSES)
    date_choice = f3.date_input("Service date", value=None)

    result = list_bookings(
        status=None if status_choice == "all" else status_choice,
        service_date=date_choice.isoformat() if date_choice else None,
    )
    if not result["success"]:
        st.error(result["error"])
        return

    bookings = search_bookings(result["bookings"], search_term)
    df = bookings_to_frame(bookings)

    # --- KPI Metrics ---
    counts = status_counts(df)
    cols = st.columns(len(BOOKING_STATUSES) + 1)
    cols[0].metric("Total Bookings", len(df))
    for col, status in zip(cols[1:], BOOKING_STATUSES):
        col.metric(status.capitalize(), int(counts[status]))

    if df.empty:
        st.info("No bookings found.")
        return

    chart = px.bar(
        x=counts.index, y=counts.values,
        labels={"x": "Status", "y": "Bookings"},
        title="Bookings by status",
    )
    st.plotly_chart(chart, use_container_width=True)

    # --- Main Data Table ---
    st.divider()
    st.subheader("Booking Management")
    st.dataframe(df, use_container_width=True, hide_index=True)

    booking_ids = [b.id for b in bookings]
    c1, c2 = st.columns(2)

    # --- Actions: Status ---
    with c1:
        st.write("### Update Status")
        status_id = st.selectbox("Booking ID", booking_ids, key="status-booking-id")
        new_status = st.selectbox("New status", BOOKING_STATUSES, key="status-new-value")
        if st.button("Update Status"):
            update = update_booking_status(status_id, new_status)
            if update["success"]:
                st.success(f"Booking {status_id} marked as {new_status}.")
                st.rerun()
            else:
                st.error(update["error"])

    # --- Actions: Delete ---
    with c2:
        st.write("### Delete Booking")
        delete_id = st.selectbox("Booking ID", booking_ids, key="delete-booking-id")
        confirmed = st.checkbox("I understand this permanently deletes the booking.")
        if st.button("Delete Booking", disabled=not confirmed):
            deletion = delete_booking(delete_id)
            if deletion["success"]:
                st.success(f"Booking {delete_id} has been deleted.")
                st.rerun()
            else:
                st.error(deletion["error"])

    # --- Actions: Export ---
    st.write("### Export")
    csv = df.to_csv(index=False).encode("utf-8")
    st.download_button(
        "📥 Download as CSV",
        csv,
        "bookings.csv",
        "text/csv",
        key="download-csv",
    )
