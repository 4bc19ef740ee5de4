from __future__ import annotations

import logging

import streamlit as st

from cleansweep.admin_dashboard import render_admin_dashboard
from cleansweep.booking_form import render_booking_form
from cleansweep.config import ConfigError, load_config
from cleansweep.pricing import SERVICE_TYPE_LABELS

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

PAGES = ["Home", "Book a Cleaning", "Admin Dashboard"]

WHY_CHOOSE_US = [
    ("Professional & Reliable",
     "Our experienced and vetted cleaners ensure a consistently high-quality service."),
    ("Easy Online Booking",
     "Get instant quotes and book your cleaning service online in just a few clicks."),
    ("Tailored to Your Needs",
     "Choose from various cleaning types and add-ons to perfectly match your requirements."),
]


# --- CSS STYLING ---
def inject_custom_css():
    st.markdown("""
    <style>
        .hero {
            text-align: center;
            padding: 3rem 1rem;
            border-radius: 12px;
            background: linear-gradient(90deg, #e0f2fe, #ffffff, #e0f2fe);
        }
        .hero h1 { color: #0369a1; }

        /* --- Hide Footer for clean look --- */
        footer {visibility: hidden;}
    </style>
    """, unsafe_allow_html=True)


def render_homepage():
    st.markdown(
        """
        <div class="hero">
            <h1>Austin Clean Sweep</h1>
            <p>Your trusted partner for sparkling clean homes and Airbnbs in Austin, TX.
            Get an instant quote and book your cleaning in minutes!</p>
        </div>
        """,
        unsafe_allow_html=True,
    )

    st.header("Why Choose Us?")
    for col, (title, text) in zip(st.columns(len(WHY_CHOOSE_US)), WHY_CHOOSE_US):
        col.subheader(title)
        col.write(text)

    st.header("Our Services")
    for col, label in zip(st.columns(len(SERVICE_TYPE_LABELS)), SERVICE_TYPE_LABELS.values()):
        col.success(f"✅ {label}")

    st.info("👉 Open **Book a Cleaning** in the sidebar to get your instant quote.")


def main():
    st.set_page_config(
        page_title="Austin Clean Sweep",
        page_icon="🧹",
        layout="wide",
    )

    inject_custom_css()
    try:
        cfg = load_config()
    except (ConfigError, FileNotFoundError) as e:
        logger.critical(f"Startup aborted: {e}")
        st.error(f"CRITICAL: {e}")
        st.stop()

    with st.sidebar:
        st.title("Navigation")
        page = st.radio("Go to", PAGES)

    if page == "Home":
        render_homepage()
    elif page == "Book a Cleaning":
        render_booking_form(cfg)
    else:
        render_admin_dashboard(cfg)


if __name__ == "__main__":
    main()
