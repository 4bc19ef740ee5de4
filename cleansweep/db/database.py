# cleansweep/db/database.py

from __future__ import annotations

from typing import Optional

from supabase import create_client, Client
import streamlit as st

from cleansweep.config import AppConfig, load_config


def get_supabase_client(cfg: Optional[AppConfig] = None) -> Client:
    """
    Returns a cached Supabase client.
    Uses the service key because bookings are written from the public form
    and listed from the admin page, both of which need RLS bypass.
    """

    if "supabase_client" not in st.session_state:
        if cfg is None:
            cfg = load_config()
        st.session_state.supabase_client = create_client(
            cfg.supabase.url, cfg.supabase.service_key
        )

    return st.session_state.supabase_client


def create_auth_client(cfg: AppConfig) -> Client:
    """Fresh client on the anon key, used only for admin password sign-in."""
    return create_client(cfg.supabase.url, cfg.supabase.anon_key)
