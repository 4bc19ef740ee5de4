from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, MutableMapping, Optional
import logging

import streamlit as st

from cleansweep.config import AppConfig
from cleansweep.db.database import create_auth_client

logger = logging.getLogger(__name__)

ADMIN_SESSION_KEY = "admin_user"


@dataclass
class AdminUser:
    user_id: str
    email: str


def is_admin_email(email: Optional[str], admin_email: str) -> bool:
    if not email or not admin_email:
        return False
    return email.strip().lower() == admin_email.strip().lower()


def current_admin(session_state: Optional[MutableMapping[str, Any]] = None) -> Optional[AdminUser]:
    if session_state is None:
        session_state = st.session_state
    return session_state.get(ADMIN_SESSION_KEY)


def sign_in_admin(
    email: str,
    password: str,
    cfg: AppConfig,
    session_state: Optional[MutableMapping[str, Any]] = None,
    client=None,
) -> Dict[str, Any]:
    """
    Password sign-in against Supabase Auth. Only the configured admin account
    is let through; any other account is signed out again.
    """
    if session_state is None:
        session_state = st.session_state
    if client is None:
        client = create_auth_client(cfg)

    try:
        response = client.auth.sign_in_with_password({"email": email, "password": password})
    except Exception as e:
        logger.warning(f"Admin sign-in failed for {email}: {e}")
        return {"success": False, "user": None, "error": "Invalid email or password."}

    user = response.user
    if user is None or not is_admin_email(user.email, cfg.admin.email):
        logger.warning(f"Non-admin account {email} tried to open the dashboard")
        try:
            client.auth.sign_out()
        except Exception as e:
            logger.error(f"Sign-out after refused login failed: {e}")
        return {
            "success": False,
            "user": None,
            "error": "You are not authorized to access the admin panel.",
        }

    admin = AdminUser(user_id=str(user.id), email=user.email)
    session_state[ADMIN_SESSION_KEY] = admin
    session_state["auth_client"] = client
    logger.info(f"Admin {admin.email} signed in")
    return {"success": True, "user": admin, "error": None}


def sign_out_admin(session_state: Optional[MutableMapping[str, Any]] = None) -> None:
    if session_state is None:
        session_state = st.session_state

    client = session_state.pop("auth_client", None)
    admin = session_state.pop(ADMIN_SESSION_KEY, None)
    if client is not None:
        try:
            client.auth.sign_out()
        except Exception as e:
            logger.error(f"Error signing out: {e}")
    if admin is not None:
        logger.info(f"Admin {admin.email} signed out")
