from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

import streamlit as st


DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


class ConfigError(Exception):
    """Raised when required secrets are missing or still hold placeholders."""


# ---------------------- DATA CLASSES ----------------------

@dataclass
class GeminiConfig:
    api_key: str
    model: str = DEFAULT_GEMINI_MODEL


@dataclass
class SupabaseConfig:
    url: str
    anon_key: str  # used for admin sign-in
    service_key: str  # used for table reads and writes


@dataclass
class AdminConfig:
    email: str


@dataclass
class AppConfig:
    gemini: GeminiConfig
    supabase: SupabaseConfig
    admin: AdminConfig


# ---------------------- LOADING ----------------------

def is_placeholder(value: Any) -> bool:
    if not value or not isinstance(value, str):
        return True
    value = value.strip()
    return value.startswith("YOUR_") or "PLACEHOLDER" in value or len(value) < 5


def _section_value(secrets: Mapping[str, Any], section: str, key: str) -> Optional[str]:
    if section not in secrets:
        return None
    return secrets[section].get(key)


def load_config(secrets: Optional[Mapping[str, Any]] = None) -> AppConfig:
    if secrets is None:
        secrets = st.secrets

    # --- Gemini (Google) ---
    # Checks for [google] section first, then falls back to [gemini]
    if "google" in secrets:
        gemini_section = "google"
    else:
        gemini_section = "gemini"
    api_key = _section_value(secrets, gemini_section, "api_key")
    if api_key is None:
        # Fallback for simple key entry
        api_key = secrets.get("google_api_key", "")
    model = _section_value(secrets, gemini_section, "model") or DEFAULT_GEMINI_MODEL

    values = {
        f"{gemini_section}.api_key": api_key,
        "supabase.url": _section_value(secrets, "supabase", "url"),
        "supabase.anon_key": _section_value(secrets, "supabase", "anon_key"),
        "supabase.service_key": _section_value(secrets, "supabase", "service_key"),
        "admin.email": _section_value(secrets, "admin", "email"),
    }

    problems: List[str] = [
        f"{name} (got {value!r})" for name, value in values.items() if is_placeholder(value)
    ]
    if problems:
        raise ConfigError(
            "Configuration is incomplete or contains placeholders. "
            "Set these keys in .streamlit/secrets.toml and restart the app:\n"
            + "\n".join(f"  - {p}" for p in problems)
        )

    return AppConfig(
        gemini=GeminiConfig(api_key=api_key.strip(), model=model),
        supabase=SupabaseConfig(
            url=values["supabase.url"].strip(),
            anon_key=values["supabase.anon_key"].strip(),
            service_key=values["supabase.service_key"].strip(),
        ),
        admin=AdminConfig(email=values["admin.email"].strip()),
    )
