import os
from pathlib import Path
from typing import Optional

import streamlit as st

# --- CONFIGURATION & CONSTANTS ---
APP_NAME = "StudyGenie"
PAGE_ICON = "🧞"
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_PUBLISHER = "Oxford University Press"
DATA_DIR = Path("user_data")

# Durable storage keys, one JSON record each
LIBRARY_KEY = "studyGenie_courses"
SETTINGS_KEY = "studyGenie_settings"


def _secret(name: str) -> Optional[str]:
    try:
        return st.secrets["gemini"][name]
    except (KeyError, FileNotFoundError):
        return None


def api_key() -> Optional[str]:
    """Gemini key from st.secrets ([gemini] api_key), else GEMINI_API_KEY."""
    return _secret("api_key") or os.getenv("GEMINI_API_KEY")


def model_name() -> str:
    return _secret("model") or os.getenv("GEMINI_MODEL") or DEFAULT_MODEL
