"""Streamlit views. Each ``show_*`` function renders one screen for a Shell."""
