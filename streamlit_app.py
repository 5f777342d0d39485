import streamlit as st

from studygenie import config, gemini
from studygenie.logging import setup_logging
from studygenie.shell import Shell, View
from studygenie.storage import JsonFileStore, LibraryStore
from studygenie.ui.create import show_create_view
from studygenie.ui.library import show_library_view
from studygenie.ui.results import forget_view_state, show_results
from studygenie.ui.settings import show_settings_view
from studygenie.ui.solve import show_solve_view
from studygenie.ui.theme import apply_theme, header

# --- PAGE CONFIGURATION ---
st.set_page_config(page_title=config.APP_NAME, page_icon=config.PAGE_ICON, layout="wide", initial_sidebar_state="expanded")

NAV_LABELS = {
    View.CREATE: "🧞 Course Genie",
    View.SOLVE: "🧠 Deepmind",
    View.SAVED: "📚 My Library",
    View.SETTINGS: "⚙️ App Settings",
}


@st.cache_resource
def get_store():
    return JsonFileStore(config.DATA_DIR)


def get_shell():
    """One Shell per browser session, loading the library on first use."""
    if "shell" not in st.session_state:
        st.session_state.shell = Shell(LibraryStore(get_store()))
    return st.session_state.shell


def navigate(shell, view):
    forget_view_state()
    shell.navigate(view)


def show_sidebar(shell):
    st.sidebar.title(config.APP_NAME)
    # Views can navigate too (saving settings returns to create)
    if st.session_state.get("last_nav_choice") not in (None, shell.state.active_view):
        st.session_state.nav_choice = shell.state.active_view
        st.session_state.last_nav_choice = shell.state.active_view
    choice = st.sidebar.radio("Navigate", list(View), format_func=NAV_LABELS.get, key="nav_choice")
    if st.session_state.get("last_nav_choice") != choice:
        st.session_state.last_nav_choice = choice
        navigate(shell, choice)
    st.sidebar.divider()
    st.sidebar.caption(f"{len(shell.state.library)} saved guides")


# --- MAIN APP ---
def main():
    setup_logging()
    api_key = config.api_key()
    if not api_key:
        st.error("Gemini API key not found. Add [gemini] api_key to .streamlit/secrets.toml or set GEMINI_API_KEY."); st.stop()
    gemini.configure(api_key)

    shell = get_shell()
    show_sidebar(shell)
    apply_theme(shell.state.preferences.theme)

    if header(show_back=shell.state.bundle is not None):
        forget_view_state()
        shell.close_bundle()
        st.rerun()

    if shell.state.bundle is not None:
        show_results(shell)
        return

    view_map = {
        View.CREATE: show_create_view,
        View.SOLVE: show_solve_view,
        View.SAVED: show_library_view,
        View.SETTINGS: show_settings_view,
    }
    view_map[shell.state.active_view](shell)


if __name__ == "__main__":
    main()
