from datetime import datetime

import streamlit as st


def _short(text, limit=160):
    return text if len(text) <= limit else text[:limit].rstrip() + "..."


def show_library_view(shell):
    library = shell.state.library
    if not library:
        st.info("Library is empty. Generate a study guide and save it for later.")
        return

    st.subheader("Saved for later")
    for bundle in library:
        with st.container(border=True):
            st.caption(f"{bundle.subject.value} · Gr {bundle.grade}")
            st.markdown(f"#### {bundle.topic}")
            st.write(_short(bundle.summary))
            col1, col2, col3 = st.columns([2, 1, 1])
            col1.caption(datetime.fromtimestamp(bundle.created_at / 1000).strftime("%d %b %Y"))
            if col2.button("Open", key=f"open_{bundle.id}", use_container_width=True):
                shell.open_bundle(bundle)
                st.rerun()
            if col3.button("Delete", key=f"del_{bundle.id}", use_container_width=True):
                shell.delete(bundle.id)
                st.rerun()
