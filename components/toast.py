"""
Toast Component
===============
Renders the session's active toasts, re-checked every second so they
disappear once expired.
"""

import streamlit as st

from data.notifications import ToastQueue

TOAST_RENDERERS = {
    'success': st.success,
    'error': st.error,
    'warning': st.warning,
    'info': st.info,
}


@st.fragment(run_every=1)
def render_toasts(queue: ToastQueue):
    for toast in queue.active():
        TOAST_RENDERERS[toast.type](toast.message)
