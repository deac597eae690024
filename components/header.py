"""
Header Component
================
Page title, navigation and the data-entry selectors
"""

import streamlit as st
from datetime import date
import sys
from pathlib import Path

# parent directory import
sys.path.insert(0, str(Path(__file__).parent.parent))
from config import PAGES

from data.session import DashboardSession


def render_navigation() -> str:
    """
    Sidebar navigation

    Returns
    -------
    str
        Selected page key ('entry' / 'stats')
    """
    with st.sidebar:
        st.markdown("### متتبع الطلبيات")
        page = st.radio(
            "القائمة",
            options=list(PAGES.keys()),
            format_func=lambda x: PAGES[x],
            key="page",
        )
    return page


def render_entry_header(session: DashboardSession) -> bool:
    """
    Product selector, manager button and date picker

    Parameters
    ----------
    session : DashboardSession
        Current dashboard session

    Returns
    -------
    bool
        True if the product manager button was clicked
    """
    col1, col2, col3 = st.columns([3, 1, 2])

    with col1:
        if session.products:
            index = session.products.index(session.selected_product) \
                if session.selected_product in session.products else 0
            selected = st.selectbox(
                "المنتج",
                options=session.products,
                index=index,
            )
            session.select_product(selected)
        else:
            st.selectbox("المنتج", options=["أضف منتجاً لتبدأ"], disabled=True)

    with col2:
        st.write("")
        manage_clicked = st.button("إدارة المنتجات", type="primary", use_container_width=True)

    with col3:
        picked = st.date_input(
            "التاريخ",
            value=date.fromisoformat(session.current_date),
        )
        session.set_date(picked.isoformat())

    return manage_clicked
