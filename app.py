"""
Orders Tracker Dashboard - main entry point
===========================================
Daily order fulfilment statistics per product

Run:
    streamlit run app.py
"""

import logging
import streamlit as st
import sys
from pathlib import Path

# add current directory to path
sys.path.insert(0, str(Path(__file__).parent))

import config
from data.mock_data import get_demo_store
from data.session import DashboardSession, ensure_session
from data.store import DataStore, InMemoryStore, StoreError
from data.supabase_client import SupabaseStore, get_supabase_client

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format=config.LOG_FORMAT,
    datefmt=config.LOG_DATE_FORMAT,
)
logger = logging.getLogger(__name__)

# page settings
st.set_page_config(
    page_title="متتبع الطلبيات",
    page_icon="📦",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_store() -> DataStore:
    """Process-wide store shared by every browser session"""
    if config.USE_SUPABASE:
        client = get_supabase_client()
        if client is not None:
            logger.info("Using Supabase store")
            return SupabaseStore(client)
        logger.warning("Supabase unavailable, falling back to in-memory demo store")

    return get_demo_store(days=config.DEMO_DAYS, seed_records=config.SEED_DEMO_DATA)


def get_session() -> DashboardSession:
    """This browser session's DashboardSession (subscribed on first use)"""
    session = ensure_session(st.session_state.get('dashboard_session'), get_store())
    st.session_state.dashboard_session = session
    return session


@st.fragment(run_every=config.REFRESH_INTERVAL_SECONDS)
def live_sync(session: DashboardSession):
    """Rerun the page whenever the cached data changed since the last render"""
    session.refresh()
    if session.version != st.session_state.get('rendered_version'):
        st.rerun()


def entry_page(session: DashboardSession):
    """Data entry page"""
    from components.header import render_entry_header
    from components.product_manager import product_manager_dialog
    from components.stats_form import render_stats_form, render_day_summary

    if render_entry_header(session):
        product_manager_dialog(session)

    if not session.selected_product:
        st.info("الرجاء اختيار منتج أو إضافة منتج جديد للبدء.")
        return

    col_left, col_right = st.columns([1, 1])
    with col_left:
        render_stats_form(session)
    with col_right:
        render_day_summary(session)


def stats_page(session: DashboardSession):
    """Statistics page"""
    from components.statistics_page import render_statistics_page
    render_statistics_page(session)


def main():
    """Main"""
    from components.header import render_navigation
    from components.toast import render_toasts

    # CSS (right-to-left layout)
    st.markdown("""
    <style>
        .main, .stMarkdown, .stRadio, .stSelectbox, .stNumberInput, .stDateInput, .stTextInput {
            direction: rtl;
            text-align: right;
        }
        [data-testid="stMetric"] {
            background-color: #f8f9fa;
            border: 1px solid #dee2e6;
            padding: 10px;
            border-radius: 5px;
        }
    </style>
    """, unsafe_allow_html=True)

    st.title("📦 متتبع الطلبيات")

    try:
        session = get_session()
    except StoreError as e:
        logger.exception("Failed to load data")
        st.error(f"تعذر تحميل البيانات: {e}")
        return

    if session.is_loading:
        st.info("جارٍ التحميل...")
        return

    if isinstance(session.store, InMemoryStore):
        st.info("وضع تجريبي: البيانات محفوظة في الذاكرة فقط.")

    st.session_state['rendered_version'] = session.version

    page = render_navigation()
    render_toasts(session.toasts)

    if page == 'stats':
        stats_page(session)
    else:
        entry_page(session)

    live_sync(session)


if __name__ == "__main__":
    main()
