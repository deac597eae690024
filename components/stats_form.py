"""
Stats Form Component
====================
Daily counters entry form and the day summary card
"""

import streamlit as st
import sys
from pathlib import Path

# parent directory import
sys.path.insert(0, str(Path(__file__).parent.parent))
from config import STAT_FIELDS

from data.aggregator import format_number
from data.models import ProductStat
from data.session import DashboardSession


def stats_form_key(product, date: str, stat: ProductStat) -> str:
    """Widget key for the entry form

    Includes the saved counters, so a save from another session (or a reset)
    gives the inputs new keys and they reload the stored values.
    """
    saved = "-".join(str(v) for v in stat.to_dict().values())
    return f"stats_form_{product}_{date}_{saved}"


def render_stats_form(session: DashboardSession) -> None:
    """
    Entry form for the selected product on the current date

    Switching product or date, or a remote change to the saved counters,
    reloads the form.
    """
    stat = session.todays_stat
    form_key = stats_form_key(session.selected_product, session.current_date, stat)

    with st.form(form_key):
        st.markdown("#### إحصاءات اليوم")

        values = {}
        for field_name, label in STAT_FIELDS.items():
            values[field_name] = st.number_input(
                label,
                min_value=0,
                value=max(int(getattr(stat, field_name)), 0),
                step=1,
                key=f"{form_key}_{field_name}",
            )

        submitted = st.form_submit_button("حفظ", type="primary", use_container_width=True)

    if submitted:
        if session.save_stats(ProductStat(**values)):
            st.rerun()


def render_day_summary(session: DashboardSession) -> None:
    """Saved counters for the day plus yesterday's unanswered calls"""
    stat = session.todays_stat

    with st.container(border=True):
        st.markdown(f"#### ملخص اليوم ({session.current_date})")

        rows = [
            ("طلبيات اليوم", stat.total_for_day),
            ("تم توصيلها", stat.delivered),
            ("مؤكدة", stat.confirmed),
            ("ملغاة", stat.cancelled_company),
            ("لم يرد (اليوم)", stat.no_answer),
            ("لم يرد (الأمس)", session.yesterdays_no_answer),
        ]
        for label, value in rows:
            col1, col2 = st.columns([3, 1])
            col1.write(f"{label}:")
            col2.markdown(f"**{format_number(value)}**")
