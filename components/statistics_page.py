"""
Statistics Page Component
=========================
Filtered cumulative statistics, daily trend (Plotly) and reset

- product filter over every product found in history
- optional inclusive date range
- totals + rates as metric cards
"""

import streamlit as st
import pandas as pd
import plotly.graph_objects as go
from datetime import date
from typing import Optional
import sys
from pathlib import Path

# parent directory import
sys.path.insert(0, str(Path(__file__).parent.parent))
from config import ALL_PRODUCTS_LABEL

from data.aggregator import (
    aggregate_stats,
    daily_breakdown,
    format_number,
    format_percent,
    historical_products,
)
from data.models import CumulativeStats
from data.session import DashboardSession


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def render_filters(session: DashboardSession) -> dict:
    """
    Product / date range filter row

    Returns
    -------
    dict
        {'product': Optional[str], 'start_date': Optional[str], 'end_date': Optional[str]}
    """
    st.markdown("### فلترة الإحصائيات")

    col1, col2, col3 = st.columns([2, 1, 1])

    with col1:
        product = st.selectbox(
            "عرض إحصائيات لـ:",
            options=[None] + historical_products(session.all_stats),
            format_func=lambda x: ALL_PRODUCTS_LABEL if x is None else x,
            key="stats_product_filter",
        )

    with col2:
        start = st.date_input("من تاريخ:", value=None, key="stats_start_date")

    with col3:
        end = st.date_input("إلى تاريخ:", value=None, key="stats_end_date")

    return {
        'product': product,
        'start_date': _iso(start),
        'end_date': _iso(end),
    }


def render_stat_cards(stats: CumulativeStats, product: Optional[str]) -> None:
    """Totals row and rates row"""
    st.markdown(f"### الإحصائيات المجمعة: {ALL_PRODUCTS_LABEL if product is None else product}")

    col1, col2, col3, col4, col5 = st.columns(5)
    col1.metric("إجمالي الطلبيات", format_number(stats.total_orders))
    col2.metric("تم توصيلها", format_number(stats.total_delivered))
    col3.metric("مؤكدة", format_number(stats.total_confirmed))
    col4.metric("ملغاة", format_number(stats.total_cancelled))
    col5.metric("لم يرد", format_number(stats.total_no_answer))

    col1, col2, col3, col4, col5 = st.columns(5)
    col1.metric("نسبة النجاح", format_percent(stats.success_rate))
    col2.metric("نسبة التأكيد", format_percent(stats.confirmation_rate))
    col3.metric("نسبة التوصيل", format_percent(stats.delivery_after_confirmation_rate))
    col4.metric("نسبة لم يرد", format_percent(stats.no_answer_rate))
    col5.metric("نسبة الإلغاء", format_percent(stats.cancellation_rate))


def create_trend_plot(df: pd.DataFrame) -> go.Figure:
    """
    Plotly line plot of the daily totals

    Args:
        df: daily_breakdown() output
    """
    fig = go.Figure()

    if df.empty:
        fig.add_annotation(
            text="لا توجد بيانات للفترة المحددة.",
            xref="paper", yref="paper",
            x=0.5, y=0.5, showarrow=False,
            font=dict(size=16)
        )
        return fig

    series = [
        ('total_orders', 'إجمالي الطلبيات', '#4169E1'),
        ('total_delivered', 'تم توصيلها', '#2E8B57'),
        ('total_confirmed', 'مؤكدة', '#DAA520'),
        ('total_cancelled', 'ملغاة', '#FF6347'),
        ('total_no_answer', 'لم يرد', '#8B008B'),
    ]
    for column, name, color in series:
        fig.add_trace(go.Scatter(
            x=df['date'],
            y=df[column],
            mode='markers+lines',
            marker=dict(size=6, color=color),
            line=dict(color=color, width=2),
            name=name,
            hovertemplate='%{x|%Y-%m-%d}<br>%{y:,}<extra></extra>'
        ))

    fig.update_layout(
        xaxis=dict(
            tickformat="%m/%d",
            showgrid=True,
            gridcolor='rgba(128,128,128,0.2)'
        ),
        yaxis=dict(
            showgrid=True,
            gridcolor='rgba(128,128,128,0.2)'
        ),
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=1.02,
            xanchor="right",
            x=1
        ),
        hovermode='x unified',
        height=380,
        margin=dict(l=50, r=20, t=40, b=50)
    )

    return fig


@st.dialog("تصفير جميع الإحصائيات")
def reset_confirm_dialog(session: DashboardSession):
    """Reset confirmation modal"""
    st.warning("هل أنت متأكد من حذف جميع الإحصائيات؟ لا يمكن التراجع عن هذا الإجراء.")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("نعم، احذف الكل", type="primary", use_container_width=True):
            session.reset_all_stats()
            st.rerun()
    with col2:
        if st.button("إلغاء", use_container_width=True):
            st.rerun()


def render_danger_zone(session: DashboardSession) -> None:
    with st.container(border=True):
        st.markdown("#### منطقة الخطر")
        st.write("سيؤدي هذا الإجراء إلى حذف جميع بيانات الإحصائيات اليومية بشكل دائم. لن يتم حذف قائمة منتجاتك.")
        if st.button("تصفير جميع الإحصائيات", key="reset_all_stats"):
            reset_confirm_dialog(session)


def render_statistics_page(session: DashboardSession) -> None:
    """Statistics page"""
    filters = render_filters(session)

    stats = aggregate_stats(session.all_stats, **filters)
    render_stat_cards(stats, filters['product'])

    st.markdown("---")
    st.markdown("### التطور اليومي")
    df = daily_breakdown(session.all_stats, **filters)
    st.plotly_chart(create_trend_plot(df), use_container_width=True)

    st.markdown("---")
    render_danger_zone(session)
