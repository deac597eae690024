"""Dashboard Components"""
from components.header import render_navigation, render_entry_header
from components.stats_form import render_stats_form, render_day_summary
from components.statistics_page import render_statistics_page

__all__ = [
    'render_navigation', 'render_entry_header',
    'render_stats_form', 'render_day_summary',
    'render_statistics_page',
]
