"""
Dashboard Configuration
=======================
Orders tracker dashboard settings
"""

import os

# Supabase tables
APP_DATA_TABLE = "app_data"
DAILY_STATS_TABLE = "daily_stats"
PRODUCTS_ROW_ID = "products"

# Supabase functions (supabase_schema.sql) for atomic catalog edits
CATALOG_ADD_FUNCTION = "catalog_add"
CATALOG_REMOVE_FUNCTION = "catalog_remove"

# True: remote store via st.secrets["supabase"], False: in-memory demo store
USE_SUPABASE = os.getenv("ORDERS_TRACKER_USE_SUPABASE", "1") == "1"

# Demo data for the in-memory store
SEED_DEMO_DATA = True
DEMO_DAYS = 21

# Toast lifetime (seconds)
TOAST_DURATION_SECONDS = 3

# Supabase change polling interval (seconds)
REFRESH_INTERVAL_SECONDS = 5

# Logging
LOG_LEVEL = os.getenv("ORDERS_TRACKER_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# ProductStat field labels (form order)
STAT_FIELDS = {
    'total_for_day': 'إجمالي طلبيات اليوم',
    'delivered': 'تم توصيلها (ليفري)',
    'confirmed': 'مؤكدة',
    'cancelled_company': 'ملغاة (شركة التوصيل)',
    'no_answer': 'لم يرد',
}

# Pages
PAGES = {
    'entry': 'إدخال البيانات',
    'stats': 'الإحصائيات',
}

ALL_PRODUCTS_LABEL = 'كل المنتجات'
