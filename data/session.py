"""
Dashboard Session
=================
Read-through cache of the remote store plus the user actions

The session owns both live subscriptions. Use it as a context manager (or
call ``open()`` / ``close()``) so the subscriptions are always torn down.
Every subscription callback replaces the cached view wholesale.
"""

import logging
from datetime import date
from typing import Dict, List, Optional

from data.aggregator import previous_day_no_answer, stat_for_day
from data.models import DailyRecord, ProductStat
from data.notifications import ToastQueue
from data.store import DataStore, StoreError

logger = logging.getLogger(__name__)

MSG_SAVED = "تم حفظ الإحصاءات بنجاح!"
MSG_SAVE_FAILED = "فشل حفظ البيانات."
MSG_SELECT_PRODUCT = "الرجاء اختيار منتج أولاً."
MSG_PRODUCT_ADDED = 'تمت إضافة "{name}"'
MSG_PRODUCT_INVALID = "اسم المنتج موجود بالفعل أو فارغ."
MSG_PRODUCT_ADD_FAILED = 'فشل إضافة "{name}".'
MSG_PRODUCT_DELETED = 'تم حذف "{name}"'
MSG_PRODUCT_DELETE_FAILED = 'فشل حذف "{name}".'
MSG_RESET_DONE = "تم حذف جميع الإحصائيات بنجاح!"
MSG_RESET_FAILED = "حدث خطأ أثناء تصفير الإحصائيات."


class DashboardSession:
    """Cached catalog / records, current selection and action handlers"""

    def __init__(self, store: DataStore, current_date: Optional[str] = None, toasts: Optional[ToastQueue] = None):
        self.store = store
        self.toasts = toasts if toasts is not None else ToastQueue()
        self.products: List[str] = []
        self.all_stats: Dict[str, DailyRecord] = {}
        self.selected_product: Optional[str] = None
        self.current_date: str = current_date or date.today().isoformat()
        self.is_loading = True
        self.version = 0
        self._unsubscribers = []

    # ---------- lifecycle ----------

    def open(self) -> 'DashboardSession':
        if self._unsubscribers:
            return self
        unsubscribe_catalog = self.store.subscribe_product_catalog(self._on_catalog)
        try:
            unsubscribe_records = self.store.subscribe_daily_records(self._on_records)
        except Exception:
            unsubscribe_catalog()
            raise
        self._unsubscribers = [unsubscribe_catalog, unsubscribe_records]
        logger.debug("Session subscriptions opened")
        return self

    def close(self) -> None:
        unsubscribers, self._unsubscribers = self._unsubscribers, []
        for unsubscribe in unsubscribers:
            unsubscribe()
        if unsubscribers:
            logger.debug("Session subscriptions closed")

    @property
    def is_open(self) -> bool:
        return bool(self._unsubscribers)

    def __enter__(self) -> 'DashboardSession':
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def refresh(self) -> bool:
        """Pull remote changes (polling stores). True if anything changed."""
        try:
            return self.store.refresh()
        except StoreError as e:
            logger.warning("Refresh failed: %s", e)
            return False

    # ---------- subscription callbacks ----------

    def _on_catalog(self, names: List[str]) -> None:
        products = list(names)
        self.products = products
        self.version += 1
        # keep a still-valid selection, otherwise fall back to the first product
        if not products:
            self.selected_product = None
        elif self.selected_product not in products:
            self.selected_product = products[0]

    def _on_records(self, records: Dict[str, DailyRecord]) -> None:
        self.all_stats = records
        self.version += 1
        self.is_loading = False

    # ---------- selection ----------

    def select_product(self, name: Optional[str]) -> None:
        self.selected_product = name

    def set_date(self, date_str: str) -> None:
        date.fromisoformat(date_str)  # ValueError unless YYYY-MM-DD
        self.current_date = date_str

    @property
    def todays_stat(self) -> ProductStat:
        return stat_for_day(self.all_stats, self.current_date, self.selected_product)

    @property
    def yesterdays_no_answer(self) -> int:
        return previous_day_no_answer(self.all_stats, self.current_date, self.selected_product)

    # ---------- actions ----------

    def save_stats(self, stat: ProductStat) -> bool:
        """Save the selected product's stat for the current date"""
        if not self.selected_product:
            self.toasts.show(MSG_SELECT_PRODUCT, 'warning')
            return False

        try:
            self.store.save_product_stat(self.current_date, self.selected_product, stat)
        except StoreError:
            logger.exception("Error saving stats for %s on %s", self.selected_product, self.current_date)
            self.toasts.show(MSG_SAVE_FAILED, 'error')
            return False

        self.toasts.show(MSG_SAVED, 'success')
        return True

    def add_product(self, name: str) -> bool:
        name = (name or '').strip()
        if not name or name in self.products:
            self.toasts.show(MSG_PRODUCT_INVALID, 'warning')
            return False

        try:
            self.store.add_product(name)
        except StoreError:
            logger.exception("Error adding product %s", name)
            self.toasts.show(MSG_PRODUCT_ADD_FAILED.format(name=name), 'error')
            return False

        self.toasts.show(MSG_PRODUCT_ADDED.format(name=name), 'success')
        return True

    def delete_product(self, name: str) -> bool:
        """Remove from the catalog; saved history for the product stays"""
        try:
            self.store.remove_product(name)
        except StoreError:
            logger.exception("Error deleting product %s", name)
            self.toasts.show(MSG_PRODUCT_DELETE_FAILED.format(name=name), 'error')
            return False

        if self.selected_product == name:
            others = [p for p in self.products if p != name]
            self.selected_product = others[0] if others else None

        self.toasts.show(MSG_PRODUCT_DELETED.format(name=name), 'info')
        return True

    def reset_all_stats(self) -> bool:
        """Delete every daily record; the product list is kept"""
        try:
            self.store.delete_all_daily_records()
        except StoreError:
            logger.exception("Error resetting stats")
            self.toasts.show(MSG_RESET_FAILED, 'error')
            return False

        self.toasts.show(MSG_RESET_DONE, 'success')
        return True


def ensure_session(current: Optional[DashboardSession], store: DataStore, **kwargs) -> DashboardSession:
    """
    Return ``current`` if it is open on ``store``, otherwise close it and open a new one

    A browser session keeps one DashboardSession; replacing it (store swapped,
    session closed) must release the old subscriptions first.
    """
    if current is not None and current.is_open and current.store is store:
        return current
    if current is not None:
        current.close()
        logger.debug("Replacing dashboard session")
    return DashboardSession(store, **kwargs).open()
