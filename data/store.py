"""
Data Store Abstraction Layer
============================
Product catalog / daily records storage with live subscriptions

A subscription delivers the current snapshot immediately and then a full
replacement snapshot on every change. The returned callable tears it down.
"""

import copy
import inspect
import logging
import threading
import weakref
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from data.models import DailyRecord, ProductStat

logger = logging.getLogger(__name__)

CatalogListener = Callable[[List[str]], None]
RecordsListener = Callable[[Dict[str, DailyRecord]], None]
Unsubscribe = Callable[[], None]


class StoreError(Exception):
    """A remote store operation failed."""


class DataStore(ABC):
    """Base class for catalog / daily records stores"""

    def __init__(self):
        self._listeners_lock = threading.RLock()
        self._catalog_listeners: list = []
        self._records_listeners: list = []

    # ---------- reads ----------

    @abstractmethod
    def fetch_product_catalog(self) -> List[str]:
        """Current ordered product names"""
        pass

    @abstractmethod
    def fetch_daily_records(self) -> Dict[str, DailyRecord]:
        """Current daily records keyed by ISO date"""
        pass

    # ---------- writes ----------

    @abstractmethod
    def save_product_stat(self, date: str, product_name: str, stat: ProductStat) -> None:
        """
        Merge one product's stat into the record for ``date``

        Parameters
        ----------
        date : str
            ISO date (YYYY-MM-DD), record is created if missing
        product_name : str
            Product whose entry is replaced
        stat : ProductStat
            New counters; other products of the same date are kept
        """
        pass

    @abstractmethod
    def add_product(self, name: str) -> None:
        """Append ``name`` to the catalog if absent"""
        pass

    @abstractmethod
    def remove_product(self, name: str) -> None:
        """Remove ``name`` from the catalog if present (history is kept)"""
        pass

    @abstractmethod
    def delete_all_daily_records(self) -> None:
        """Delete every daily record at once; the catalog is untouched"""
        pass

    def refresh(self) -> bool:
        """Re-read remote state and notify listeners. Returns True on change."""
        return False

    def ensure_catalog(self) -> None:
        """Create the empty catalog if the store has none yet"""
        pass

    # ---------- subscriptions ----------

    def subscribe_product_catalog(self, on_change: CatalogListener) -> Unsubscribe:
        self.ensure_catalog()
        return self._subscribe(self._catalog_listeners, on_change, self._initial_catalog())

    def subscribe_daily_records(self, on_change: RecordsListener) -> Unsubscribe:
        return self._subscribe(self._records_listeners, on_change, self._initial_records())

    def _initial_catalog(self) -> List[str]:
        """Snapshot handed to a new catalog subscriber"""
        return self.fetch_product_catalog()

    def _initial_records(self) -> Dict[str, DailyRecord]:
        """Snapshot handed to a new records subscriber"""
        return self.fetch_daily_records()

    def _subscribe(self, listeners: list, on_change, snapshot) -> Unsubscribe:
        entry = _ListenerRef(on_change)
        with self._listeners_lock:
            listeners.append(entry)

        def unsubscribe():
            with self._listeners_lock:
                if entry in listeners:
                    listeners.remove(entry)

        try:
            on_change(snapshot)
        except Exception:
            unsubscribe()
            raise
        return unsubscribe

    def _live_listeners(self, listeners: list) -> list:
        """Callables still alive; entries of collected owners are dropped"""
        with self._listeners_lock:
            alive = []
            for entry in list(listeners):
                callback = entry()
                if callback is None:
                    listeners.remove(entry)
                else:
                    alive.append(callback)
            return alive

    def listener_count(self) -> int:
        return len(self._live_listeners(self._catalog_listeners)) + len(self._live_listeners(self._records_listeners))

    def _notify_catalog(self, names: Optional[List[str]] = None) -> None:
        listeners = self._live_listeners(self._catalog_listeners)
        if not listeners:
            return
        if names is None:
            names = self.fetch_product_catalog()
        self._dispatch(listeners, names)

    def _notify_records(self, records: Optional[Dict[str, DailyRecord]] = None) -> None:
        listeners = self._live_listeners(self._records_listeners)
        if not listeners:
            return
        if records is None:
            records = self.fetch_daily_records()
        self._dispatch(listeners, records)

    @staticmethod
    def _dispatch(listeners: list, snapshot) -> None:
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception:
                # one broken listener must not block the others
                logger.exception("Listener %r failed", listener)


class _ListenerRef:
    """Holds a listener; bound methods weakly, so a dropped owner unsubscribes"""

    def __init__(self, callback):
        if inspect.ismethod(callback):
            self._ref = weakref.WeakMethod(callback)
        else:
            self._ref = lambda: callback

    def __call__(self):
        return self._ref()


class InMemoryStore(DataStore):
    """Process-local store (demo mode and tests)

    Writes notify listeners synchronously, so subscribers always see the
    new state before the write call returns.
    """

    def __init__(self, products: Optional[List[str]] = None, records: Optional[Dict[str, DailyRecord]] = None):
        super().__init__()
        self._lock = threading.RLock()
        self._products: List[str] = list(products or [])
        self._records: Dict[str, DailyRecord] = copy.deepcopy(records or {})

    def fetch_product_catalog(self) -> List[str]:
        with self._lock:
            return list(self._products)

    def fetch_daily_records(self) -> Dict[str, DailyRecord]:
        with self._lock:
            return copy.deepcopy(self._records)

    def save_product_stat(self, date: str, product_name: str, stat: ProductStat) -> None:
        with self._lock:
            record = self._records.get(date)
            if record is None:
                record = DailyRecord(date=date)
                self._records[date] = record
            record.products[product_name] = copy.copy(stat)
        logger.info("Saved stats for %s on %s", product_name, date)
        self._notify_records()

    def add_product(self, name: str) -> None:
        with self._lock:
            if name in self._products:
                return
            self._products.append(name)
        logger.info("Added product %s", name)
        self._notify_catalog()

    def remove_product(self, name: str) -> None:
        with self._lock:
            if name not in self._products:
                return
            self._products = [p for p in self._products if p != name]
        logger.info("Removed product %s", name)
        self._notify_catalog()

    def delete_all_daily_records(self) -> None:
        with self._lock:
            count = len(self._records)
            self._records = {}
        logger.info("Deleted %d daily records", count)
        self._notify_records()
