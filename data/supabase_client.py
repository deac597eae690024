"""
Supabase Client for Dashboard
=============================

Product catalog / daily records on Supabase (see supabase_schema.sql)

- app_data     : id text primary key, list jsonb   (catalog row id='products')
- daily_stats  : date text primary key, products jsonb
"""

import copy
import logging
from typing import Dict, List, Optional

import streamlit as st
from supabase import create_client, Client

import config
from data.models import DailyRecord, ProductStat
from data.store import DataStore, StoreError

logger = logging.getLogger(__name__)


def get_supabase_client() -> Optional[Client]:
    """Create a Supabase client from st.secrets["supabase"], None on failure"""
    try:
        url = st.secrets["supabase"]["url"]
        key = st.secrets["supabase"]["key"]
        return create_client(url, key)
    except Exception as e:
        logger.warning("Supabase connection failed: %s", e)
        return None


class SupabaseStore(DataStore):
    """Supabase-backed store

    The synchronous client has no push channel, so changes are picked up
    by ``refresh()`` (called after every write and periodically by the app).
    """

    def __init__(
        self,
        client: Client,
        app_data_table: str = config.APP_DATA_TABLE,
        daily_stats_table: str = config.DAILY_STATS_TABLE,
        products_row_id: str = config.PRODUCTS_ROW_ID
    ):
        super().__init__()
        self.client = client
        self.app_data_table = app_data_table
        self.daily_stats_table = daily_stats_table
        self.products_row_id = products_row_id
        self._last_catalog: Optional[List[str]] = None
        self._last_records: Optional[Dict[str, DailyRecord]] = None

    # ---------- reads ----------

    def fetch_product_catalog(self) -> List[str]:
        try:
            response = self.client.table(self.app_data_table) \
                .select("list") \
                .eq("id", self.products_row_id) \
                .execute()
        except Exception as e:
            raise StoreError(f"Failed to load product catalog: {e}") from e

        if not response.data:
            return []
        return list(response.data[0].get("list") or [])

    def fetch_daily_records(self) -> Dict[str, DailyRecord]:
        try:
            response = self.client.table(self.daily_stats_table) \
                .select("date, products") \
                .execute()
        except Exception as e:
            raise StoreError(f"Failed to load daily stats: {e}") from e

        return {
            row["date"]: DailyRecord.from_dict(row["date"], row)
            for row in (response.data or [])
        }

    def ensure_catalog(self) -> None:
        """Insert the empty catalog row if it does not exist yet"""
        try:
            response = self.client.table(self.app_data_table) \
                .select("id") \
                .eq("id", self.products_row_id) \
                .execute()
            if not response.data:
                self.client.table(self.app_data_table) \
                    .insert({"id": self.products_row_id, "list": []}) \
                    .execute()
                logger.info("Created empty product catalog")
        except Exception as e:
            raise StoreError(f"Failed to initialise product catalog: {e}") from e

    # ---------- writes ----------

    def save_product_stat(self, date: str, product_name: str, stat: ProductStat) -> None:
        try:
            response = self.client.table(self.daily_stats_table) \
                .select("products") \
                .eq("date", date) \
                .execute()

            products = {}
            if response.data:
                products = dict(response.data[0].get("products") or {})
            products[product_name] = stat.to_dict()

            self.client.table(self.daily_stats_table) \
                .upsert({"date": date, "products": products}, on_conflict="date") \
                .execute()
        except Exception as e:
            raise StoreError(f"Failed to save stats for {product_name} on {date}: {e}") from e

        logger.info("Saved stats for %s on %s", product_name, date)
        self._refresh_after_write()

    def add_product(self, name: str) -> None:
        if self._edit_catalog(config.CATALOG_ADD_FUNCTION, name):
            logger.info("Added product %s", name)
            self._refresh_after_write()

    def remove_product(self, name: str) -> None:
        if self._edit_catalog(config.CATALOG_REMOVE_FUNCTION, name):
            logger.info("Removed product %s", name)
            self._refresh_after_write()

    def _edit_catalog(self, function: str, name: str) -> bool:
        """Run a catalog function in the database; True if the list changed"""
        try:
            response = self.client.rpc(
                function,
                {"catalog_id": self.products_row_id, "product_name": name}
            ).execute()
        except Exception as e:
            raise StoreError(f"Failed to update product catalog ({function} {name}): {e}") from e
        return bool(response.data)

    def delete_all_daily_records(self) -> None:
        """Single DELETE statement, so either every row goes or none does"""
        try:
            self.client.table(self.daily_stats_table) \
                .delete() \
                .neq("date", "") \
                .execute()
        except Exception as e:
            raise StoreError(f"Failed to delete daily stats: {e}") from e

        logger.info("Deleted all daily stats")
        self._refresh_after_write()

    # ---------- subscriptions ----------

    def _initial_catalog(self) -> List[str]:
        with self._listeners_lock:
            if self._last_catalog is None or not self._live_listeners(self._catalog_listeners):
                self._last_catalog = self.fetch_product_catalog()
            return list(self._last_catalog)

    def _initial_records(self) -> Dict[str, DailyRecord]:
        # new subscribers share the baseline refresh() diffs against
        with self._listeners_lock:
            if self._last_records is None or not self._live_listeners(self._records_listeners):
                self._last_records = self.fetch_daily_records()
            return copy.deepcopy(self._last_records)

    def refresh(self) -> bool:
        """Poll both tables, notify listeners of whatever changed"""
        changed = False

        if self._live_listeners(self._catalog_listeners):
            catalog = self.fetch_product_catalog()
            if catalog != self._last_catalog:
                self._last_catalog = catalog
                logger.debug("Product catalog changed (%d products)", len(catalog))
                self._notify_catalog(catalog)
                changed = True

        if self._live_listeners(self._records_listeners):
            records = self.fetch_daily_records()
            if records != self._last_records:
                self._last_records = records
                logger.debug("Daily stats changed (%d records)", len(records))
                self._notify_records(records)
                changed = True

        return changed

    def _refresh_after_write(self) -> None:
        # the write itself succeeded; a failed re-read is retried by the next poll
        try:
            self.refresh()
        except StoreError as e:
            logger.warning("Refresh after write failed: %s", e)
