"""Data access over the hosted Supabase store."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx
from supabase import Client, PostgrestAPIError, SupabaseException, create_client

from tally.utils.filter_params import FilterParams
from tally.utils.pagination import page_bounds

logger = logging.getLogger("tally")


class DataStoreError(RuntimeError):
    """The hosted store could not be reached or rejected a query."""


class DataStore:
    """Own the store client and every read the dashboard makes.

    Storage backend: Supabase (PostgREST) through the ``supabase`` client.
    - Time-series sources: Config.SERIES, rows re-keyed to ``date``
    - Lookup tables: startups, attachments, file types, user activity

    Pass ``client`` to use a preconfigured or fake query builder.
    """

    def __init__(self, config: Mapping[str, Any], metrics: "Metrics", client: Optional[Client] = None):
        self.config = config
        self.metrics = metrics
        self._client = client

    # ---------- client helpers ----------

    def is_configured(self) -> bool:
        return self._client is not None or bool(
            self.config.get("SUPABASE_URL") and self.config.get("SUPABASE_KEY")
        )

    def _connect(self) -> Client:
        if self._client is None:
            url = self.config.get("SUPABASE_URL")
            key = self.config.get("SUPABASE_KEY")
            if not url or not key:
                raise DataStoreError("SUPABASE_URL and SUPABASE_KEY must be configured")
            try:
                self._client = create_client(url, key)
            except SupabaseException as e:
                logger.error("Could not create Supabase client for %s: %s", url, e)
                raise DataStoreError("Invalid Supabase configuration") from e
            logger.info("Connected Supabase client to %s", url)
        return self._client

    def _table(self, name: str):
        return self._connect().table(name)

    def _execute(self, query, what: str):
        try:
            return query.execute()
        except (PostgrestAPIError, httpx.HTTPError) as e:
            logger.error("Error fetching %s: %s", what, e)
            raise DataStoreError(f"Failed to fetch {what}") from e

    # ---------- time series ----------

    def series_config(self, source: str) -> Dict[str, Any]:
        series = self.config.get("SERIES", {})
        if source not in series:
            raise ValueError(f"Unknown series source: {source!r}")
        return series[source]

    def fetch_records(self, source: str, params: FilterParams) -> List[Dict[str, Any]]:
        """Fetch the rows of a time-series source, ascending by date.

        The source's date column is copied to ``date`` so the rows can go
        straight into the aggregator. Sources that require a search term
        return nothing without one.
        """
        spec = self.series_config(source)
        search_column = spec.get("search_column")
        if spec.get("require_search") and not params.has_search():
            return []

        date_column = spec["date_column"]
        query = (
            self._table(spec["table"])
            .select(spec.get("select", "*"))
            .order(date_column, desc=False)
        )
        query = params.to_query(
            query,
            date_column=date_column,
            search_columns=[search_column] if search_column else (),
        )
        rows = self._execute(query, f"{source} records").data or []
        logger.info("Fetched %d %s record(s)", len(rows), source)
        return [{**row, "date": row.get(date_column)} for row in rows]

    def fetch_recent_metrics(self, days: Optional[int] = None) -> List[Dict[str, Any]]:
        """Last ``days`` daily attachment rows, oldest first."""
        days = days or int(self.config.get("RECENT_DAYS", 7))
        spec = self.series_config("attachments")
        query = (
            self._table(spec["table"])
            .select("*")
            .order(spec["date_column"], desc=True)
            .limit(days)
        )
        rows = self._execute(query, "recent attachment metrics").data or []
        return list(reversed(rows))

    def fetch_latest_storage(self) -> Optional[Dict[str, Any]]:
        spec = self.series_config("storage")
        query = (
            self._table(spec["table"])
            .select("*")
            .order(spec["date_column"], desc=True)
            .limit(1)
        )
        rows = self._execute(query, "latest storage metrics").data or []
        return rows[0] if rows else None

    # ---------- lookups ----------

    def search_startups(self, term: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        if not term or not term.strip():
            return []
        limit = limit or int(self.config.get("SEARCH_LIMIT", 10))
        query = (
            self._table(self.config.get("STARTUPS_TABLE", "startups"))
            .select("*")
            .ilike("name", f"%{term.strip()}%")
            .order("name")
            .limit(limit)
        )
        return self._execute(query, "startups").data or []

    def fetch_attachments(
        self,
        params: FilterParams,
        page: int = 1,
        per_page: Optional[int] = None,
        sort: str = "upload_timestamp",
        descending: bool = True,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """One page of attachment rows plus the total matching count."""
        per_page = per_page or int(self.config.get("PAGE_SIZE", 10))
        first, last = page_bounds(page, per_page)

        query = self._table(self.config.get("ATTACHMENTS_TABLE", "attachments")).select(
            "*", count="exact"
        )
        query = params.to_query(
            query,
            date_column="upload_timestamp",
            search_columns=("file_name", "user_id"),
            file_type_column="file_type",
        )
        query = query.order(sort, desc=descending).range(first, last)

        resp = self._execute(query, "attachments")
        rows = resp.data or []
        count = resp.count if resp.count is not None else len(rows)
        return rows, int(count)

    def fetch_file_type_distribution(self) -> List[Dict[str, Any]]:
        query = (
            self._table(self.config.get("FILE_TYPES_TABLE", "file_type_distribution"))
            .select("*")
            .order("count", desc=True)
        )
        return self._execute(query, "file type distribution").data or []

    def fetch_file_types(self) -> List[str]:
        query = (
            self._table(self.config.get("FILE_TYPES_TABLE", "file_type_distribution"))
            .select("file_type")
            .order("file_type", desc=False)
        )
        rows = self._execute(query, "file types").data or []
        return [str(row["file_type"]) for row in rows if row.get("file_type")]

    def fetch_user_activity(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        limit = limit or int(self.config.get("TOP_USERS_LIMIT", 10))
        query = (
            self._table(self.config.get("USER_ACTIVITY_TABLE", "user_activity"))
            .select("*")
            .order("upload_count", desc=True)
            .limit(limit)
        )
        return self._execute(query, "user activity").data or []


__all__ = ["DataStore", "DataStoreError"]
