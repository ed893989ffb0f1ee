"""Application configuration objects."""

import os
import sys
from typing import Any, Dict

from dotenv import load_dotenv

if getattr(sys, "frozen", False):
    load_dotenv(os.path.join(sys._MEIPASS, ".env"))
else:
    load_dotenv()


class Config:
    """Base configuration for the Tally dashboard."""

    # -------------------------
    # Hosted store (Supabase)
    # -------------------------
    SUPABASE_URL = os.getenv("SUPABASE_URL")
    SUPABASE_KEY = os.getenv("SUPABASE_KEY")

    # -------------------------
    # Logging
    # -------------------------
    LOG_LEVEL = os.getenv("TALLY_LOG_LEVEL", "INFO")

    # -------------------------
    # Tables
    # -------------------------
    STARTUPS_TABLE = "startups"
    ATTACHMENTS_TABLE = "attachments"
    FILE_TYPES_TABLE = "file_type_distribution"
    USER_ACTIVITY_TABLE = "user_activity"

    # -------------------------
    # Time-series sources
    # -------------------------
    # date_column is re-keyed to "date" on fetch. A metric mapped from None
    # counts records instead of summing a column.
    SERIES: Dict[str, Dict[str, Any]] = {
        "checkins": {
            "table": "StartupCheckIns",
            "select": "Id, StartupName, CheckInTime, CheckInRole, AcceleratorName",
            "date_column": "CheckInTime",
            "search_column": "StartupName",
            "require_search": True,
            "collapse_days": True,
            "metrics": {"count": "Check-ins"},
            "value_fields": {"count": None},
        },
        "attachments": {
            "table": "daily_attachment_metrics",
            "select": "*",
            "date_column": "date",
            "metrics": {
                "total_uploads": "Uploads",
                "unique_users": "Active Users",
                "total_size": "Storage Used",
                "successful_uploads": "Successful Uploads",
                "failed_uploads": "Failed Uploads",
            },
        },
        "storage": {
            "table": "storage_metrics",
            "select": "*",
            "date_column": "date",
            "metrics": {
                "total_storage": "Total Storage",
                "storage_growth": "Storage Growth",
            },
        },
    }

    # -------------------------
    # UI defaults
    # -------------------------
    DEFAULT_GRANULARITY = os.getenv("TALLY_DEFAULT_GRANULARITY", "monthly")
    PAGE_SIZE = int(os.getenv("TALLY_PAGE_SIZE", "10"))
    MAX_PAGE_SIZE = 100
    SEARCH_LIMIT = 10
    TOP_USERS_LIMIT = 10
    EXPORT_LIMIT = 5000
    PIE_TOP_N = 8
    RECENT_DAYS = 7

    # Attachment columns the table may be sorted by
    ATTACHMENT_SORT_COLUMNS = (
        "upload_timestamp",
        "file_name",
        "file_type",
        "file_size",
        "user_id",
        "upload_status",
    )


__all__ = ["Config"]
