# filter_params.py
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Iterable, List, Optional, Sequence

from tally.utils.timeseries import TimedRecord, filter_by_date_range

ALL_FILE_TYPES = "all"

# characters that would split a PostgREST or=(...) expression
_OR_RESERVED = str.maketrans("", "", ",()")


@dataclass(frozen=True)
class FilterParams:
    start: Optional[date] = None
    end: Optional[date] = None
    granularity: str = "monthly"
    search: str = ""
    file_type: Optional[str] = None
    metric: Optional[str] = None
    fill_gaps: bool = False

    # -------- in-memory path --------
    def apply(self, records: Iterable[TimedRecord], date_key: str = "date") -> List[TimedRecord]:
        """Return the records inside the inclusive ``[start, end]`` date range."""
        return filter_by_date_range(records, self.start, self.end, date_key=date_key)

    def metrics(self) -> List[str]:
        return [m.strip() for m in (self.metric or "").split(",") if m.strip()]

    def has_search(self) -> bool:
        return bool(self.search.strip())

    def search_pattern(self) -> str:
        return f"%{self.search.strip()}%"

    def end_exclusive(self) -> Optional[str]:
        """First day after ``end``, so timestamp columns include the whole day."""
        if self.end is None or self.end >= date.max:
            return None
        return (self.end + timedelta(days=1)).isoformat()

    # -------- query builder helpers --------
    def to_query(
        self,
        query: Any,
        date_column: Optional[str] = None,
        search_columns: Sequence[str] = (),
        file_type_column: Optional[str] = None,
    ) -> Any:
        """
        Apply the filters to a Supabase/PostgREST query builder and return it.

        INTERSECTION (AND) of:
          - date range on date_column: ``>= start`` and ``< end + 1 day``
          - case-insensitive substring search, OR-ed across search_columns
          - exact file type (skipped for "all")
        """
        if date_column:
            if self.start is not None:
                query = query.gte(date_column, self.start.isoformat())
            if self.end_exclusive() is not None:
                query = query.lt(date_column, self.end_exclusive())

        if search_columns and self.has_search():
            if len(search_columns) == 1:
                query = query.ilike(search_columns[0], self.search_pattern())
            else:
                term = self.search.strip().translate(_OR_RESERVED)
                query = query.or_(",".join(f"{col}.ilike.%{term}%" for col in search_columns))

        if file_type_column and self.file_type and self.file_type != ALL_FILE_TYPES:
            query = query.eq(file_type_column, self.file_type)

        return query
