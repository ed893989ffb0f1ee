"""Metrics service utilities."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

from tally.utils.timeseries import ChartPoint


class Metrics:
    """Encapsulate per-source metric mapping and helper routines."""

    def __init__(self, series: Mapping[str, Mapping[str, Any]]):
        self.mapping: Dict[str, Dict[str, str]] = {
            source: dict(spec.get("metrics", {})) for source, spec in series.items()
        }
        self._value_fields: Dict[str, Dict[str, Optional[str]]] = {
            source: dict(spec.get("value_fields", {})) for source, spec in series.items()
        }

    def sources(self) -> List[str]:
        return list(self.mapping)

    def label(self, source: str, key: Optional[str]) -> str:
        if not key:
            return ""
        return self.mapping.get(source, {}).get(key, key)

    def validate(self, source: str, metric: Optional[str]) -> Optional[str]:
        """Return ``metric`` if the source defines it, else None."""
        if not metric:
            return None
        if metric in self.mapping.get(source, {}):
            return metric
        return None

    def available(self, source: str) -> List[Tuple[str, str]]:
        return list(self.mapping.get(source, {}).items())

    def value_field(self, source: str, metric: str) -> Optional[str]:
        """Record field holding ``metric``; None means count records."""
        fields = self._value_fields.get(source, {})
        return fields[metric] if metric in fields else metric

    @staticmethod
    def compute_stats(points: Sequence[ChartPoint]) -> Dict[str, Union[float, int]]:
        """Total, peak and average-per-bucket over a chart series."""
        s = pd.Series([p.value for p in points], dtype="float64")
        if s.empty:
            return {"total": 0.0, "peak": 0.0, "average": 0.0, "buckets": 0}
        return {
            "total": float(s.sum()),
            "peak": float(s.max()),
            "average": float(s.mean()),
            "buckets": int(len(s)),
        }


__all__ = ["Metrics"]
