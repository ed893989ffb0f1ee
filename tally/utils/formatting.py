"""Display formatting helpers."""

from __future__ import annotations

import math
from typing import Union

BYTE_UNITS = ("Bytes", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")


def format_bytes(num_bytes: Union[int, float, None], decimals: int = 2) -> str:
    """Render a byte count with a binary unit, e.g. ``1.5 KB``."""
    if not num_bytes or num_bytes <= 0:
        return "0 Bytes"
    decimals = max(decimals, 0)
    exponent = int(math.floor(math.log(num_bytes) / math.log(1024)))
    exponent = min(max(exponent, 0), len(BYTE_UNITS) - 1)
    value = round(num_bytes / math.pow(1024, exponent), decimals)
    return f"{value:g} {BYTE_UNITS[exponent]}"


__all__ = ["BYTE_UNITS", "format_bytes"]
