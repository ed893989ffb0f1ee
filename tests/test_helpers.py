"""Tests for formatting and pagination helpers."""

import pytest

from tally.utils.formatting import format_bytes
from tally.utils.pagination import ELLIPSIS, page_bounds, page_window, total_pages


@pytest.mark.parametrize(
    "num_bytes,expected",
    [
        (0, "0 Bytes"),
        (None, "0 Bytes"),
        (500, "500 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (2.25 * 1024 * 1024, "2.25 MB"),
        (10737418240, "10 GB"),
    ],
)
def test_format_bytes(num_bytes, expected):
    assert format_bytes(num_bytes) == expected


def test_format_bytes_decimals():
    assert format_bytes(1234567, decimals=0) == "1 MB"


@pytest.mark.parametrize(
    "current,pages,expected",
    [
        (1, 1, [1]),
        (2, 5, [1, 2, 3, 4, 5]),
        (1, 12, [1, 2, 3, 4, ELLIPSIS, 12]),
        (6, 12, [1, ELLIPSIS, 5, 6, 7, ELLIPSIS, 12]),
        (12, 12, [1, ELLIPSIS, 9, 10, 11, 12]),
    ],
)
def test_page_window(current, pages, expected):
    assert page_window(current, pages) == expected


def test_total_pages():
    assert total_pages(0, 10) == 1
    assert total_pages(20, 10) == 2
    assert total_pages(21, 10) == 3


def test_page_bounds():
    assert page_bounds(1, 10) == (0, 9)
    assert page_bounds(3, 25) == (50, 74)
    assert page_bounds(0, 10) == (0, 9)
