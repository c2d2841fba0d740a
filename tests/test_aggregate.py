"""Tests for merging waste across coverage samples (agents/analyzers/aggregate.py)."""

from __future__ import annotations

from jswaste.agents.analyzers.aggregate import merge_waste
from jswaste.agents.analyzers.waste import WasteData, compute_waste
from jswaste.models.network import NetworkRecord
from tests.builders import make_coverage, make_record

_URL = "https://example.com/app.js"


def test_single_sample_ratio_scales_transfer_size() -> None:
    waste = [compute_waste(make_coverage(_URL, (0, 50, 0), (50, 100, 5)))]
    item = merge_waste(waste, make_record(_URL, 10_000))

    assert item.url == _URL
    assert item.total_bytes == 10_000
    assert item.wasted_bytes == 5000
    assert item.wasted_percent == 50.0
    assert item.multi is None


def test_samples_are_summed_not_averaged() -> None:
    unused = WasteData(unused_by_index=b"\x01" * 100, unused_length=100, content_length=100)
    used = WasteData(unused_by_index=b"\x00" * 100, unused_length=0, content_length=100)

    item = merge_waste([unused, used], make_record(_URL, 8000))

    assert item.wasted_bytes == 4000
    assert item.wasted_percent == 50.0


def test_sum_blends_samples_of_different_length() -> None:
    short = compute_waste(make_coverage(_URL, (0, 100, 0)))
    long = compute_waste(make_coverage(_URL, (0, 300, 1)))

    item = merge_waste([short, long], make_record(_URL, 4000))

    # 100 unused of 400 total
    assert item.wasted_bytes == 1000


def test_zero_content_length_means_no_waste() -> None:
    empty = compute_waste(make_coverage(_URL))
    item = merge_waste([empty], make_record(_URL, 5000))

    assert item.wasted_bytes == 0
    assert item.wasted_percent == 0.0


def test_zero_transfer_size_reports_zero_percent() -> None:
    waste = [compute_waste(make_coverage(_URL, (0, 100, 0)))]
    item = merge_waste(waste, NetworkRecord(url=_URL, resource_type="Script"))

    assert item.total_bytes == 0
    assert item.wasted_bytes == 0
    assert item.wasted_percent == 0.0


def test_wasted_bytes_never_exceed_total_and_percent_matches() -> None:
    waste = [compute_waste(make_coverage(_URL, (0, 3, 0), (3, 7, 1)))]
    item = merge_waste(waste, make_record(_URL, 12_345))

    assert 0 <= item.wasted_bytes <= item.total_bytes
    assert item.wasted_bytes == 5291  # round(12345 * 3 / 7)
    assert abs(item.wasted_percent - 100 * item.wasted_bytes / item.total_bytes) < 1e-9
