"""Merge the waste of every sample of a script into one finding."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jswaste.agents.analyzers.transfer_size import estimate_transfer_size, js_round
from jswaste.models.finding import WasteFinding

if TYPE_CHECKING:
    from jswaste.agents.analyzers.waste import WasteData
    from jswaste.models.network import NetworkRecord

logger = logging.getLogger(__name__)


def merge_waste(waste_data: list[WasteData], network_record: NetworkRecord) -> WasteFinding:
    """Sum unused and content lengths across samples and size the waste.

    Samples are repeated loads of the same script, so lengths are summed
    rather than averaged; the ratio of the sums drives the estimate.
    """
    unused_length = sum(data.unused_length for data in waste_data)
    content_length = sum(data.content_length for data in waste_data)

    total_bytes = estimate_transfer_size(network_record, content_length, "Script")
    wasted_ratio = unused_length / content_length if content_length else 0.0
    wasted_bytes = js_round(total_bytes * wasted_ratio)
    wasted_percent = 100 * wasted_bytes / total_bytes if total_bytes else 0.0

    logger.debug(
        "%s: %d/%d unused across %d samples, %d of %d bytes wasted",
        network_record.url,
        unused_length,
        content_length,
        len(waste_data),
        wasted_bytes,
        total_bytes,
    )
    return WasteFinding(
        url=network_record.url,
        total_bytes=total_bytes,
        wasted_bytes=wasted_bytes,
        wasted_percent=wasted_percent,
    )
