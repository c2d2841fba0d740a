"""Estimate how many bytes a resource cost on the network."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jswaste.models.network import NetworkRecord

# Typical gzip ratios when no request is known (HTTP Archive averages)
_STYLESHEET_RATIO = 0.2
_SCRIPT_RATIO = 0.33
_DEFAULT_RATIO = 0.5


def js_round(value: float) -> int:
    """Round half up, the way JavaScript's ``Math.round`` does."""
    return math.floor(value + 0.5)


def estimate_transfer_size(
    network_record: NetworkRecord | None,
    total_bytes: int,
    resource_type: str,
) -> int:
    """Estimate the transferred bytes for *total_bytes* of a resource.

    Args:
        network_record: Request that delivered the content, if known.
        total_bytes: Uncompressed content length.
        resource_type: Kind of content being sized (``Script``, ``Stylesheet``...).

    Returns:
        The estimated number of bytes sent over the wire.
    """
    if network_record is None:
        if resource_type == "Stylesheet":
            return js_round(total_bytes * _STYLESHEET_RATIO)
        if resource_type in {"Script", "Document"}:
            return js_round(total_bytes * _SCRIPT_RATIO)
        return js_round(total_bytes * _DEFAULT_RATIO)

    if network_record.resource_type == resource_type:
        # standalone asset: the request size is exact
        return network_record.transfer_size or 0

    # inlined in another resource: scale by that resource's compression ratio
    transfer_size = network_record.transfer_size or 0
    resource_size = network_record.resource_size or 0
    if math.isfinite(resource_size) and resource_size > 0:
        compression_ratio = transfer_size / resource_size
    else:
        compression_ratio = 1.0
    return js_round(total_bytes * compression_ratio)
