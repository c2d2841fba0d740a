"""Analyzer agents for jswaste."""

from jswaste.agents.analyzers.aggregate import merge_waste
from jswaste.agents.analyzers.attribution import (
    count_unused_bytes_by_file,
    create_bundle_multi_data,
)
from jswaste.agents.analyzers.bundles import analyze_bundles
from jswaste.agents.analyzers.transfer_size import estimate_transfer_size
from jswaste.agents.analyzers.unused_javascript import (
    IGNORE_THRESHOLD_IN_BYTES,
    UnusedJavaScriptAudit,
    UnusedJavaScriptTask,
    group_by_url,
)
from jswaste.agents.analyzers.waste import WasteData, compute_waste

__all__ = [
    "IGNORE_THRESHOLD_IN_BYTES",
    "UnusedJavaScriptAudit",
    "UnusedJavaScriptTask",
    "WasteData",
    "analyze_bundles",
    "compute_waste",
    "count_unused_bytes_by_file",
    "create_bundle_multi_data",
    "estimate_transfer_size",
    "group_by_url",
    "merge_waste",
]
