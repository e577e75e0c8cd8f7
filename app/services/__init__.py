"""Services package."""
from app.services.snapshot_provider import (
    SnapshotProvider,
    CachedSnapshotProvider,
    StaticSnapshotProvider,
)
from app.services.window_resolver import (
    EffectiveWindow,
    select_deal_times,
    clip_to_restaurant_hours,
    resolve_effective_window,
)
from app.services.deal_service import (
    DealService,
    PeakWindow,
    find_active_deals,
    build_concurrency_histogram,
    find_first_peak_run,
    compute_peak_window,
)

__all__ = [
    "SnapshotProvider",
    "CachedSnapshotProvider",
    "StaticSnapshotProvider",
    "EffectiveWindow",
    "select_deal_times",
    "clip_to_restaurant_hours",
    "resolve_effective_window",
    "DealService",
    "PeakWindow",
    "find_active_deals",
    "build_concurrency_histogram",
    "find_first_peak_run",
    "compute_peak_window",
]
