"""
Depreciation Services (``asset_services``).

Thin orchestration over the pure engines: plans a monthly run across many
assets and hands back entries for the caller to persist.  See
``asset_services.depreciation_run``.
"""

from asset_services.depreciation_run import (
    DepreciationEntry,
    DepreciationRunResult,
    DepreciationRunService,
    RunError,
    SkippedAsset,
)

__all__ = [
    "DepreciationEntry",
    "DepreciationRunResult",
    "DepreciationRunService",
    "RunError",
    "SkippedAsset",
]
