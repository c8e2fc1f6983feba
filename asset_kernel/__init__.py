"""
Depreciation Kernel (``asset_kernel``).

Responsibility
--------------
Value objects, typed exceptions and structured logging shared by the
engines, configuration and services layers.

Architecture position
---------------------
**Kernel layer** -- imports nothing else from this project. Engines,
config and services depend on it, never the other way round.

Invariants enforced
-------------------
* Monetary amounts are ``int`` minor units; ``float`` is rejected.
* Asset snapshots are frozen; the engine never mutates caller data.
"""

from asset_kernel.exceptions import (
    AssetKernelError,
    ConcurrencyError,
    ConfigError,
    InvalidInputError,
    InvalidPeriodError,
    PeriodError,
    PeriodLockedError,
    StaleSnapshotError,
)
from asset_kernel.models import (
    AssetStatus,
    DepreciationCheckResult,
    DepreciationScheduleEntry,
    FixedAsset,
    ValidationResult,
    require_minor_units,
)

__all__ = [
    "AssetKernelError",
    "AssetStatus",
    "ConcurrencyError",
    "ConfigError",
    "DepreciationCheckResult",
    "DepreciationScheduleEntry",
    "FixedAsset",
    "InvalidInputError",
    "InvalidPeriodError",
    "PeriodError",
    "PeriodLockedError",
    "StaleSnapshotError",
    "ValidationResult",
    "require_minor_units",
]
