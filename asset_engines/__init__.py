"""
Module: asset_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    depreciation engines.  This is the canonical import surface for the
    services layer and for callers embedding the engine directly.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import asset_kernel (and sibling engine modules).
    MUST NOT import asset_services or asset_config.

Invariants enforced:
    - Purity: engines NEVER call ``date.today()``; periods and dates are
      passed in as explicit parameters.
    - Integer-only arithmetic on minor currency units; no ``float``.
    - Determinism: identical inputs always produce identical outputs.

Control flow expected of a caller, once per asset per period:
    should_depreciate_in_period -> calculate_monthly_depreciation
    -> validate_depreciation_entry -> (caller persists)
    -> determine_asset_status

Usage:
    from asset_engines import (
        calculate_monthly_depreciation,
        generate_depreciation_schedule,
        should_depreciate_in_period,
        validate_depreciation_entry,
        determine_asset_status,
    )
"""

from asset_engines.eligibility import should_depreciate_in_period
from asset_engines.status import determine_asset_status
from asset_engines.straight_line import (
    calculate_book_value,
    calculate_monthly_depreciation,
    calculate_remaining_depreciable,
    generate_depreciation_schedule,
    months_between,
)
from asset_engines.tracer import compute_input_fingerprint, traced_engine
from asset_engines.validation import validate_depreciation_entry

__all__ = [
    "calculate_book_value",
    "calculate_monthly_depreciation",
    "calculate_remaining_depreciable",
    "compute_input_fingerprint",
    "determine_asset_status",
    "generate_depreciation_schedule",
    "months_between",
    "should_depreciate_in_period",
    "traced_engine",
    "validate_depreciation_entry",
]
