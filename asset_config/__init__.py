"""
asset_config -- single public entrypoint for depreciation run configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  Services receive a ``DepreciationConfig``
    and never read files themselves.

Architecture position:
    Configuration -- sits above ``asset_kernel`` and below
    ``asset_services``.  Engines never import from this package.

Failure modes:
    - ``FileNotFoundError`` -- the requested file does not exist.
    - ``ConfigError`` -- schema or value validation failures.

Audit relevance:
    Every successful ``get_active_config()`` call emits an
    ``ASSET_CONFIG_TRACE`` log entry with the source path and checksum,
    tying each depreciation run to the settings that governed it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from asset_config.loader import compute_checksum, load_config, load_yaml_file, parse_config
from asset_config.schema import DepreciationConfig

_logger = logging.getLogger("asset_kernel.config")

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"


def get_active_config(path: Path | None = None) -> DepreciationConfig:
    """Load, validate and trace the active configuration.

    Args:
        path: YAML file to load.  Defaults to the packaged
            ``asset_config/defaults.yaml``.

    Returns:
        A frozen ``DepreciationConfig``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ConfigError: If the file fails validation.
    """
    source = Path(path) if path is not None else _DEFAULT_CONFIG_PATH
    data = load_yaml_file(source)
    config = parse_config(data, source=str(source))

    _logger.info(
        "ASSET_CONFIG_TRACE",
        extra={
            "trace_type": "ASSET_CONFIG_TRACE",
            "config_path": str(source),
            "checksum": compute_checksum(data),
            "min_period_year": config.min_period_year,
            "max_period_year": config.max_period_year,
            "lock_date": config.lock_date,
        },
    )
    return config


__all__ = [
    "DepreciationConfig",
    "compute_checksum",
    "get_active_config",
    "load_config",
    "parse_config",
]
