"""
commodity_config -- single public entrypoint for kernel configuration.

Responsibility:
    Provides the way to obtain configuration at runtime through
    ``get_active_config()``. Returns a ``KernelConfiguration`` holding the
    default share precision, approximate-equality epsilon, log level and
    an optional exchange-rate table.

Architecture position:
    Configuration -- YAML-driven settings above ``commodity_kernel``.
    The kernel MUST NEVER import from ``commodity_config``.

Failure modes:
    - ``FileNotFoundError`` -- the requested file does not exist.
    - ``ValueError`` / ``KeyError`` -- schema validation failures.
    - ``yaml.YAMLError`` -- malformed YAML.

Every successful ``get_active_config()`` call sets the level of the
``commodity_kernel`` logger from ``settings.log_level`` and then emits a
``COMMODITY_CONFIG_TRACE`` log entry with the config id, version and
checksum.
"""

from __future__ import annotations

import logging
from pathlib import Path

from commodity_config.loader import load_yaml_file, parse_configuration
from commodity_config.schema import KernelConfiguration, KernelSettings

_logger = logging.getLogger("commodity_kernel.config")

_DEFAULT_CONFIG_FILE = Path(__file__).parent / "defaults.yaml"


def get_active_config(config_path: Path | None = None) -> KernelConfiguration:
    """The public configuration entrypoint.

    Args:
        config_path: YAML file to load. Defaults to the packaged
            ``commodity_config/defaults.yaml``.

    Returns:
        The validated ``KernelConfiguration``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If configuration validation fails.
        KeyError: If a required key is missing.
    """
    path = Path(config_path) if config_path is not None else _DEFAULT_CONFIG_FILE
    config = parse_configuration(load_yaml_file(path))
    logging.getLogger("commodity_kernel").setLevel(config.settings.log_level)

    exchange_rate = config.exchange_rate
    _logger.info(
        "COMMODITY_CONFIG_TRACE",
        extra={
            "trace_type": "COMMODITY_CONFIG_TRACE",
            "config_id": config.config_id,
            "config_version": config.version,
            "checksum": config.checksum,
            "share_precision": config.settings.share_precision,
            "rate_count": len(exchange_rate.rates) if exchange_rate else 0,
            "rate_base": exchange_rate.base if exchange_rate else None,
        },
    )
    return config


__all__ = [
    "KernelConfiguration",
    "KernelSettings",
    "get_active_config",
]
