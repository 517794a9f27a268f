"""
Commodity kernel configuration schema.

Defines the human-authored, reviewable configuration artifact. YAML files
are parsed into these types by the loader and handed out by
``get_active_config()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from commodity_kernel.domain.commodity import Commodity
from commodity_kernel.domain.exchange_rate import ExchangeRate

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KernelSettings:
    """
    Defaults callers use when they do not pass their own values.

    ``log_level`` is applied by ``get_active_config()``. ``share_precision``
    and ``epsilon`` reach the kernel through ``divide_share`` and
    ``eq_approx`` below, so the kernel itself never reads configuration.
    """

    log_level: str = "INFO"
    share_precision: int = 2  # dp for divide_share
    epsilon: Decimal = Decimal("0.000001")  # tolerance for eq_approx

    def divide_share(self, commodity: Commodity, count: int) -> list[Commodity]:
        """Split ``commodity`` into ``|count|`` shares at ``share_precision``."""
        return commodity.divide_share(count, self.share_precision)

    def eq_approx(self, this: Commodity, other: Commodity) -> bool:
        """Approximate equality within the configured ``epsilon``."""
        return this.eq_approx(other, self.epsilon)


# ---------------------------------------------------------------------------
# Configuration set
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KernelConfiguration:
    """A loaded configuration file: identity, settings and optional rates."""

    config_id: str
    version: int
    settings: KernelSettings
    exchange_rate: ExchangeRate | None = None
    checksum: str = ""
