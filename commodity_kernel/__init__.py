"""
Commodity Kernel

Value types for amounts of money (or any other fungible unit) tagged with
the type of commodity they are denominated in:
- Compact, copyable commodity type ids
- Exact fixed-point decimal arithmetic, never floating point
- Checked arithmetic that rejects mixing commodity types
- Fair integer-share splitting
- Exchange-rate tables with base and cross-rate conversion
"""

__version__ = "0.4.0"
