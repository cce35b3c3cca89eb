"""Cross-provider fantasy football roster reconciliation and availability."""

__version__ = "0.1.0"
