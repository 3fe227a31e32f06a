"""Debt settlement optimizer for hutang/piutang tracking."""

__version__ = "0.1.0"
