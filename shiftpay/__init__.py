"""Shift tracking, pay period scheduling and payslip reconciliation."""

__version__ = "0.1.0"
