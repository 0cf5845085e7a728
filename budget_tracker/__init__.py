"""
Weekly Budget Tracker - Source Package

Records named cash transactions and totals them per day and per
week. The current week is kept apart from a history of previous
weeks, and the whole ledger is persisted to a local key-value store.
"""

__version__ = "1.0.0"
