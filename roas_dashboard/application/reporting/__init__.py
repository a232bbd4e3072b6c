"""Reporting helpers: derived metrics, formatting and list selection."""
