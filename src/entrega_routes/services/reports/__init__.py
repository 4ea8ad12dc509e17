"""Delivery report service exports."""

from .period import DeliverySummary, PeriodFilters, filter_period, recent_deliveries, summarize

__all__ = ["DeliverySummary", "PeriodFilters", "filter_period", "recent_deliveries", "summarize"]
