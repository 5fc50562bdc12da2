"""Clients for external services."""

from psi_report.external.pagespeed_insights import PageSpeedInsightsAPI

__all__ = ["PageSpeedInsightsAPI"]
