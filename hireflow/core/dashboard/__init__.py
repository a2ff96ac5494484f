"""Recruiter dashboard statistics."""

from .dashboard_service import DashboardService, get_dashboard_service

__all__ = [
    "DashboardService",
    "get_dashboard_service",
]
