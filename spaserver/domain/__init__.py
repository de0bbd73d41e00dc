"""Domain models used across server and client boundaries."""

from .models import HEALTH_LIVE, HealthReport, RequestCounter

__all__ = ["HEALTH_LIVE", "HealthReport", "RequestCounter"]
