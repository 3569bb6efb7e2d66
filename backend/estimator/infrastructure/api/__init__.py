"""Estimate record API client package."""

from .estimate_api_client import EstimateApiClient

__all__ = ["EstimateApiClient"]
