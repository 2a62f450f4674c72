"""Fitness service API client."""

from .client import ExecutionApi, FitnessApiClient, extract_error_message

__all__ = ["ExecutionApi", "FitnessApiClient", "extract_error_message"]
