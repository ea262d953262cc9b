from __future__ import annotations


class DashboardError(Exception):
    """Base class for errors surfaced to the operator."""


class ValidationError(DashboardError):
    """Malformed or oversized input, rejected before any model call."""


class ConfigurationError(DashboardError):
    pass


class AnalysisError(DashboardError):
    """Any failed call to the hosted model."""


class NetworkError(AnalysisError):
    pass


class SchemaError(AnalysisError):
    pass
