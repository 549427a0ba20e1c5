from __future__ import annotations


class ModelError(ValueError):
    """Raised for malformed models; solver outcomes are reported as statuses instead."""
