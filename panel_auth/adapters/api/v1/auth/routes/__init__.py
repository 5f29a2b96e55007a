from __future__ import annotations

"""Subpackage aggregating individual password reset route modules."""

__all__ = ["reset_password"]
