# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_tolerance, CLASSIC_CASHFLOWS
"""

from .utils import CLASSIC_CASHFLOWS, make_tolerance

__all__ = ["make_tolerance", "CLASSIC_CASHFLOWS"]
