"""
Routers package for Reports module

Exports all report router instances for easy importing.
"""

from .financial import router as financial_router
from .dashboard import router as dashboard_router

__all__ = [
    "financial_router",
    "dashboard_router"
]
