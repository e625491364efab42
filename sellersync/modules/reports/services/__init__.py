"""
Services package for Reports module

Exports all report service classes for easy importing.
"""

from .balance import BalanceAggregator
from .assembler import ReportAssembler

__all__ = [
    "BalanceAggregator",
    "ReportAssembler"
]
