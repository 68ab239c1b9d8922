"""Label parser adapters."""

from .row_parser import RowLabelParser

__all__ = ['RowLabelParser']
