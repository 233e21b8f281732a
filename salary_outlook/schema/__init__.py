"""
Column name definitions shared by the loader, aggregators, forecaster and
report tables.

Example Usage:
    >>> from salary_outlook.schema import columns as cols
    >>> cols.SALARY_USD
    'salary_in_usd'
"""

from . import columns

__all__ = ['columns']
