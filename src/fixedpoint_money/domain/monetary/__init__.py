"""Monetary domain package.

This package contains currency descriptors and `CurrencyWithPrecision`, which tags a
currency with the number of fractional digits amounts in it are stored with.
"""
