"""Monetary domain package.

This package contains currencies, the currency registry, rounding modes and the two monetary
value types: variable-scale `Money` and `FixedScaleMoney`, whose amount always sits at its
currency's decimal places.
"""
