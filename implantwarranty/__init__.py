"""Warranty registration rules for implant products: dates, encryption, tokens, input checks, products, serials, warranty terms and registration steps."""

__version__ = "0.1.0"