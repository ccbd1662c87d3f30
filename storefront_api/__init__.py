"""
Top‑level package for the Storefront API.

Makes ``storefront_api`` importable so modules under ``app`` can be
referenced with fully qualified names such as
``storefront_api.app.main``.  All functionality lives in ``app``.
"""

__all__ = []
