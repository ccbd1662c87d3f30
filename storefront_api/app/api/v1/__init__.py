"""
Version 1 of the API.

Mounted under both ``/api`` and ``/api/v1``; see ``main.create_app``.
"""
