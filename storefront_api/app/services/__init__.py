"""
Service layer.

Each service encapsulates the business logic for one domain and talks
to the SQLite store through ``core.db``.  API handlers stay thin and
only translate HTTP requests into service calls.
"""
