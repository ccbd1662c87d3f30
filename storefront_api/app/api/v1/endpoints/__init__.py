"""
Endpoint modules for API v1, one ``APIRouter`` per domain.
"""
