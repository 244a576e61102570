"""
security/ - Request Guards
==========================
Optional shared-token authentication and per-client rate limiting for the API.
"""
