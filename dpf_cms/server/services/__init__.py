"""
Server-side domain services used by the API routers.
"""
