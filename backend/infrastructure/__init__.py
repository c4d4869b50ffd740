"""
Infrastructure layer: in-memory storage and HTTP middleware.
"""
