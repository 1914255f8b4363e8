"""Application layer: ports and use-case services.

This package MUST NOT import from infrastructure or api.
"""
