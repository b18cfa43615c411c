"""
Shared application core: exceptions and HTTP helpers.
"""
