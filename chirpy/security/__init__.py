"""
Security module - Caller identity for mutating operations

Provides:
- authentication: token authority and password hashing
"""
