"""Core Domain Layer

Entities and exceptions, independent of Redis and the HTTP surface.
"""
