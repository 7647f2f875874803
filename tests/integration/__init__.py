# Integration Tests
"""
Integration tests verify complete gallery workflows through the HTTP API.

Principle: Test behavior, not implementation.
"""
