# Gallery Manager Test Suite
"""
Test suite for the gallery manager.

Unit tests exercise services, stores and storage adapters in isolation;
integration tests go through the HTTP API.
"""
