"""
Test suite for the Answer Engine.

Provides tests for all modules:
- Unit tests for adapters, pipeline, synthesis and configuration
- Aggregator tests with in-memory providers
- Fixtures for common test data
"""
