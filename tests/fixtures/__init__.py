"""
Test Fixtures and Utilities

Shared synthetic ledger data for unit and integration tests.
All test data is synthetic and does not contain real financial information.
"""
