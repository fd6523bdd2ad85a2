"""
Test suite for the detailing catalog backend.

Run all tests: pytest
Run with coverage: pytest --cov=. --cov-report=html
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_bulk_product_parser.py -v
"""
