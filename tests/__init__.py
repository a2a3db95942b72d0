"""
Test suite for cart-history

Contains:
- tests/unit/          : Unit tests for domain models, history, session and CLI
"""
