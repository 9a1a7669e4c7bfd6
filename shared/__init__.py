"""Shared definitions for the Family Ledger client.

This package holds the parts of the client that have no dependency on the
network layer or any UI toolkit:

- Enums (enums.py) - Status values, record kinds and view states
- Schemas (schemas.py) - Pydantic DTOs for every API payload plus lenient decoding helpers
- Validation (validation.py) - Form validation and text sanitization
- Utility functions (utils.py) - Display formatting, masking and chip layout
"""
