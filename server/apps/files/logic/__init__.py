"""Business logic layer for files app.

This package contains all business logic for the file registry:
- Upload slots, record creation and one-call uploads
- Owner and public listings with resolved download URLs
- Owner-only deletion, blob first
- Read and ownership rules for single-file lookups
- Storage accounting derived from file records

All business logic should be implemented here, separate from
models (data layer) and infrastructure (external systems).
"""
