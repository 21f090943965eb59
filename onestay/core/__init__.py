"""
Core module - domain models, errors and slugs.

This module contains:
- models: Role, User, Property, Logement documents
- sections: guest-book sections attached to a property
- slugs: slug normalization and allocation
- errors: domain errors mapped to HTTP statuses by the API
- utils: shared utility functions
"""
