# jointhub/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- db: Database configuration and connection management
- errors: Error taxonomy and the HTTP status each error maps to
- ratelimit: Fixed-window request limiter for the /api surface
- security: Password hashing and bearer token issue/validation
"""
