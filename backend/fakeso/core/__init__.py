# fakeso/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- db: Database configuration and connection management
- mailer: Outgoing email (fastapi-mail)
- security: Password hashing, token generation and JWT handling
"""
