"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# String field lengths
MAX_USERNAME_LENGTH = 50
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 100
MAX_STATUS_LENGTH = 20
MAX_ROLE_NAME_LENGTH = 100
MAX_PERMISSION_NAME_LENGTH = 100
MAX_PERMISSION_RESOURCE_LENGTH = 100
MAX_PERMISSION_ACTION_LENGTH = 50
MAX_DESCRIPTION_LENGTH = 255

# Password hashing
BCRYPT_ROUNDS = 12

# Session tokens
SESSION_TOKEN_TTL_HOURS = 24
SESSION_TOKEN_TYPE = "access"
SESSION_TOKEN_JTI_LENGTH = 16

# Role names that count as administrators. Matched by exact name, not by level.
ADMIN_ROLE_NAMES = ("Super Admin", "Admin")

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"
