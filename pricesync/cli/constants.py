"""Exit codes shared by CLI commands."""

VALIDATION_EXIT_CODE = 10
SYSTEM_EXIT_CODE = 30
