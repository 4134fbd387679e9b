"""Session state and configuration for the Sanctum path finder."""
