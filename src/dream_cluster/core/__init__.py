"""Matrix container and input validation."""
