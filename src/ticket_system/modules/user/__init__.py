"""User module: user accounts."""
