"""Shared kernel: identities, enums, errors and clock."""
