"""Team module: teams and their members."""
