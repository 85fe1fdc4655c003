"""Issue module: tracked issues and their assignments."""
