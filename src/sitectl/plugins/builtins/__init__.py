"""Built-in plugins: static hosted zones and the local platform store."""
