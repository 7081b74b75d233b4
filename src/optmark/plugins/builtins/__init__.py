"""Built-in plugins shipped with optmark."""
