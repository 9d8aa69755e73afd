"""Address CRUD and distance API."""
