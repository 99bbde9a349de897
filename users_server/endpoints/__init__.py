"""HTTP endpoints for the users server."""
