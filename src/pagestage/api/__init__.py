"""HTTP routes for the content server."""
