"""HTTP-side helpers shared by the routes."""
