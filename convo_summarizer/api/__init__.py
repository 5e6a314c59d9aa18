"""HTTP layer: request schemas and route handlers."""
