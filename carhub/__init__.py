"""Car catalog API: owner-scoped car listings behind JWT authentication."""
