"""Content-management backend: posts, categories and users behind role-gated APIs."""
