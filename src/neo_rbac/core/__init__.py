"""Core building blocks shared across neo-rbac features."""
