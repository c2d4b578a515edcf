"""Feature packages of the neo-rbac engine."""
