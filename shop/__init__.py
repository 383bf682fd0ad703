"""Shop admin: catalog back office service."""
