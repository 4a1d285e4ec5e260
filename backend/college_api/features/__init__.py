"""Feature modules of the College Management API."""
