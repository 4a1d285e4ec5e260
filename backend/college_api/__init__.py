"""College Management System API."""
