"""Course feature: models shared with the authorization helpers."""

from .models import Course, Exam

__all__ = ["Course", "Exam"]
