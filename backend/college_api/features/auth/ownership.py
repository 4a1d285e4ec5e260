"""Faculty ownership checks.

Faculty members may only reach data for courses assigned to them; admins
bypass every check and all other roles are denied.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from college_api.core.enums import UserRole
from college_api.features.courses.models import Course, Exam
from .models import User


def _faculty_profile_id(user: User) -> Optional[int]:
    if UserRole(user.role) != UserRole.FACULTY:
        return None
    return user.profile_id


async def get_faculty_course_ids(db: AsyncSession, user: User) -> Optional[List[int]]:
    """Get the ids of the courses assigned to ``user``.

    :returns: None for admins (no filtering needed), otherwise a list of ids,
        empty for anyone who is not a faculty member with a profile
    """
    if UserRole(user.role) == UserRole.ADMIN:
        return None

    profile_id = _faculty_profile_id(user)
    if not profile_id:
        return []

    result = await db.execute(select(Course.id).where(Course.faculty_id == profile_id))
    return list(result.scalars().all())


async def faculty_owns_course(db: AsyncSession, user: User, course_id: int) -> bool:
    """Check that ``course_id`` is assigned to ``user``. Admins always pass."""
    if UserRole(user.role) == UserRole.ADMIN:
        return True

    profile_id = _faculty_profile_id(user)
    if not profile_id:
        return False

    result = await db.execute(
        select(Course.id).where(Course.id == course_id, Course.faculty_id == profile_id)
    )
    return result.scalar_one_or_none() is not None


async def faculty_owns_exam(db: AsyncSession, user: User, exam_id: int) -> bool:
    """Check that ``exam_id`` belongs to a course assigned to ``user``."""
    if UserRole(user.role) == UserRole.ADMIN:
        return True

    profile_id = _faculty_profile_id(user)
    if not profile_id:
        return False

    result = await db.execute(
        select(Course.faculty_id)
        .join(Exam, Exam.course_id == Course.id)
        .where(Exam.id == exam_id)
    )
    owner_id = result.scalar_one_or_none()
    return owner_id is not None and owner_id == profile_id
