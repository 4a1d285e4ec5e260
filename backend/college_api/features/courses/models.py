"""Course and exam models used for faculty ownership lookups."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from college_api.core.models import Base


class Course(Base):
    """A course, optionally assigned to one faculty member."""

    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(
        String(20), nullable=False, unique=True, comment="Course code (e.g. CS101)"
    )
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    faculty_id: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        index=True,
        comment="Faculty profile teaching this course",
    )

    exams: Mapped[list["Exam"]] = relationship(back_populates="course")

    def __repr__(self) -> str:
        """Return string representation of the course."""
        return f"<Course(id={self.id}, code='{self.code}', faculty_id={self.faculty_id})>"


class Exam(Base):
    """An exam held for a course."""

    __tablename__ = "exams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    course: Mapped[Course] = relationship(back_populates="exams")
