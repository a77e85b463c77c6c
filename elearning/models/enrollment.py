from sqlalchemy import Column, DateTime, Float, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from elearning.core.ids import new_id
from elearning.db.base_class import Base, utcnow


class Enrollment(Base):
    __tablename__ = "Enrollment"

    id = Column(String(32), primary_key=True, default=new_id)
    student_id = Column(String(32), ForeignKey("User.id"), nullable=False, index=True)
    course_id = Column(
        String(32),
        ForeignKey("Course.id"),
        nullable=False,
        index=True,
    )
    progress = Column(Float, nullable=False, default=0)
    enrolled_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # backs the explicit "already enrolled" check when two requests race
    __table_args__ = (
        UniqueConstraint(
            "student_id", "course_id", name="uq_enrollment_student_course"
        ),
    )

    student = relationship("User", back_populates="enrollments")
    course = relationship("Course", back_populates="enrollments")
