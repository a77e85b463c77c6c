from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from elearning.core.ids import new_id
from elearning.db.base_class import Base, utcnow


class Course(Base):
    __tablename__ = "Course"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    instructor_id: Mapped[str | None] = mapped_column(
        String(32), ForeignKey("User.id"), index=True
    )
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    instructor = relationship("User", back_populates="courses")
    enrollments = relationship("Enrollment", back_populates="course")
