from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from elearning.core.errors import DuplicateError, ValidationError
from elearning.core.ids import is_valid_id
from elearning.db.session import get_db, is_unique_violation
from elearning.models.course import Course
from elearning.models.enrollment import Enrollment
from elearning.models.user import User
from elearning.schemas.enrollment import (
    EnrollmentCreate,
    EnrollmentOut,
    EnrollmentWithCourse,
    EnrollResponse,
    ProgressUpdate,
)

router = APIRouter()


def _ensure_exists(db: Session, model, record_id: str, label: str) -> None:
    if not is_valid_id(record_id) or db.get(model, record_id) is None:
        raise ValidationError(f"{label} not found")


def _find_enrollment(db: Session, student_id: str, course_id: str) -> Enrollment | None:
    return (
        db.query(Enrollment)
        .filter(Enrollment.student_id == student_id, Enrollment.course_id == course_id)
        .first()
    )


@router.post(
    "/enroll",
    response_model=EnrollResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Unknown student/course or already enrolled"}},
)
def enroll(payload: EnrollmentCreate, db: Session = Depends(get_db)):
    _ensure_exists(db, User, payload.student_id, "Student")
    _ensure_exists(db, Course, payload.course_id, "Course")

    if _find_enrollment(db, payload.student_id, payload.course_id) is not None:
        raise DuplicateError("Already enrolled")

    enrollment = Enrollment(student_id=payload.student_id, course_id=payload.course_id)
    db.add(enrollment)

    # a concurrent request can pass the check above; the unique constraint catches it
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if not is_unique_violation(e):
            raise
        raise DuplicateError("Already enrolled")

    db.refresh(enrollment)
    return {"message": "Enrolled!", "enrollment": EnrollmentOut.model_validate(enrollment)}


@router.get("/my-courses/{student_id}", response_model=list[EnrollmentWithCourse])
def my_courses(student_id: str, db: Session = Depends(get_db)):
    return (
        db.query(Enrollment)
        .options(joinedload(Enrollment.course))
        .filter(Enrollment.student_id == student_id)
        .order_by(Enrollment.enrolled_at.asc())
        .all()
    )


@router.patch(
    "/enrollments/{enrollment_id}",
    response_model=EnrollmentOut | None,
    responses={400: {"description": "Malformed id or progress value"}},
)
def update_progress(
    enrollment_id: str,
    payload: ProgressUpdate,
    db: Session = Depends(get_db),
):
    if not is_valid_id(enrollment_id):
        raise ValidationError("Invalid enrollment id")

    enrollment = db.get(Enrollment, enrollment_id)
    # unknown id: empty 200 body rather than 404
    if enrollment is None:
        return None

    enrollment.progress = payload.progress
    db.commit()
    db.refresh(enrollment)
    return enrollment
