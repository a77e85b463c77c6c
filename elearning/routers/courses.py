from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, joinedload

from elearning.core.errors import NotFoundError, ValidationError
from elearning.core.ids import is_valid_id
from elearning.db.session import get_db
from elearning.models.course import Course
from elearning.models.user import User
from elearning.schemas.course import CourseCreate, CourseOut, CourseRead

router = APIRouter()


def _published_courses(db: Session):
    """Published courses with the instructor fetched in the same query."""
    return (
        db.query(Course)
        .options(joinedload(Course.instructor))
        .filter(Course.published.is_(True))
    )


@router.get("/courses", response_model=list[CourseOut])
def list_courses(db: Session = Depends(get_db)):
    return _published_courses(db).order_by(Course.created_at.desc()).all()


@router.get(
    "/courses/{course_id}",
    response_model=CourseOut,
    responses={404: {"description": "Course missing or not published"}},
)
def get_course(course_id: str, db: Session = Depends(get_db)):
    course = None
    if is_valid_id(course_id):
        course = _published_courses(db).filter(Course.id == course_id).first()
    if course is None:
        raise NotFoundError("Not found")
    return course


@router.post(
    "/courses",
    response_model=CourseRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid fields or unknown instructor"}},
)
def create_course(payload: CourseCreate, db: Session = Depends(get_db)):
    if payload.instructor_id is not None:
        if not is_valid_id(payload.instructor_id) or db.get(User, payload.instructor_id) is None:
            raise ValidationError("Instructor not found")

    course = Course(
        title=payload.title,
        description=payload.description,
        instructor_id=payload.instructor_id,
        price=payload.price,
        published=payload.published,
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    return course
