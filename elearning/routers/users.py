from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from elearning.core.errors import DuplicateError, NotFoundError
from elearning.core.ids import is_valid_id
from elearning.db.session import get_db, is_unique_violation
from elearning.models.user import User
from elearning.schemas.user import RegisterResponse, UserCreate, UserRead

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid fields or email already registered"},
    },
)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    user = User(name=payload.name, email=payload.email, role=payload.role)
    db.add(user)

    # the unique index on email is the only duplicate guard
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if not is_unique_violation(e):
            raise
        raise DuplicateError("Email already registered")

    db.refresh(user)
    return {"message": "Registered", "user": UserRead.model_validate(user)}


@router.get("/users", response_model=list[UserRead])
def list_users(db: Session = Depends(get_db)):
    return db.query(User).all()


@router.get(
    "/users/{user_id}",
    response_model=UserRead,
    responses={404: {"description": "User not found"}},
)
def get_user(user_id: str, db: Session = Depends(get_db)):
    user = db.get(User, user_id) if is_valid_id(user_id) else None
    if user is None:
        raise NotFoundError("User not found")
    return user
