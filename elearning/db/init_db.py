from sqlalchemy.engine import Engine

from elearning.db.base_class import Base

# import models so SQLAlchemy registers them
from elearning.models import course, enrollment, user  # noqa: F401


def init_db(engine: Engine) -> None:
    """Create the User, Course and Enrollment tables if they are missing."""
    Base.metadata.create_all(bind=engine)
