from sqlalchemy.orm import Session
from mealprep.crud.base import persistence_errors
from mealprep.models.user import User
from mealprep.schemas.user import UserCreate
from mealprep.utils.utils import hash_password

@persistence_errors
def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()

@persistence_errors
def create_user(db: Session, user: UserCreate):
    db_user = User(
        name=user.name,
        email=user.email,
        password=hash_password(user.password),
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

@persistence_errors
def delete_user(db: Session, user_id: int):
    db_user = db.query(User).filter(User.id == user_id).first()
    if db_user:
        db.delete(db_user)
        db.commit()
    return db_user
