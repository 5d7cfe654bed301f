# mealprep/crud/dietary_profile.py
from sqlalchemy.orm import Session
from mealprep.crud.base import persistence_errors, finish
from mealprep.models.dietary_profile import DietaryProfile
from mealprep.schemas.dietary_profile import MealPlanPreferences


@persistence_errors
def get_profile_by_user_id(db: Session, user_id: int):
    """Get the dietary profile of a user, None when the user has none"""
    return db.query(DietaryProfile).filter(DietaryProfile.user_id == user_id).first()


@persistence_errors
def save_profile(db: Session, user_id: int, prefs: MealPlanPreferences, commit: bool = True):
    """
    Upsert: create the profile if the user has none, otherwise overwrite
    the existing row in place.
    """
    fields = {
        "dietary_goals": prefs.dietary_goals,
        "diet_type": prefs.diet_type or "Standard",
        "calories_target": prefs.calories_target,
        "allergies": list(prefs.allergies or []),
        "cuisine_preferences": list(prefs.cuisine_preferences or []),
        "dislikes": list(prefs.dislikes or []),
    }

    db_profile = db.query(DietaryProfile).filter(DietaryProfile.user_id == user_id).first()
    if db_profile is None:
        db_profile = DietaryProfile(user_id=user_id, **fields)
        db.add(db_profile)
    else:
        for field, value in fields.items():
            setattr(db_profile, field, value)

    finish(db, commit, db_profile)
    return db_profile


@persistence_errors
def delete_profile_by_user_id(db: Session, user_id: int) -> bool:
    """Delete the user's profile. Returns False when there was nothing to delete"""
    db_profile = db.query(DietaryProfile).filter(DietaryProfile.user_id == user_id).first()
    if not db_profile:
        return False
    db.delete(db_profile)
    db.commit()
    return True
