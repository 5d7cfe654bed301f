# mealprep/models/dietary_profile.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from mealprep.database import Base

# JSONB on PostgreSQL, plain JSON on the local SQLite default
JSONList = JSONB().with_variant(JSON(), "sqlite")


class DietaryProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True, index=True)
    # One profile per user, upserted on every preference submission
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)

    dietary_goals = Column(String(50), nullable=False)   # "Weight Loss", "Muscle Gain", "Maintenance"
    diet_type = Column(String(50), default="Standard")   # free text, e.g. "Vegan"
    calories_target = Column(Integer, nullable=False)

    allergies = Column(JSONList, nullable=False, default=list)
    cuisine_preferences = Column(
        JSONList,
        nullable=False,
        default=list,
        comment="Ordered, first entry is the strongest preference"
    )
    dislikes = Column(JSONList, nullable=False, default=list)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="profile")
