from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from mealprep.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=False)
    password = Column(String(200), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    profile = relationship("DietaryProfile", back_populates="user", uselist=False, cascade="all, delete")
    meal_plans = relationship("MealPlan", back_populates="user", cascade="all, delete-orphan")
