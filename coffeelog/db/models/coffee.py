from sqlalchemy import Column, String, Integer, Date, DateTime, ForeignKey, Uuid, CheckConstraint, Index
from sqlalchemy.orm import relationship

from coffeelog.db.base import BaseModel


class CoffeeRecord(BaseModel):
    __tablename__ = "coffee_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # День, к которому относится запись, и точный момент записи хранятся раздельно
    date = Column(Date, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    cups = Column(Integer, nullable=False)
    coffee_type = Column(String(50), nullable=True)
    size = Column(String(10), nullable=True)
    location = Column(String(100), nullable=True)
    notes = Column(String(500), nullable=True)

    # Relationships
    user = relationship("User", back_populates="coffee_records")

    __table_args__ = (
        CheckConstraint("cups > 0", name="ck_coffee_records_cups_positive"),
        Index("ix_coffee_records_user_date", "user_id", "date"),
    )


class CoffeeSettings(BaseModel):
    __tablename__ = "coffee_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    daily_limit = Column(Integer, default=4, nullable=False)
    warning_threshold = Column(Integer, default=3, nullable=False)
    min_interval = Column(Integer, default=240, nullable=False)  # минуты
