from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Integer, String, Text

from database import Base


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150))
    role = Column(String(150))
    image = Column(String(500))
    rating = Column(Float)
    review_text = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
