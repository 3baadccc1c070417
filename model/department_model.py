from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Integer

from database import Base


class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True)
    # {"en": {"name": "Cardiology"}, "bn": {"name": "..."}}
    translations = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
