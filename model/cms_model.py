# model/cms_model.py
# Site-wide content blocks. Each is a single row with id 1.
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from database import Base

SINGLETON_ID = 1

HOMEPAGE_SECTIONS = (
    "heroSection",
    "featuresSection",
    "aboutSection",
    "appointmentSection",
    "whyChooseUsSection",
    "downloadAppSection",
    "appointmentProcess",
)


class Header(Base):
    __tablename__ = "headers"

    id = Column(Integer, primary_key=True)
    # every language block carries its own "menus" list
    translations = Column(JSON, nullable=False, default=dict)
    logo = Column(String(500))
    contact_icon = Column(String(500))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Footer(Base):
    __tablename__ = "footers"

    id = Column(Integer, primary_key=True)
    translations = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class AboutPage(Base):
    __tablename__ = "about_pages"

    id = Column(Integer, primary_key=True)
    translations = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Homepage(Base):
    __tablename__ = "homepages"

    id = Column(Integer, primary_key=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    sections = relationship("HomepageSection", back_populates="homepage", cascade="all, delete-orphan")

    def section(self, name: str):
        for sec in self.sections:
            if sec.name == name:
                return sec
        return None


class HomepageSection(Base):
    __tablename__ = "homepage_sections"
    __table_args__ = (UniqueConstraint("homepage_id", "name", name="uq_homepage_section"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    translations = Column(JSON, nullable=False, default=dict)
    homepage_id = Column(Integer, ForeignKey("homepages.id", ondelete="CASCADE"), nullable=False)

    homepage = relationship("Homepage", back_populates="sections")
