from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from database import Base


class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    icon = Column(String(500))
    # {"en": {"name": ..., "department": ..., "yearsOfExperience": ...}, "bn": {...}}
    translations = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    memberships = relationship("DoctorMembership", back_populates="doctor", cascade="all, delete-orphan")
    awards = relationship("DoctorAward", back_populates="doctor", cascade="all, delete-orphan")
    treatments = relationship("DoctorTreatment", back_populates="doctor", cascade="all, delete-orphan")
    conditions = relationship("DoctorCondition", back_populates="doctor", cascade="all, delete-orphan")
    schedule = relationship("DoctorSchedule", back_populates="doctor", cascade="all, delete-orphan")
    faqs = relationship("DoctorFaq", back_populates="doctor", cascade="all, delete-orphan")
    appointments = relationship("Appointment", back_populates="doctor")


class DoctorMembership(Base):
    __tablename__ = "doctor_memberships"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    doctor_id = Column(Integer, ForeignKey("doctors.id", ondelete="CASCADE"), nullable=False)
    doctor = relationship("Doctor", back_populates="memberships")


class DoctorAward(Base):
    __tablename__ = "doctor_awards"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    doctor_id = Column(Integer, ForeignKey("doctors.id", ondelete="CASCADE"), nullable=False)
    doctor = relationship("Doctor", back_populates="awards")


class DoctorTreatment(Base):
    __tablename__ = "doctor_treatments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    doctor_id = Column(Integer, ForeignKey("doctors.id", ondelete="CASCADE"), nullable=False)
    doctor = relationship("Doctor", back_populates="treatments")


class DoctorCondition(Base):
    __tablename__ = "doctor_conditions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    doctor_id = Column(Integer, ForeignKey("doctors.id", ondelete="CASCADE"), nullable=False)
    doctor = relationship("Doctor", back_populates="conditions")


class DoctorSchedule(Base):
    __tablename__ = "doctor_schedules"

    id = Column(Integer, primary_key=True, index=True)
    day = Column(String(20), nullable=False)
    start_time = Column(String(10), nullable=False)
    end_time = Column(String(10), nullable=False)
    doctor_id = Column(Integer, ForeignKey("doctors.id", ondelete="CASCADE"), nullable=False)

    doctor = relationship("Doctor", back_populates="schedule")
    time_slots = relationship("TimeSlot", back_populates="schedule", cascade="all, delete-orphan")
    appointments = relationship("Appointment", back_populates="schedule")


class TimeSlot(Base):
    __tablename__ = "time_slots"

    id = Column(Integer, primary_key=True, index=True)
    start = Column(String(10), nullable=False)
    end = Column(String(10), nullable=False)
    is_booked = Column(Boolean, default=False, nullable=False)
    schedule_id = Column(Integer, ForeignKey("doctor_schedules.id", ondelete="CASCADE"), nullable=False)

    schedule = relationship("DoctorSchedule", back_populates="time_slots")


class DoctorFaq(Base):
    __tablename__ = "doctor_faqs"

    id = Column(Integer, primary_key=True, index=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    doctor_id = Column(Integer, ForeignKey("doctors.id", ondelete="CASCADE"), nullable=False)
    doctor = relationship("Doctor", back_populates="faqs")
