from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from database import Base


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False)
    doctor_name = Column(String(150))
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=True)
    patient_name = Column(String(150))
    mobile_number = Column(String(20))
    appointment_date = Column(String(50))
    schedule_id = Column(Integer, ForeignKey("doctor_schedules.id"), nullable=True)

    serial_number = Column(Integer)
    weight = Column(Float)
    age = Column(Integer)
    blood_group = Column(String(20))  # A_POSITIVE, O_NEGATIVE, ...

    consultation_fee = Column(Float)
    vat = Column(Float)
    promo_code = Column(String(50))
    consultation_type = Column(String(30))  # PHYSICAL / VIDEO_CALL
    payment_method = Column(String(30))  # BKASH / BANK / REFERENCE
    director_reference = Column(String(255))

    reason = Column(Text)
    address = Column(Text)
    status = Column(String(30), default="Pending", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    doctor = relationship("Doctor", back_populates="appointments")
    patient = relationship("Patient", back_populates="appointments")
    schedule = relationship("DoctorSchedule", back_populates="appointments")
