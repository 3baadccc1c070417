from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AppointmentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    doctor_id: Optional[int] = Field(default=None, alias="doctorId")
    doctor_name: Optional[str] = Field(default=None, alias="doctorName")
    patient_id: Optional[int] = Field(default=None, alias="patientId")
    patient_name: Optional[str] = Field(default=None, alias="patientName")
    mobile_number: Optional[str] = Field(default=None, alias="mobileNumber")
    appointment_date: Optional[str] = Field(default=None, alias="appointmentDate")
    schedule_id: Optional[int] = Field(default=None, alias="scheduleId")
    is_new_patient: bool = Field(default=False, alias="isNewPatient")

    serial_number: Optional[int] = Field(default=None, alias="serialNumber")
    weight: Optional[float] = None
    age: Optional[int] = None
    blood_group: Optional[str] = Field(default=None, alias="bloodGroup")

    consultation_fee: Optional[float] = Field(default=None, alias="consultationFee")
    vat: Optional[float] = None
    promo_code: Optional[str] = Field(default=None, alias="promoCode")
    consultation_type: Optional[str] = Field(default=None, alias="consultationType")
    payment_method: Optional[str] = Field(default=None, alias="paymentMethod")
    director_reference: Optional[str] = Field(default=None, alias="directorReference")

    reason: Optional[str] = None
    address: Optional[str] = None
    status: Optional[str] = None
