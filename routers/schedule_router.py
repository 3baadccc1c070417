from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.security import require_api_key
from database import get_db
from model.doctor_model import TimeSlot

router = APIRouter(prefix="/api/schedule", tags=["Schedule"], dependencies=[Depends(require_api_key)])


# Time slots of one doctor schedule entry
@router.get("/{schedule_id}/timeslots")
def get_time_slots(schedule_id: int, db: Session = Depends(get_db)):
    slots = db.query(TimeSlot).filter(TimeSlot.schedule_id == schedule_id).order_by(TimeSlot.id).all()
    return [
        {"id": slot.id, "start": slot.start, "end": slot.end, "isBooked": slot.is_booked}
        for slot in slots
    ]
