from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MembershipIn(BaseModel):
    name: str


class AwardIn(BaseModel):
    title: str


class TreatmentIn(BaseModel):
    name: str


class ConditionIn(BaseModel):
    name: str


class ScheduleIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day: str
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")


class FaqIn(BaseModel):
    question: str
    answer: str


class CreateDoctorRequest(BaseModel):
    email: Optional[str] = None
    translations: Any = None
    memberships: List[MembershipIn] = []
    awards: List[AwardIn] = []
    treatments: List[TreatmentIn] = []
    conditions: List[ConditionIn] = []
    schedule: List[ScheduleIn] = []
    faqs: List[FaqIn] = []


class UpdateDoctorRequest(BaseModel):
    translations: Any = None
    slug: Optional[str] = None
    memberships: Optional[List[MembershipIn]] = None
    awards: Optional[List[AwardIn]] = None
    treatments: Optional[List[TreatmentIn]] = None
    conditions: Optional[List[ConditionIn]] = None
    schedule: Optional[List[ScheduleIn]] = None
    faqs: Optional[List[FaqIn]] = None
