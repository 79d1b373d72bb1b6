from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from uuid import UUID


class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Contact name cannot be empty")
    phone_number: str = ""
    payment_method: str = ""
    payment_details: str = ""


class ContactUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    phone_number: Optional[str] = None
    payment_method: Optional[str] = None
    payment_details: Optional[str] = None


class ContactResponse(BaseModel):
    id: UUID
    name: str
    phone_number: str
    payment_method: str
    payment_details: str
    initials: str
    created_at: datetime
    
    model_config = ConfigDict(from_attributes=True)
