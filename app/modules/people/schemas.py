from pydantic import BaseModel, Field, StringConstraints
from typing import Annotated, Optional, List
from datetime import datetime

from app.config.settings import settings
from app.core.bulk import BulkDeleteOutcome

# Required form fields: surrounding whitespace trimmed, must not be blank
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Text = Annotated[str, StringConstraints(strip_whitespace=True)]


class PersonCreate(BaseModel):
    first_name: RequiredText
    last_name: RequiredText
    phone_number: RequiredText
    street_address: Text = ""
    city: Text = ""
    tq: Optional[Text] = None  # Taluk/Tehsil
    dist: Optional[Text] = None  # District
    state: Text = ""
    country: Text = Field(default_factory=lambda: settings.default_country)
    postal_code: Text = ""


class PersonUpdate(BaseModel):
    first_name: Optional[RequiredText] = None
    last_name: Optional[RequiredText] = None
    phone_number: Optional[RequiredText] = None
    street_address: Optional[Text] = None
    city: Optional[Text] = None
    tq: Optional[Text] = None
    dist: Optional[Text] = None
    state: Optional[Text] = None
    country: Optional[Text] = None
    postal_code: Optional[Text] = None


class PersonResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    tq: Optional[str] = None
    dist: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PersonBulkDeleteResponse(BaseModel):
    results: List[BulkDeleteOutcome]
    people: Optional[List[PersonResponse]] = None  # Roster re-read after the deletes; None if that read failed
