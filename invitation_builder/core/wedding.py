"""
WeddingDetails — fiche saisie par l'utilisateur avant la génération des blocs.
Validation Pydantic v2, messages en français.
"""
import re
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel

_NAME_RE  = re.compile(r"^[^\W\d_]+(?:[ '\-][^\W\d_]+)*$")
_TIME_RE  = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")
_PHONE_RE = re.compile(r"^01[016789]-?\d{3,4}-?\d{4}$")
_URL      = TypeAdapter(HttpUrl)


def _not_in_past(value: str, label: str) -> str:
    try:
        day = date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"{label} : format de date invalide (AAAA-MM-JJ attendu)") from None
    if day < date.today():
        raise ValueError(f"{label} doit être aujourd'hui ou plus tard")
    return value


class WeddingDetails(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # mariés
    groom_name: str = Field(min_length=2, max_length=20)
    bride_name: str = Field(min_length=2, max_length=20)

    # date et heure
    wedding_date: str
    wedding_time: str

    # lieu
    venue_name: str = Field(min_length=2, max_length=100)
    venue_address: str = Field(min_length=5, max_length=200)
    venue_hall: Optional[str] = Field(default=None, max_length=50)

    # contacts
    groom_contact: Optional[str] = None
    bride_contact: Optional[str] = None
    groom_parents: Optional[str] = Field(default=None, max_length=100)
    bride_parents: Optional[str] = Field(default=None, max_length=100)

    # informations complémentaires
    custom_message: Optional[str] = Field(default=None, max_length=500)
    dress_code: Optional[str] = Field(default=None, max_length=100)
    parking_info: Optional[str] = Field(default=None, max_length=200)
    meal_info: Optional[str] = Field(default=None, max_length=200)
    special_notes: Optional[str] = Field(default=None, max_length=300)
    account_info: Optional[str] = Field(default=None, max_length=300)
    background_image_url: Optional[str] = None

    # rsvp
    rsvp_enabled: bool = True
    rsvp_deadline: Optional[str] = None

    @field_validator("groom_name", "bride_name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        if not _NAME_RE.match(v):
            raise ValueError("le nom ne peut contenir que des lettres")
        return v

    @field_validator("wedding_date")
    @classmethod
    def _check_date(cls, v: str) -> str:
        return _not_in_past(v, "La date du mariage")

    @field_validator("wedding_time")
    @classmethod
    def _check_time(cls, v: str) -> str:
        if not _TIME_RE.match(v):
            raise ValueError("heure invalide (HH:mm attendu)")
        return v

    @field_validator("groom_contact", "bride_contact")
    @classmethod
    def _check_phone(cls, v: Optional[str]) -> Optional[str]:
        if v and not _PHONE_RE.match(v):
            raise ValueError("numéro de mobile invalide")
        return v

    @field_validator("rsvp_deadline")
    @classmethod
    def _check_deadline(cls, v: Optional[str]) -> Optional[str]:
        return _not_in_past(v, "La date limite de réponse") if v else v

    @field_validator("background_image_url")
    @classmethod
    def _check_url(cls, v: Optional[str]) -> Optional[str]:
        if v:
            try:
                _URL.validate_python(v)
            except ValidationError:
                raise ValueError("URL d'image invalide") from None
        return v
