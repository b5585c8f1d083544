"""Domain models - records persisted in the portal's JSON documents"""

from decimal import Decimal
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class PortalModel(BaseModel):
    """Base for persisted records: camelCase on the wire, case-insensitive on input"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def match_field_names(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        aliases: Dict[str, str] = {}
        for name, field in cls.model_fields.items():
            alias = field.alias or name
            aliases[alias.lower()] = alias
            aliases[name.lower()] = alias

        return {
            (aliases.get(key.lower(), key) if isinstance(key, str) else key): value
            for key, value in data.items()
        }


class Purchase(PortalModel):
    """Purchase made by the customer, addressed by its id"""

    id: str = ""
    price: Decimal = Decimal("0")
    status: str = ""

    def matches_id(self, purchase_id: str) -> bool:
        return self.id.lower() == purchase_id.lower()


class Movement(PortalModel):
    """Account movement, addressed by its position in the collection"""

    date: str = ""
    detail: str = ""
    amount: str = ""  # kept as text, never parsed


class Profile(PortalModel):
    """Customer's personal data (singleton)"""

    person_type: str = ""
    name: str = ""
    surname: str = ""
    email: str = ""
    tax_id: str = ""
    national_id: str = ""
    phone1: str = ""
    phone2: str = ""
    address1: str = ""
    address2: str = ""


class PurchasesDocument(PortalModel):
    """Shape of the purchases file: {"purchases": [...]}"""

    purchases: List[Purchase] = Field(default_factory=list)

    @field_validator("purchases", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class MovementsDocument(PortalModel):
    """Shape of the movements file: {"movements": [...]}"""

    movements: List[Movement] = Field(default_factory=list)

    @field_validator("movements", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value
