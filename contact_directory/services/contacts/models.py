"""Contact service value models — validated fields and search filters."""

from enum import Enum

from pydantic import BaseModel, Field


class ContactField(str, Enum):
    NAME = "name"
    PHONE = "phone"
    EMAIL = "email"


class ContactFields(BaseModel):
    """A validated, normalized name/phone/email triple ready to persist."""

    name: str
    phone: str
    email: str | None = None


class SubstringPredicate(BaseModel):
    """``field`` contains ``term`` as a literal substring."""

    field: ContactField
    term: str = Field(..., min_length=1)
    case_sensitive: bool = False

    def matches(self, value: str | None) -> bool:
        if value is None:
            return False
        if self.case_sensitive:
            return self.term in value
        return self.term.casefold() in value.casefold()


class ContactFilter(BaseModel):
    """OR-combination of substring predicates. No predicates matches everything."""

    any_of: list[SubstringPredicate] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.any_of
