"""Общие типы полей для схем сущностей"""
import unicodedata
from datetime import date, datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BeforeValidator, StringConstraints

FORBIDDEN_NAME_CHARS = set("!@#$%^&*()_+=[]{};:\"<>?|/\\`~")


def _validate_name(value: str) -> str:
    for char in value:
        # эмодзи и прочие пиктограммы относятся к категории So
        if char in FORBIDDEN_NAME_CHARS or unicodedata.category(char) == "So":
            raise ValueError("Name must not contain emoji or special symbols")
    return value


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _truncate_to_date(value):
    if isinstance(value, datetime):
        return value.date()
    return value


Name = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=255),
    AfterValidator(_validate_name),
]

Description = Annotated[str, StringConstraints(strip_whitespace=True, max_length=255)]

TransactedDate = Annotated[date, BeforeValidator(_truncate_to_date)]

# в хранилище время лежит без часового пояса, в UTC
UtcDateTime = Annotated[datetime, AfterValidator(_to_naive_utc)]
