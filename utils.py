from datetime import date, datetime
from typing import Iterable, Iterator, Mapping, Optional, Type, TypeVar

import pytz
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

import config
from errors import ValidationError

T = TypeVar("T", bound=BaseModel)


def dict_to_model(model_cls: Type[T], data: Mapping, index: Optional[int] = None) -> T:
    valid_keys = set(model_cls.model_fields.keys())
    filtered = {k: v for k, v in data.items() if k in valid_keys}
    try:
        return model_cls(**filtered)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or model_cls.__name__}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(f"invalid {model_cls.__name__}: {problems}", index=index, record=data) from e


def coerce_records(model_cls: Type[T], records: Iterable) -> Iterator[T]:
    """Yield ``records`` as ``model_cls`` instances, validating raw mappings."""
    for index, record in enumerate(records):
        if isinstance(record, model_cls):
            yield record
        elif isinstance(record, Mapping):
            yield dict_to_model(model_cls, record, index=index)
        else:
            raise ValidationError(
                f"expected {model_cls.__name__} or mapping, got {type(record).__name__}",
                index=index,
                record=record,
            )


def check_count(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValidationError(f"{name} must not be negative, got {value}")
    return value


def parse_iso_date(value: str) -> date:
    if not isinstance(value, str):
        raise ValueError(f"expected a YYYY-MM-DD string, got {value!r}")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"malformed date {value!r}, expected YYYY-MM-DD") from None


def parse_iso_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not isinstance(value, str):
        raise ValueError(f"expected an ISO-8601 string, got {value!r}")
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        raise ValueError(f"malformed timestamp {value!r}") from None
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt


def current_date(timezone=None) -> date:
    return datetime.now(timezone or config.TIMEZONE).date()
