import json
import logging
import math
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict

log = logging.getLogger(__name__)

TRUE_VALUES = {"true", "1", "on", "yes"}


def _blank(value: Any) -> bool:
    return isinstance(value, str) and value.strip() == ""


def coerce_bool(value: Any) -> Any:
    """Multipart booleans arrive as "true"/"false"; any other string counts as False."""
    if value is None or isinstance(value, bool):
        return value
    if _blank(value):
        return None
    if isinstance(value, str):
        return value.strip().lower() in TRUE_VALUES
    return bool(value)


def _finite_float(text: str) -> float:
    number = float(text.strip())
    if not math.isfinite(number):
        raise ValueError(f"{text!r} is not a finite number")
    return number


def coerce_int(value: Any) -> Any:
    if _blank(value):
        return None
    if isinstance(value, str):
        return int(_finite_float(value))
    return value


def coerce_float(value: Any) -> Any:
    if _blank(value):
        return None
    if isinstance(value, str):
        return _finite_float(value)
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("not a finite number")
    return value


def coerce_str_list(value: Any) -> Any:
    """Accepts a list, a JSON-encoded list or a single string."""
    if value is None or isinstance(value, list):
        return value
    if isinstance(value, str):
        if _blank(value):
            return []
        try:
            decoded = json.loads(value)
        except ValueError:
            return [value]
        return decoded if isinstance(decoded, list) else [value]
    return value


def coerce_specs(value: Any) -> Any:
    """Specs are sent as a JSON string in forms; unparsable input becomes an empty list."""
    if not isinstance(value, str):
        return value
    if _blank(value):
        return []
    try:
        decoded = json.loads(value)
    except ValueError as e:
        log.warning("Error parsing specs: %s", e)
        return []
    return decoded if isinstance(decoded, list) else []


FormBool = Annotated[Optional[bool], BeforeValidator(coerce_bool)]
FormInt = Annotated[Optional[int], BeforeValidator(coerce_int)]
FormFloat = Annotated[Optional[float], BeforeValidator(coerce_float)]
FormStrList = Annotated[Optional[List[str]], BeforeValidator(coerce_str_list)]


class SpecSchema(BaseModel):
    key: Optional[str] = None
    value: Any = None


FormSpecs = Annotated[Optional[List[SpecSchema]], BeforeValidator(coerce_specs)]


class EntityInSchema(BaseModel):
    """
    Base for request bodies. Unknown fields are ignored; fields left out or
    sent empty are not written.
    """

    model_config = ConfigDict(extra="ignore")

    def to_client_item(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class EntitySchema(BaseModel):
    """Base for responses; stored attributes without a declared field pass through."""

    model_config = ConfigDict(extra="allow")

    id: str
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str
