from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError
from starlette.datastructures import UploadFile

from app.core.errors import ValidationError

SchemaType = TypeVar("SchemaType", bound=BaseModel)

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@dataclass
class RequestPayload:
    """Scalar fields and uploaded files of a JSON or multipart request."""

    fields: Dict[str, Any] = field(default_factory=dict)
    files: Dict[str, List[UploadFile]] = field(default_factory=dict)

    def file(self, name: str) -> Optional[UploadFile]:
        uploads = self.files.get(name)
        return uploads[0] if uploads else None


async def read_payload(request: Request) -> RequestPayload:
    """
    Reads the body of a write request. Multipart forms are split into string
    fields and files; repeated string fields become lists. JSON bodies are
    taken as-is.
    """
    content_type = request.headers.get("content-type", "")
    payload = RequestPayload()

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        for key in form.keys():
            values = form.getlist(key)
            uploads = [v for v in values if isinstance(v, UploadFile)]
            strings = [v for v in values if not isinstance(v, UploadFile)]
            if uploads:
                payload.files[key] = uploads
            if strings:
                payload.fields[key] = strings[0] if len(strings) == 1 else strings
        return payload

    body = await request.body()
    if not body:
        return payload
    try:
        data = await request.json()
    except ValueError as e:
        raise ValidationError("Request body is not valid JSON") from e
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    payload.fields = data
    return payload


def validate_payload(schema: Type[SchemaType], data: Dict[str, Any]) -> SchemaType:
    """Runs the entity schema over raw fields, reporting failures as ValidationError."""
    try:
        return schema.model_validate(data)
    except SchemaValidationError as e:
        problems = []
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            problems.append(f"{location}: {error['msg']}" if location else error["msg"])
        raise ValidationError("; ".join(problems)) from e
