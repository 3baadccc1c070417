# core/payloads.py
# Multipart forms carry structured data as JSON strings; these helpers decode and validate them.
import json
from typing import Any, Type, TypeVar

from fastapi import HTTPException
from pydantic import BaseModel, ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_json_field(name: str, value: Any, default: Any = None) -> Any:
    if value is None or value == "":
        return default
    if isinstance(value, (dict, list)):
        return value
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail=f"Invalid JSON in {name} field")


def validate_payload(schema: Type[SchemaT], data: Any) -> SchemaT:
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Request data must be a JSON object")
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(p) for p in first["loc"])
        raise HTTPException(status_code=400, detail=f"Invalid value for {field}: {first['msg']}")


def require_object(value: Any, detail: str) -> dict:
    if not value or not isinstance(value, dict):
        raise HTTPException(status_code=400, detail=detail)
    return value
