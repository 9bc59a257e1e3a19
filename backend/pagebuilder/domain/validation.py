from typing import Any, List, Mapping, Tuple

from pydantic import ValidationError

from .content import CONTENT_MODELS, SECTION_TYPES, SectionContent
from .exceptions import ContentValidationError


def _format_loc(loc: Tuple[Any, ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "content"


def _collect_violations(exc: ValidationError) -> Tuple[List[str], List[str]]:
    fields: List[str] = []
    details: List[str] = []

    for error in exc.errors(include_url=False):
        path = _format_loc(error["loc"])
        message = error["msg"]
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]

        if path not in fields:
            fields.append(path)
        details.append(f"{path}: {message}")

    return fields, details


def validate_content(section_type: str, raw_content: Any) -> SectionContent:
    """
    Validate untyped content against the schema of `section_type`.

    The section type always wins over whatever ``type`` the payload carries.
    Every violation is collected before failing; a partially valid object
    is never returned.
    """
    model = CONTENT_MODELS.get(section_type)
    if model is None:
        raise ContentValidationError(
            "Unsupported section type",
            [f"type: must be one of {', '.join(SECTION_TYPES)}"],
            ["type"],
        )

    if not isinstance(raw_content, Mapping):
        raise ContentValidationError(
            f"Invalid {section_type} content",
            ["content: must be an object"],
            ["content"],
        )

    payload = {**raw_content, "type": section_type}

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        fields, details = _collect_violations(exc)
        raise ContentValidationError(
            f"Invalid {section_type} content", details, fields
        ) from exc
