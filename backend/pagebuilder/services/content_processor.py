"""
Turns raw multipart submissions into candidate section content.

Page-builder clients send generic positional text fields (``text_1`` ..
``text_4``) whose meaning depends on the section type, plus uploaded files
keyed by role (``image``, ``backgroundImage``, ``images``):

    type          text_1   text_2       text_3             text_4          files
    image-text    title    text         CTA text                           image
    hero          title    subtitle     CTA text                           backgroundImage
    gallery       title                                                    images
    slider                                                                 images (+ slideData JSON)
    text-block    title    content
    contact-form  title    description  submitButtonText   successMessage  (formFields JSON)

The processor only produces a candidate in wire shape; it is never
persisted without passing `validate_content` first.
"""
import json
from typing import Any, Dict, List, Mapping, Optional, Sequence, assert_never

from pagebuilder.domain.content import SECTION_TYPES, SectionType
from pagebuilder.domain.exceptions import ContentValidationError, MissingRequiredFile
from pagebuilder.domain.uploads import UploadedFile

FILE_ROLES: Dict[str, Optional[str]] = {
    "image-text": "image",
    "hero": "backgroundImage",
    "gallery": "images",
    "slider": "images",
    "text-block": None,
    "contact-form": None,
}

DEFAULT_GALLERY_LAYOUT = "grid"
DEFAULT_GALLERY_COLUMNS = 3


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


def _invalid(field: str, message: str) -> ContentValidationError:
    return ContentValidationError("Invalid form data", [f"{field}: {message}"], [field])


def parse_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise _invalid(field, "must be an integer")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise _invalid(field, "must be an integer") from None


def parse_number(value: Any, field: str):
    if isinstance(value, bool):
        raise _invalid(field, "must be a number")
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise _invalid(field, "must be a number") from None


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def parse_json_objects(value: Any, field: str) -> List[Dict[str, Any]]:
    """
    Decode a JSON side-channel form value into a list of objects.

    Anything else (broken JSON, a non-array, non-object entries) rejects
    the whole submission.
    """
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as exc:
            raise ContentValidationError(
                f"Invalid {field} JSON format", [f"{field}: {exc.msg}"], [field]
            ) from exc

    if not isinstance(value, list):
        raise ContentValidationError(
            f"Invalid {field} JSON format", [f"{field}: must be a JSON array"], [field]
        )

    bad = [f"{field}[{index}]" for index, entry in enumerate(value) if not isinstance(entry, dict)]
    if bad:
        raise ContentValidationError(
            f"Invalid {field} JSON format", [f"{path}: must be an object" for path in bad], bad
        )
    return value


class _Fields:
    """
    Form value lookup with fallback to the previously stored content.

    A form key with a non-blank value always wins; otherwise the stored
    value is kept, and only then the default applies. Browsers submit
    unfilled inputs as empty strings, so those count as absent.
    """

    def __init__(self, form: Mapping[str, Any], existing: Optional[Mapping[str, Any]]):
        self.form = form
        self.existing = existing or {}

    def supplied(self, form_key: str) -> bool:
        return self.form.get(form_key) not in (None, "")

    def get(self, form_key: str, content_key: str, default: Any = None) -> Any:
        if self.supplied(form_key):
            return self.form[form_key]
        return self.existing.get(content_key, default)

    def cta_button(
        self,
        text_key: str = "text_3",
        url_key: str = "ctaButtonUrl",
        complete_only: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """
        Merge the CTA text and url with the stored button, part by part.

        With `complete_only` a button missing either part is left out
        entirely instead of being handed to validation half filled.
        """
        previous = self.existing.get("ctaButton") or {}
        button = _compact({
            "text": self.form.get(text_key) if self.supplied(text_key) else previous.get("text") or None,
            "url": self.form.get(url_key) if self.supplied(url_key) else previous.get("url") or None,
        })
        if complete_only and len(button) < 2:
            return None
        return button or None


class SectionContentProcessor:

    def build(
        self,
        section_type: SectionType,
        files: Sequence[UploadedFile],
        form: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """Candidate content for a new section."""
        return self._process(section_type, files, form, None)

    def build_for_update(
        self,
        section_type: SectionType,
        files: Sequence[UploadedFile],
        form: Mapping[str, Any],
        existing_content: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Candidate content replacing `existing_content`.

        Fields and file roles absent from the request keep their stored
        values; list fields are replaced wholesale once new files arrive.
        """
        return self._process(section_type, files, form, existing_content or {})

    def _process(self, section_type, files, form, existing):
        if section_type not in SECTION_TYPES:
            raise ContentValidationError(
                "Unsupported section type",
                [f"type: must be one of {', '.join(SECTION_TYPES)}"],
                ["type"],
            )

        fields = _Fields(form, existing)
        is_update = existing is not None

        if section_type == "image-text":
            return self._image_text(files, fields, is_update)
        elif section_type == "hero":
            return self._hero(files, fields, is_update)
        elif section_type == "gallery":
            return self._gallery(files, fields, is_update)
        elif section_type == "slider":
            return self._slider(files, fields, is_update)
        elif section_type == "text-block":
            return self._text_block(fields)
        elif section_type == "contact-form":
            return self._contact_form(fields)
        else:
            assert_never(section_type)

    # -------------------------------------------------
    # File roles
    # -------------------------------------------------

    @staticmethod
    def _files_for(section_type: str, files: Sequence[UploadedFile]) -> List[UploadedFile]:
        role = FILE_ROLES[section_type]
        return [f for f in files if f.field_name == role]

    # -------------------------------------------------
    # Variants
    # -------------------------------------------------

    def _image_text(self, files, fields: _Fields, is_update: bool) -> Dict[str, Any]:
        uploads = self._files_for("image-text", files)
        image = uploads[0] if uploads else None
        if image is None and not is_update:
            raise MissingRequiredFile("Image file is required for image-text section")

        if fields.supplied("imageAlt"):
            image_alt = fields.form["imageAlt"]
        elif image is not None:
            image_alt = image.original_name
        else:
            image_alt = fields.existing.get("imageAlt")

        return _compact({
            "type": "image-text",
            "imageUrl": image.url if image else fields.existing.get("imageUrl"),
            "imageAlt": image_alt,
            "title": fields.get("text_1", "title"),
            "text": fields.get("text_2", "text"),
            "imagePosition": fields.get("imagePosition", "imagePosition"),
            "ctaButton": fields.cta_button(complete_only=True),
        })

    def _hero(self, files, fields: _Fields, is_update: bool) -> Dict[str, Any]:
        uploads = self._files_for("hero", files)
        background = uploads[0] if uploads else None
        if background is None and not is_update:
            raise MissingRequiredFile("Background image file is required for hero section")

        if fields.supplied("backgroundImageAlt"):
            background_alt = fields.form["backgroundImageAlt"]
        elif background is not None:
            background_alt = background.original_name
        else:
            background_alt = fields.existing.get("backgroundImageAlt")

        return _compact({
            "type": "hero",
            "backgroundImage": background.url if background else fields.existing.get("backgroundImage"),
            "backgroundImageAlt": background_alt,
            "title": fields.get("text_1", "title"),
            "subtitle": fields.get("text_2", "subtitle"),
            "textAlignment": fields.get("textAlignment", "textAlignment"),
            "ctaButton": fields.cta_button(),
        })

    def _gallery(self, files, fields: _Fields, is_update: bool) -> Dict[str, Any]:
        uploads = self._files_for("gallery", files)
        if not uploads and not is_update:
            raise MissingRequiredFile("At least one image is required for gallery section")

        if uploads:
            images = [{"url": f.url, "alt": f.original_name, "caption": ""} for f in uploads]
        else:
            images = fields.existing.get("images")

        columns = fields.get("columns", "columns", DEFAULT_GALLERY_COLUMNS)

        return _compact({
            "type": "gallery",
            "title": fields.get("text_1", "title"),
            "images": images,
            "layout": fields.get("layout", "layout", DEFAULT_GALLERY_LAYOUT),
            "columns": parse_int(columns, "columns"),
        })

    def _slider(self, files, fields: _Fields, is_update: bool) -> Dict[str, Any]:
        uploads = self._files_for("slider", files)
        if not uploads and not is_update:
            raise MissingRequiredFile("At least one image is required for slider section")

        # Parsed before anything else so a broken blob rejects the whole build
        slide_data: List[Dict[str, Any]] = []
        if fields.supplied("slideData"):
            slide_data = parse_json_objects(fields.form["slideData"], "slideData")

        if uploads:
            slides = [
                self._slide(
                    {"imageUrl": upload.url, "imageAlt": upload.original_name, "title": "", "description": ""},
                    slide_data[index] if index < len(slide_data) else {},
                )
                for index, upload in enumerate(uploads)
            ]
        else:
            slides = [
                self._slide(dict(slide), slide_data[index] if index < len(slide_data) else {})
                for index, slide in enumerate(fields.existing.get("slides") or [])
            ]

        auto_play = fields.get("autoPlay", "autoPlay")
        duration = fields.get("duration", "duration")

        return _compact({
            "type": "slider",
            "autoPlay": parse_bool(auto_play) if auto_play is not None else None,
            "duration": parse_number(duration, "duration") if duration is not None else None,
            "slides": slides,
        })

    @staticmethod
    def _slide(slide: Dict[str, Any], data: Mapping[str, Any]) -> Dict[str, Any]:
        for key in ("imageAlt", "title", "description", "ctaButton"):
            if data.get(key):
                slide[key] = data[key]
        return slide

    def _text_block(self, fields: _Fields) -> Dict[str, Any]:
        return _compact({
            "type": "text-block",
            "title": fields.get("text_1", "title"),
            "content": fields.get("text_2", "content"),
            "textAlignment": fields.get("textAlignment", "textAlignment"),
            "backgroundColor": fields.get("backgroundColor", "backgroundColor"),
        })

    def _contact_form(self, fields: _Fields) -> Dict[str, Any]:
        if fields.supplied("formFields"):
            form_fields = parse_json_objects(fields.form["formFields"], "formFields")
        else:
            form_fields = fields.existing.get("fields", [])

        return _compact({
            "type": "contact-form",
            "title": fields.get("text_1", "title"),
            "description": fields.get("text_2", "description"),
            "fields": form_fields,
            "submitButtonText": fields.get("text_3", "submitButtonText"),
            "successMessage": fields.get("text_4", "successMessage"),
        })
