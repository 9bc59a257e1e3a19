"""
Tests for the section content schemas and validate_content.
"""
import copy

import pytest

from pagebuilder.domain.content import (
    CONTENT_MODELS,
    SECTION_TYPES,
    GalleryContent,
    HeroContent,
    SliderContent,
    dump_content,
)
from pagebuilder.domain.exceptions import ContentValidationError
from pagebuilder.domain.validation import validate_content
from pagebuilder.services.catalog import SECTION_TYPE_CATALOG


MINIMAL_CONTENT = {
    "image-text": {
        "imageUrl": "/uploads/a.jpg",
        "title": "Title",
        "text": "Body",
        "imagePosition": "left",
    },
    "hero": {
        "backgroundImage": "/uploads/bg.jpg",
        "backgroundImageAlt": "Skyline",
        "title": "Welcome",
        "subtitle": "Hello there",
        "ctaButton": {"text": "Go", "url": "/go"},
        "textAlignment": "center",
    },
    "slider": {
        "slides": [{"imageUrl": "/uploads/s1.jpg"}],
    },
    "text-block": {
        "content": "Some words",
        "textAlignment": "right",
    },
    "gallery": {
        "images": [{"url": "/uploads/g1.jpg", "alt": "One"}],
        "layout": "masonry",
        "columns": 2,
    },
    "contact-form": {
        "title": "Contact",
        "fields": [{"name": "email", "label": "Email", "type": "email", "required": True}],
        "submitButtonText": "Send",
        "successMessage": "Thanks",
    },
}

REQUIRED_FIELDS = [
    (section_type, field)
    for section_type, content in MINIMAL_CONTENT.items()
    for field in content
]


class TestMinimalContent:

    @pytest.mark.parametrize("section_type", sorted(MINIMAL_CONTENT))
    def test_minimal_payload_is_valid(self, section_type):
        """The smallest valid payload of every type passes."""
        content = validate_content(section_type, MINIMAL_CONTENT[section_type])

        assert content.type == section_type

    @pytest.mark.parametrize("section_type,field", REQUIRED_FIELDS)
    def test_missing_required_field_is_named(self, section_type, field):
        """Dropping any single required field fails and names that field."""
        payload = copy.deepcopy(MINIMAL_CONTENT[section_type])
        del payload[field]

        with pytest.raises(ContentValidationError) as exc_info:
            validate_content(section_type, payload)

        assert field in exc_info.value.fields
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("entry", SECTION_TYPE_CATALOG, ids=lambda e: e["type"])
    def test_catalog_examples_are_valid(self, entry):
        """Every example offered to clients passes its own schema."""
        validate_content(entry["type"], entry["example"])

    def test_every_section_type_has_a_schema(self):
        """Each section type maps to exactly one content model tagged with it."""
        assert set(CONTENT_MODELS) == set(SECTION_TYPES)
        for section_type, model in CONTENT_MODELS.items():
            assert model.model_fields["type"].default == section_type


class TestValidationRules:

    def test_section_type_overrides_payload_tag(self):
        """The type the section declares wins over the tag in the payload."""
        payload = {**MINIMAL_CONTENT["hero"], "type": "gallery"}

        content = validate_content("hero", payload)

        assert isinstance(content, HeroContent)

    def test_unknown_section_type(self):
        with pytest.raises(ContentValidationError) as exc_info:
            validate_content("carousel", {})

        assert exc_info.value.fields == ["type"]

    def test_content_must_be_an_object(self):
        with pytest.raises(ContentValidationError) as exc_info:
            validate_content("text-block", ["not", "an", "object"])

        assert exc_info.value.fields == ["content"]

    def test_all_violations_are_collected(self):
        """One error lists every failed field, not just the first."""
        with pytest.raises(ContentValidationError) as exc_info:
            validate_content("image-text", {"imagePosition": "top"})

        fields = exc_info.value.fields
        assert {"imageUrl", "title", "text", "imagePosition"} <= set(fields)
        assert len(exc_info.value.details) >= 4

    def test_empty_strings_are_rejected(self):
        payload = {**MINIMAL_CONTENT["text-block"], "content": ""}

        with pytest.raises(ContentValidationError) as exc_info:
            validate_content("text-block", payload)

        assert exc_info.value.fields == ["content"]

    def test_nested_violation_paths(self):
        """Violations inside lists carry the index in their path."""
        payload = {
            "slides": [
                {"imageUrl": "/uploads/s1.jpg"},
                {"title": "No image"},
            ]
        }

        with pytest.raises(ContentValidationError) as exc_info:
            validate_content("slider", payload)

        assert exc_info.value.fields == ["slides[1].imageUrl"]

    def test_empty_lists_are_rejected(self):
        with pytest.raises(ContentValidationError) as exc_info:
            validate_content("slider", {"slides": []})

        assert exc_info.value.fields == ["slides"]

    @pytest.mark.parametrize("auto_play", ["true", 1])
    def test_booleans_are_strict(self, auto_play):
        payload = {**MINIMAL_CONTENT["slider"], "autoPlay": auto_play}

        with pytest.raises(ContentValidationError) as exc_info:
            validate_content("slider", payload)

        assert exc_info.value.fields == ["autoPlay"]

    @pytest.mark.parametrize("duration", [0, -3, True, "5"])
    def test_duration_must_be_a_positive_number(self, duration):
        payload = {**MINIMAL_CONTENT["slider"], "duration": duration}

        with pytest.raises(ContentValidationError) as exc_info:
            validate_content("slider", payload)

        assert exc_info.value.fields == ["duration"]

    def test_fractional_duration_is_accepted(self):
        content = validate_content("slider", {**MINIMAL_CONTENT["slider"], "duration": 2.5})

        assert isinstance(content, SliderContent)
        assert content.duration == 2.5

    @pytest.mark.parametrize("columns", [0, "3", 2.0])
    def test_gallery_columns_must_be_a_positive_integer(self, columns):
        payload = {**MINIMAL_CONTENT["gallery"], "columns": columns}

        with pytest.raises(ContentValidationError) as exc_info:
            validate_content("gallery", payload)

        assert exc_info.value.fields == ["columns"]

    def test_closed_choices(self):
        payload = {**MINIMAL_CONTENT["gallery"], "layout": "list"}

        with pytest.raises(ContentValidationError) as exc_info:
            validate_content("gallery", payload)

        assert exc_info.value.fields == ["layout"]

    def test_form_field_type_is_checked(self):
        payload = copy.deepcopy(MINIMAL_CONTENT["contact-form"])
        payload["fields"][0]["type"] = "checkbox"

        with pytest.raises(ContentValidationError) as exc_info:
            validate_content("contact-form", payload)

        assert exc_info.value.fields == ["fields[0].type"]

    def test_incomplete_cta_button(self):
        payload = {**MINIMAL_CONTENT["hero"], "ctaButton": {"text": "Go"}}

        with pytest.raises(ContentValidationError) as exc_info:
            validate_content("hero", payload)

        assert exc_info.value.fields == ["ctaButton.url"]


class TestDumpContent:

    def test_wire_shape_is_camel_case_without_unset_optionals(self):
        content = validate_content("gallery", MINIMAL_CONTENT["gallery"])

        data = dump_content(content)

        assert isinstance(content, GalleryContent)
        assert data == {
            "type": "gallery",
            "images": [{"url": "/uploads/g1.jpg", "alt": "One"}],
            "layout": "masonry",
            "columns": 2,
        }

    def test_unknown_keys_are_dropped(self):
        payload = {**MINIMAL_CONTENT["text-block"], "fontSize": 12}

        data = dump_content(validate_content("text-block", payload))

        assert "fontSize" not in data
