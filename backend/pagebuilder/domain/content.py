"""
Section content model.

Every section carries exactly one of six content variants, discriminated by
its ``type`` tag. The wire shape (what page-builder clients send and read)
uses camelCase keys; the Python attributes are snake_case.
"""
from typing import Annotated, Any, Dict, List, Literal, Optional, Type, Union, get_args

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


SectionType = Literal["image-text", "slider", "hero", "text-block", "gallery", "contact-form"]
SECTION_TYPES = get_args(SectionType)

TextAlignment = Literal["left", "center", "right"]
ImagePosition = Literal["left", "right"]
GalleryLayout = Literal["grid", "masonry", "carousel"]
FormFieldType = Literal["text", "email", "tel", "textarea", "select"]


def _positive_number(value: Any) -> Any:
    # bool is an int subclass and must not pass as a number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    if value <= 0:
        raise ValueError("must be a positive number")
    return value


RequiredText = Annotated[StrictStr, Field(min_length=1)]
PositiveNumber = Annotated[Any, AfterValidator(_positive_number)]


class ContentModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# -------------------------------------------------
# Nested structures
# -------------------------------------------------

class CtaButton(ContentModel):
    text: RequiredText
    url: RequiredText


class Slide(ContentModel):
    image_url: RequiredText
    image_alt: Optional[StrictStr] = None
    title: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    cta_button: Optional[CtaButton] = None


class GalleryImage(ContentModel):
    url: RequiredText
    alt: RequiredText
    caption: Optional[StrictStr] = None


class FormField(ContentModel):
    name: RequiredText
    label: RequiredText
    type: FormFieldType
    required: StrictBool
    placeholder: Optional[StrictStr] = None
    options: Optional[List[StrictStr]] = None  # select fields only


# -------------------------------------------------
# Variants
# -------------------------------------------------

class ImageTextContent(ContentModel):
    type: Literal["image-text"] = "image-text"
    image_url: RequiredText
    image_alt: Optional[StrictStr] = None
    title: RequiredText
    text: RequiredText
    image_position: ImagePosition
    cta_button: Optional[CtaButton] = None


class HeroContent(ContentModel):
    type: Literal["hero"] = "hero"
    background_image: RequiredText
    background_image_alt: RequiredText
    title: RequiredText
    subtitle: RequiredText
    cta_button: CtaButton
    text_alignment: TextAlignment


class SliderContent(ContentModel):
    type: Literal["slider"] = "slider"
    auto_play: Optional[StrictBool] = None
    duration: Optional[PositiveNumber] = None  # seconds
    slides: Annotated[List[Slide], Field(min_length=1)]


class TextBlockContent(ContentModel):
    type: Literal["text-block"] = "text-block"
    title: Optional[StrictStr] = None
    content: RequiredText
    text_alignment: TextAlignment
    background_color: Optional[StrictStr] = None


class GalleryContent(ContentModel):
    type: Literal["gallery"] = "gallery"
    title: Optional[StrictStr] = None
    images: Annotated[List[GalleryImage], Field(min_length=1)]
    layout: GalleryLayout
    columns: Annotated[StrictInt, Field(ge=1)]


class ContactFormContent(ContentModel):
    type: Literal["contact-form"] = "contact-form"
    title: RequiredText
    description: Optional[StrictStr] = None
    fields: Annotated[List[FormField], Field(min_length=1)]
    submit_button_text: RequiredText
    success_message: RequiredText


SectionContent = Annotated[
    Union[
        ImageTextContent,
        SliderContent,
        HeroContent,
        TextBlockContent,
        GalleryContent,
        ContactFormContent,
    ],
    Field(discriminator="type"),
]

CONTENT_MODELS: Dict[str, Type[ContentModel]] = {
    "image-text": ImageTextContent,
    "slider": SliderContent,
    "hero": HeroContent,
    "text-block": TextBlockContent,
    "gallery": GalleryContent,
    "contact-form": ContactFormContent,
}


def dump_content(content: ContentModel) -> Dict[str, Any]:
    """Wire/storage shape of a content variant: camelCase, unset optionals omitted."""
    return content.model_dump(by_alias=True, exclude_none=True)
