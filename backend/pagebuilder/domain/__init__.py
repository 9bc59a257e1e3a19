from .content import (
    CONTENT_MODELS,
    SECTION_TYPES,
    ContactFormContent,
    GalleryContent,
    HeroContent,
    ImageTextContent,
    SectionContent,
    SectionType,
    SliderContent,
    TextBlockContent,
    dump_content,
)
from .exceptions import (
    Conflict,
    ContentValidationError,
    DomainError,
    HierarchyError,
    InvalidUpload,
    MissingRequiredFile,
    NotFound,
)
from .uploads import UploadedFile, generate_file_url
from .validation import validate_content
