"""Section types offered to page-builder clients, with an example payload each."""
from typing import Any, Dict, List

from .content_processor import FILE_ROLES

SECTION_TYPE_CATALOG: List[Dict[str, Any]] = [
    {
        "type": "image-text",
        "name": "Image & Text",
        "description": "A component with an image on one side and text content on the other",
        "formFields": {"text_1": "title", "text_2": "text", "text_3": "ctaButton.text"},
        "example": {
            "type": "image-text",
            "imageUrl": "/uploads/image.jpg",
            "imageAlt": "Example image",
            "title": "Amazing Title",
            "text": "This is some amazing content text.",
            "imagePosition": "left",
            "ctaButton": {"text": "Learn More", "url": "/about"},
        },
    },
    {
        "type": "hero",
        "name": "Hero Section",
        "description": "A full-width hero section with background image and call-to-action",
        "formFields": {"text_1": "title", "text_2": "subtitle", "text_3": "ctaButton.text"},
        "example": {
            "type": "hero",
            "backgroundImage": "/uploads/hero-bg.jpg",
            "backgroundImageAlt": "City skyline",
            "title": "Transform Your Business",
            "subtitle": "Join thousands of companies",
            "ctaButton": {"text": "Get Started", "url": "/signup"},
            "textAlignment": "center",
        },
    },
    {
        "type": "slider",
        "name": "Image Slider",
        "description": "An image carousel with multiple slides",
        "formFields": {},
        "example": {
            "type": "slider",
            "autoPlay": True,
            "duration": 5,
            "slides": [
                {
                    "imageUrl": "/uploads/slide1.jpg",
                    "imageAlt": "Slide 1",
                    "title": "Slide Title",
                    "description": "Slide description",
                    "ctaButton": {"text": "View More", "url": "/products"},
                },
                {
                    "imageUrl": "/uploads/slide2.jpg",
                    "imageAlt": "Slide 2",
                    "title": "Another Slide",
                    "description": "Another description",
                },
            ],
        },
    },
    {
        "type": "text-block",
        "name": "Text Block",
        "description": "Simple text content with alignment options",
        "formFields": {"text_1": "title", "text_2": "content"},
        "example": {
            "type": "text-block",
            "title": "About Us",
            "content": "We are a company dedicated to excellence and innovation.",
            "textAlignment": "center",
            "backgroundColor": "#f8f9fa",
        },
    },
    {
        "type": "gallery",
        "name": "Image Gallery",
        "description": "A collection of images with different layout options",
        "formFields": {"text_1": "title"},
        "example": {
            "type": "gallery",
            "title": "Our Portfolio",
            "images": [
                {"url": "/uploads/img1.jpg", "alt": "Project 1", "caption": "E-commerce Platform"},
                {"url": "/uploads/img2.jpg", "alt": "Project 2", "caption": "Mobile App"},
                {"url": "/uploads/img3.jpg", "alt": "Project 3", "caption": "Web Dashboard"},
            ],
            "layout": "grid",
            "columns": 3,
        },
    },
    {
        "type": "contact-form",
        "name": "Contact Form",
        "description": "A customizable contact form with various field types",
        "formFields": {
            "text_1": "title",
            "text_2": "description",
            "text_3": "submitButtonText",
            "text_4": "successMessage",
        },
        "example": {
            "type": "contact-form",
            "title": "Contact Us",
            "description": "Get in touch with us and we will respond as soon as possible.",
            "fields": [
                {"name": "name", "label": "Full Name", "type": "text", "required": True, "placeholder": "Your full name"},
                {"name": "email", "label": "Email", "type": "email", "required": True, "placeholder": "your@email.com"},
                {"name": "subject", "label": "Subject", "type": "select", "required": True, "options": ["General", "Support", "Sales"]},
                {"name": "message", "label": "Message", "type": "textarea", "required": True, "placeholder": "Your message here..."},
            ],
            "submitButtonText": "Send Message",
            "successMessage": "Thank you for your message! We will get back to you soon.",
        },
    },
]


def section_types() -> List[Dict[str, Any]]:
    return [
        {
            **entry,
            "fileRole": FILE_ROLES[entry["type"]],
            "requiresFiles": FILE_ROLES[entry["type"]] is not None,
        }
        for entry in SECTION_TYPE_CATALOG
    ]
