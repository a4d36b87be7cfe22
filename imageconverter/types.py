"""Option types, names and errors used by the image operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OutputFormat(str, Enum):
    """Image formats the service can encode to."""

    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"


class FilterName(str, Enum):
    """Filters that can be applied to an image."""

    BLUR = "blur"
    GRAYSCALE = "grayscale"


@dataclass(frozen=True)
class ConvertOptions:
    """Target format and encoder quality for an output image."""

    output_format: OutputFormat | str
    quality: int = 80


@dataclass(frozen=True)
class FilterSettings:
    """A filter to apply and its strength."""

    name: FilterName | str
    intensity: int = 10


class ConverterError(Exception):
    """Base class for errors raised while processing an image."""


class UnsupportedFormatError(ConverterError):
    """The requested output format is not one the service can produce."""

    def __init__(self, message: str = "unsupported output format") -> None:
        super().__init__(message)


class InvalidQualityError(ConverterError):
    """The requested quality lies outside 1..100."""

    def __init__(self, message: str = "quality must be between 1 and 100") -> None:
        super().__init__(message)


class ImageProcessingError(ConverterError):
    """An image could not be decoded, filtered or encoded.

    ``status`` is the HTTP status that best describes the failure.
    """

    def __init__(self, message: str, status: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.status = status