"""Image operations: format conversion, square crop and fit, filters, inversion."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageFilter, ImageOps, UnidentifiedImageError

from .types import (
    ConvertOptions,
    FilterName,
    FilterSettings,
    ImageProcessingError,
    InvalidQualityError,
    OutputFormat,
    UnsupportedFormatError,
)

log = logging.getLogger(__name__)

_DEFAULT_JPEG_QUALITY = 90
_PFP_SIZE = 400
_WHITE = (255, 255, 255, 255)
_PNG_MODES = {"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"}
_CONTENT_TYPES = {
    OutputFormat.JPEG: "image/jpeg",
    OutputFormat.PNG: "image/png",
    OutputFormat.WEBP: "image/webp",
}


@dataclass(frozen=True)
class EncodedImage:
    """Encoded image bytes together with their media type."""

    data: bytes
    content_type: str


def _parse_format(value: OutputFormat | str) -> OutputFormat:
    try:
        return OutputFormat(value)
    except ValueError:
        raise UnsupportedFormatError() from None


def _decode(data: bytes) -> tuple[Image.Image, str]:
    """Decode image bytes, returning the image and its lower-case format name."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        log.error("Error while opening image: %s", exc)
        raise ImageProcessingError("Invalid image file", status=400) from exc
    return img, (img.format or "").lower()


def _has_alpha(img: Image.Image) -> bool:
    return img.mode in ("RGBA", "LA", "PA", "RGBa", "La") or "transparency" in img.info


def _flatten(img: Image.Image) -> Image.Image:
    """Drop alpha as premultiplied colour would: transparent areas go black."""
    if img.mode in ("RGB", "L"):
        return img
    if _has_alpha(img):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (0, 0, 0))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return img.convert("RGB")


def _save(img: Image.Image, fmt: OutputFormat, quality: int) -> bytes:
    buf = io.BytesIO()
    try:
        if fmt is OutputFormat.JPEG:
            _flatten(img).save(buf, "JPEG", quality=quality)
        elif fmt is OutputFormat.PNG:
            out = img if img.mode in _PNG_MODES else img.convert("RGBA")
            out.save(buf, "PNG")
        else:
            out = img if img.mode in ("RGB", "RGBA") else img.convert("RGBA")
            out.save(buf, "WEBP", quality=quality, lossless=False)
    except (OSError, ValueError) as exc:
        log.error("Error encoding image as %s: %s", fmt.value, exc)
        raise ImageProcessingError("Failed to encode image", status=500) from exc
    return buf.getvalue()


def _jpeg(img: Image.Image) -> EncodedImage:
    return EncodedImage(
        _save(img, OutputFormat.JPEG, _DEFAULT_JPEG_QUALITY), _CONTENT_TYPES[OutputFormat.JPEG]
    )


def _clamp_quality(quality: int) -> int:
    return min(max(quality, 1), 100)


def _fit_on_white(img: Image.Image) -> Image.Image:
    """Centre the image on a white square whose side is its longer side."""
    width, height = img.size
    frame = max(width, height)
    canvas = Image.new("RGBA", (frame, frame), _WHITE)
    canvas.paste(img.convert("RGBA"), ((frame - width) // 2, (frame - height) // 2))
    return canvas


def _contrast_lut(percentage: float) -> list[int]:
    percentage = min(max(percentage, -100.0), 100.0)
    v = (100.0 + percentage) / 100.0

    def clamp(x: float) -> int:
        return min(max(int(x + 0.5), 0), 255)

    lut = []
    for i in range(256):
        level = i / 255.0
        if 0 <= v <= 1:
            lut.append(clamp((0.5 + (level - 0.5) * v) * 255.0))
        elif 1 < v < 2:
            lut.append(clamp((0.5 + (level - 0.5) * (1 / (2.0 - v))) * 255.0))
        else:
            lut.append(255 if int(level + 0.5) else 0)
    return lut


def _map_rgb(img: Image.Image, transform) -> Image.Image:
    """Apply ``transform`` to the colour channels, keeping alpha untouched."""
    rgba = img.convert("RGBA")
    alpha = rgba.getchannel("A")
    rgb = transform(rgba.convert("RGB"))
    result = rgb.convert("RGBA")
    result.putalpha(alpha)
    return result


def _grayscale(img: Image.Image, contrast: float) -> Image.Image:
    lut = _contrast_lut(contrast)

    def transform(rgb: Image.Image) -> Image.Image:
        gray = rgb.convert("L")
        if contrast != 0:
            gray = gray.point(lut)
        return Image.merge("RGB", (gray, gray, gray))

    return _map_rgb(img, transform)


def _blur(img: Image.Image, sigma: float) -> Image.Image:
    if sigma <= 0:
        return img.copy()
    return img.convert("RGBA").filter(ImageFilter.GaussianBlur(radius=sigma))


def convert(data: bytes, opts: ConvertOptions) -> EncodedImage:
    """Re-encode an image in the requested format and quality."""
    fmt = _parse_format(opts.output_format)
    if fmt in (OutputFormat.JPEG, OutputFormat.WEBP) and not 1 <= opts.quality <= 100:
        raise InvalidQualityError()
    img, _ = _decode(data)
    return EncodedImage(_save(img, fmt, opts.quality), _CONTENT_TYPES[fmt])


def square_crop(data: bytes) -> EncodedImage:
    """Cut the largest centred square out of an image; returns JPEG."""
    img, _ = _decode(data)
    width, height = img.size
    size = min(width, height)
    left = (width - size) // 2
    top = (height - size) // 2
    return _jpeg(img.crop((left, top, left + size, top + size)))


def fit_to_square(data: bytes, opts: ConvertOptions) -> EncodedImage:
    """Centre an image on a white square and encode it in the requested format.

    The content type names the format of the uploaded image.
    """
    img, source_format = _decode(data)
    fmt = _parse_format(opts.output_format)
    framed = _fit_on_white(img)
    encoded = _save(framed, fmt, _clamp_quality(opts.quality))
    log.info("Returning square fitted image")
    return EncodedImage(encoded, "image/" + source_format)


def apply_filter(data: bytes, settings: FilterSettings) -> EncodedImage:
    """Blur, or grayscale with a contrast adjustment; returns JPEG."""
    img, _ = _decode(data)
    try:
        name = FilterName(settings.name)
    except ValueError:
        log.warning("Unknown filter %r", settings.name)
        raise ImageProcessingError("Unknown filter name", status=400) from None

    if name is FilterName.BLUR:
        result = _blur(img, float(settings.intensity))
    else:
        result = _grayscale(img, float(settings.intensity))
    return _jpeg(result)


def invert(data: bytes) -> EncodedImage:
    """Invert the colours of an image, keeping its alpha; returns JPEG."""
    img, _ = _decode(data)
    return _jpeg(_map_rgb(img, ImageOps.invert))


def make_pfp(data: bytes) -> EncodedImage:
    """Fit an image on a white square and scale it to a 400x400 JPEG."""
    img, _ = _decode(data)
    framed = _fit_on_white(img).resize((_PFP_SIZE, _PFP_SIZE), Image.Resampling.LANCZOS)
    return _jpeg(framed)