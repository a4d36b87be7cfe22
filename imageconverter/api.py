"""HTTP service exposing the image operations as multipart form endpoints."""

from __future__ import annotations

import argparse
import json
import logging
import re
from collections.abc import Callable

from flask import Flask, Response, request

from . import converter
from .config import Config, get_config
from .types import ConverterError, ConvertOptions, FilterSettings, OutputFormat

log = logging.getLogger(__name__)

_DEFAULT_QUALITY = 80
_DEFAULT_INTENSITY = 10
_MEGABYTE = 1024 * 1024
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_SQUARE_FORMATS = {fmt.value for fmt in OutputFormat}


class _HandlerError(Exception):
    """A request failure that maps straight onto a JSON error response."""

    def __init__(self, status: int, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.message = message
        self.cause = cause


def error_response(status: int, message: str, err: BaseException | None) -> Response:
    """Log ``message`` with its cause and build a JSON ``{"error": message}`` reply."""
    log.error("%s: %s", message, err)
    body = json.dumps({"error": message}) + "\n"
    return Response(body, status=status, mimetype="application/json")


def _parse_int(value: str, default: int, message: str) -> int:
    """Parse an optional decimal integer form value, as strict as the service expects."""
    if value == "":
        return default
    if not _INT_PATTERN.fullmatch(value):
        raise _HandlerError(400, message, ValueError(f"invalid integer {value!r}"))
    number = int(value)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise _HandlerError(400, message, ValueError(f"integer out of range {value!r}"))
    return number


def _read_upload() -> bytes:
    upload = request.files.get("file")
    if upload is None:
        raise _HandlerError(400, "Error receiving image file", KeyError("file"))
    try:
        return upload.read()
    except OSError as exc:
        raise _HandlerError(400, "Error copying file", exc) from exc


def _output_format() -> str:
    fmt = request.form.get("output_format", "").lower()
    if not fmt:
        raise _HandlerError(400, "Output format is required")
    return fmt


def _quality() -> int:
    return _parse_int(
        request.form.get("quality", ""),
        _DEFAULT_QUALITY,
        "Error converting quality string to int",
    )


def _image_reply(
    operation: Callable[[], converter.EncodedImage], failure_message: str
) -> Response:
    try:
        encoded = operation()
    except ConverterError as exc:
        raise _HandlerError(500, failure_message, exc) from exc
    return Response(encoded.data, status=200, content_type=encoded.content_type)


def create_app(config: Config | None = None) -> Flask:
    """Build the web application with its routes and upload size limit."""
    if config is None:
        config = get_config()

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = int(float(config.max_image_size) * _MEGABYTE)

    @app.errorhandler(_HandlerError)
    def _handle_error(exc: _HandlerError) -> Response:
        return error_response(exc.status, exc.message, exc.cause)

    @app.errorhandler(413)
    def _handle_too_large(exc: Exception) -> Response:
        return error_response(413, "Request Entity Too Large", exc)

    @app.post("/convert")
    def convert_handler() -> Response:
        data = _read_upload()
        opts = ConvertOptions(output_format=_output_format(), quality=_quality())
        return _image_reply(
            lambda: converter.convert(data, opts), "Error while converting image"
        )

    @app.post("/square-crop")
    def square_crop_handler() -> Response:
        data = _read_upload()
        return _image_reply(lambda: converter.square_crop(data), "Error while cropping image")

    @app.post("/fit-to-square")
    def fit_to_square_handler() -> Response:
        data = _read_upload()
        fmt = _output_format()
        if fmt not in _SQUARE_FORMATS:
            raise _HandlerError(400, "Unsupported output format")
        opts = ConvertOptions(output_format=fmt, quality=_quality())
        return _image_reply(
            lambda: converter.fit_to_square(data, opts), "Error while fitting to square"
        )

    @app.post("/invert")
    def invert_handler() -> Response:
        data = _read_upload()
        return _image_reply(lambda: converter.invert(data), "Error while inverting image")

    @app.post("/apply-filter")
    def apply_filter_handler() -> Response:
        data = _read_upload()
        name = request.form.get("filter_name", "").lower()
        intensity = _parse_int(
            request.form.get("intensity", ""),
            _DEFAULT_INTENSITY,
            "Error converting intensity string to int",
        )
        settings = FilterSettings(name=name, intensity=intensity)
        return _image_reply(
            lambda: converter.apply_filter(data, settings), "Error while applying filter"
        )

    return app


def main(argv: list[str] | None = None) -> int:
    """Read the configuration and serve the application until stopped."""
    parser = argparse.ArgumentParser(
        description="Image conversion HTTP service configured by PORT and MAXIMAGESIZE."
    )
    parser.parse_args(argv)

    config = get_config()
    app = create_app(config)

    if not _INT_PATTERN.fullmatch(config.port):
        log.error("Invalid port number: %r", config.port)
        return 1

    log.info("Starting server on port %s", config.port)
    app.run(host="0.0.0.0", port=int(config.port))
    return 0