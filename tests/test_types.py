import pytest

from imageconverter.types import (
    ConverterError,
    ConvertOptions,
    FilterName,
    FilterSettings,
    ImageProcessingError,
    InvalidQualityError,
    OutputFormat,
    UnsupportedFormatError,
)


@pytest.mark.parametrize(
    "value, member",
    [("jpeg", OutputFormat.JPEG), ("png", OutputFormat.PNG), ("webp", OutputFormat.WEBP)],
)
def test_output_format_from_string(value, member):
    assert OutputFormat(value) is member
    assert member == value


def test_output_format_rejects_unknown():
    with pytest.raises(ValueError):
        OutputFormat("bmp")


@pytest.mark.parametrize(
    "value, member", [("blur", FilterName.BLUR), ("grayscale", FilterName.GRAYSCALE)]
)
def test_filter_name_from_string(value, member):
    assert FilterName(value) is member


def test_filter_name_rejects_unknown():
    with pytest.raises(ValueError):
        FilterName("sepia")


def test_convert_options_defaults_and_values():
    opts = ConvertOptions(OutputFormat.PNG)
    assert opts.output_format is OutputFormat.PNG
    assert opts.quality == 80
    assert ConvertOptions("webp", 55).quality == 55


def test_filter_settings_default_intensity():
    settings = FilterSettings(FilterName.BLUR)
    assert settings.intensity == 10
    assert settings.name is FilterName.BLUR


def test_error_messages():
    assert str(UnsupportedFormatError()) == "unsupported output format"
    assert str(InvalidQualityError()) == "quality must be between 1 and 100"


def test_errors_share_base_class():
    errors = [UnsupportedFormatError(), InvalidQualityError(), ImageProcessingError("x")]
    caught = []
    for exc in errors:
        try:
            raise exc
        except ConverterError as err:
            caught.append(err)
    assert caught == errors


def test_image_processing_error_carries_status():
    err = ImageProcessingError("Invalid image file", status=400)
    assert err.status == 400
    assert err.message == "Invalid image file"
    assert ImageProcessingError("boom").status == 500