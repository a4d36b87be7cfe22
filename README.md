# imageconverter

A small HTTP service that converts, crops, pads, inverts and filters images.
Upload an image as a multipart form field named `file` and receive the
processed image back in the response body.

## Installation

```
pip install .
```

## Running the server

```
imageconverter
```

The command takes no options besides `--help`. Settings come from the
environment, or from a `.env` file in the working directory; variables already
set in the environment take precedence over the file:

| Variable       | Default | Meaning                                          |
|----------------|---------|--------------------------------------------------|
| `PORT`         | `8080`  | Port to listen on; must be an integer            |
| `MAXIMAGESIZE` | `10`    | Largest accepted request body, in megabytes      |

If `PORT` is not an integer the command logs an error and exits with status 1.
The server listens on all interfaces and is run with Flask's built-in server;
for production use, serve the application returned by
`imageconverter.api.create_app()` with a WSGI server of your choice.

## Endpoints

All endpoints take `POST` requests with a multipart body containing `file`.

| Path             | Form fields | Result |
|------------------|-------------|--------|
| `/convert`       | `output_format` (jpeg, png, webp; required), `quality` (default 80; must be 1–100 for jpeg and webp) | Image in the requested format |
| `/square-crop`   | none | Largest centred square, JPEG |
| `/fit-to-square` | `output_format` (jpeg, png, webp; required), `quality` (default 80, clamped to 1–100) | Image centred on a white square, encoded in the requested format |
| `/invert`        | none | Colour-inverted image, JPEG |
| `/apply-filter`  | `filter_name` (blur, grayscale), `intensity` (default 10) | Filtered image, JPEG |

For `/apply-filter`, `blur` uses `intensity` as the Gaussian blur radius, and
`grayscale` converts to grey and then adjusts contrast by `intensity` percent
(clamped to −100…100).

Note that `/fit-to-square` labels its response with the content type of the
*uploaded* image (for example `image/png`), whatever `output_format` was asked for.

### Errors

Errors come back as JSON of the form `{"error": "<message>"}`:

- **400** when the request itself is malformed: no `file` field, a missing
  `output_format`, an `output_format` other than jpeg, png or webp on
  `/fit-to-square`, or a `quality`/`intensity` that is not an integer.
- **413** when the body is larger than `MAXIMAGESIZE` megabytes.
- **500** when the image operation fails, including an upload that is not a
  readable image, an unsupported format or out-of-range quality on `/convert`,
  and an unknown `filter_name`. The message names the operation, e.g.
  `"Error while converting image"`.

Example:

```
curl -F file=@photo.png -F output_format=webp -F quality=75 \
     http://localhost:8080/convert -o photo.webp
```

## Using the library directly

The operations in `imageconverter.converter` take image bytes and return an
`EncodedImage` with `data` and `content_type`:

- `convert(data, opts)` — re-encode in `opts.output_format` at `opts.quality`.
- `square_crop(data)` — centred square crop, JPEG.
- `fit_to_square(data, opts)` — centre on a white square, encode as requested.
- `apply_filter(data, settings)` — blur or grayscale-with-contrast, JPEG.
- `invert(data)` — invert colours, keeping alpha, JPEG.
- `make_pfp(data)` — centre on a white square and scale to 400×400, JPEG
  (library only; no endpoint serves it).

```python
from imageconverter.converter import convert
from imageconverter.types import ConvertOptions, OutputFormat

with open("photo.png", "rb") as fh:
    data = fh.read()

result = convert(data, ConvertOptions(OutputFormat.WEBP, 75))
print(result.content_type)      # image/webp
with open("photo.webp", "wb") as fh:
    fh.write(result.data)
```

Options are the dataclasses `ConvertOptions(output_format, quality=80)` and
`FilterSettings(name, intensity=10)`, with the enums `OutputFormat` and
`FilterName` in `imageconverter.types`. Failures raise `ConverterError`
subclasses from the same module: `UnsupportedFormatError`,
`InvalidQualityError` and `ImageProcessingError` (which carries a `status`
attribute, 400 for an undecodable image or unknown filter, 500 for an encoding
failure).

To embed the service in your own application, build it with
`imageconverter.api.create_app(config)`, passing a `Config(port, max_image_size)`
from `imageconverter.config`, or none to read it with `get_config()`.

## Running the tests

```
pip install ".[test]"
pytest
```