"""Normalization of display_data tool results into MIME bundles.

The display_data tool returns a JSON document in one of two shapes:

- single payload: ``{"mime_type": "text/html", "data": "<b>x</b>", "metadata": {...}}``
- full bundle: ``{"data": {"text/latex": "...", "text/plain": "..."}, "metadata": {...}}``
  where ``data`` may also be a JSON string encoding the bundle object.

parse_display_data_output() turns either shape into a MIME bundle that always
has a text/plain entry, coercing each value to something a renderer accepts.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from ai_kernel.display.models import MimeBundle

TEXT_PLAIN = "text/plain"


class DisplayDataParseError(ValueError):
    """Raised when a display_data result does not describe a MIME bundle."""

    pass


@dataclass(frozen=True)
class ParsedDisplayData:
    """A normalized display_data payload.

    Attributes:
        mime_bundle: MIME type to content mapping, always containing text/plain
        metadata: Metadata to attach to the display message
    """

    mime_bundle: MimeBundle
    metadata: dict[str, Any] = field(default_factory=dict)


def parse_display_data_output(output: str) -> ParsedDisplayData:
    """Parse the serialized result of the display_data tool.

    Args:
        output: JSON document returned by the tool

    Returns:
        ParsedDisplayData with the normalized bundle and metadata

    Raises:
        DisplayDataParseError: If the output is not JSON, not an object, lacks
            the payload data, or yields an empty bundle

    Example:
        >>> parsed = parse_display_data_output('{"mime_type": "text/html", "data": "<b>x</b>"}')
        >>> parsed.mime_bundle
        {'text/html': '<b>x</b>', 'text/plain': '<b>x</b>'}
    """
    try:
        parsed = json.loads(output)
    except (json.JSONDecodeError, TypeError, RecursionError) as e:
        raise DisplayDataParseError(f"Invalid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise DisplayDataParseError("Expected an object")

    metadata = parsed["metadata"] if isinstance(parsed.get("metadata"), dict) else {}

    raw_mime_type = parsed.get("mime_type")
    mime_type = raw_mime_type.strip() if isinstance(raw_mime_type, str) else ""

    # Single payload: {"mime_type": "text/html", "data": "<b>...</b>"}
    if mime_type:
        if "data" not in parsed:
            raise DisplayDataParseError('Missing "data" for single MIME payload')
        return ParsedDisplayData(
            mime_bundle=_create_single_mime_bundle(mime_type, parsed["data"]),
            metadata=metadata,
        )

    # Full bundle: {"data": {"text/latex": "...", "text/plain": "..."}}
    bundle_candidate = parsed.get("data")
    if isinstance(bundle_candidate, str):
        bundle_candidate = _parse_json_string(bundle_candidate)
    if not isinstance(bundle_candidate, dict):
        raise DisplayDataParseError('Expected "data" to be a MIME bundle object')

    mime_bundle = normalize_mime_bundle(bundle_candidate)
    if not mime_bundle:
        raise DisplayDataParseError("MIME bundle is empty")

    if TEXT_PLAIN not in mime_bundle:
        mime_bundle[TEXT_PLAIN] = derive_text_fallback(mime_bundle)

    return ParsedDisplayData(mime_bundle=mime_bundle, metadata=metadata)


def normalize_mime_bundle(bundle: dict[str, Any]) -> MimeBundle:
    """Trim MIME type keys, drop empty ones, and coerce every value.

    Args:
        bundle: Raw MIME type to value mapping

    Returns:
        New normalized bundle (may be empty)
    """
    normalized: MimeBundle = {}
    for raw_mime_type, value in bundle.items():
        mime_type = str(raw_mime_type).strip()
        if not mime_type:
            continue
        normalized[mime_type] = normalize_mime_value(mime_type, value)
    return normalized


def normalize_mime_value(mime_type: str, value: Any) -> Any:
    """Coerce a value into a form renderers accept for the given MIME type."""
    if is_json_mime_type(mime_type):
        return _coerce_json_mime_value(value)
    return _coerce_mime_value(value)


def derive_text_fallback(mime_bundle: MimeBundle) -> str:
    """Build a text/plain value from an existing bundle.

    Prefers the first text/* entry, otherwise the first entry of the bundle.
    """
    for mime_type, value in mime_bundle.items():
        if mime_type.startswith("text/"):
            return to_text_fallback(value)

    first_value = next(iter(mime_bundle.values()))
    return to_text_fallback(first_value)


def to_text_fallback(value: Any) -> str:
    """Render any bundle value as plain text."""
    if isinstance(value, str):
        return value

    if _is_string_list(value):
        return "".join(value)

    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def is_json_mime_type(mime_type: str) -> bool:
    """Whether the MIME type carries JSON (application/json or a +json suffix)."""
    return mime_type == "application/json" or mime_type.endswith("+json")


def _create_single_mime_bundle(mime_type: str, value: Any) -> MimeBundle:
    normalized_value = normalize_mime_value(mime_type, value)
    mime_bundle: MimeBundle = {mime_type: normalized_value}
    if mime_type != TEXT_PLAIN:
        mime_bundle[TEXT_PLAIN] = to_text_fallback(normalized_value)
    return mime_bundle


def _coerce_json_mime_value(value: Any) -> Any:
    # Parse JSON strings when possible, but keep structured arrays and scalars
    parsed = _parse_json_string(value) if isinstance(value, str) else value

    if isinstance(parsed, dict | list) or _is_json_primitive(parsed):
        return parsed

    return _coerce_mime_value(parsed)


def _coerce_mime_value(value: Any) -> Any:
    if isinstance(value, str):
        return value

    if _is_string_list(value):
        return value

    if isinstance(value, dict):
        return value

    # Scalars and unsupported top-level structures become text
    return to_text_fallback(value)


def _parse_json_string(value: str) -> Any:
    try:
        return json.loads(value)
    except (json.JSONDecodeError, RecursionError):
        return value


def _is_json_primitive(value: Any) -> bool:
    return value is None or isinstance(value, str | int | float | bool)


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)
