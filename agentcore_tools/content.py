"""Normalization of code interpreter responses into flat text.

The service answers a tool call with either a single ``result`` or a
``stream`` of events. Each result carries ``content``: a plain string or a
list of typed items (``text``, ``resource``, ``resource_link``). This module
decodes those items into a small closed set of dataclasses and renders them
back into one string. Nothing in here raises on unexpected shapes: anything
unrecognized is dumped as JSON.
"""

import json
from dataclasses import dataclass
from typing import Any, Iterable, Union

from .types import InvokeResult

UNKNOWN_ERROR = "Unknown error"


@dataclass
class TextContent:
    text: str


@dataclass
class ResourceContent:
    resource: dict[str, Any]


@dataclass
class ResourceLinkContent:
    uri: Any = None
    name: str | None = None
    description: str | None = None
    mime_type: str | None = None


@dataclass
class UnknownContent:
    raw: Any


ContentItem = Union[TextContent, ResourceContent, ResourceLinkContent, UnknownContent]


def _dump(value: Any) -> str:
    try:
        return json.dumps(value, default=str)
    except (TypeError, ValueError):
        # Circular structures and keys json refuses.
        return repr(value)


def parse_content_item(item: Any) -> ContentItem:
    """Decode one raw content item into its typed form."""
    if not isinstance(item, dict):
        return UnknownContent(item)

    kind = item.get("type")
    if kind == "text" and isinstance(item.get("text"), str):
        return TextContent(item["text"])
    if kind == "resource" and isinstance(item.get("resource"), dict) and item["resource"]:
        return ResourceContent(item["resource"])
    if kind == "resource_link":
        return ResourceLinkContent(
            uri=item.get("uri"),
            name=item.get("name"),
            description=item.get("description"),
            mime_type=item.get("mimeType"),
        )
    return UnknownContent(item)


def render_content_item(item: ContentItem) -> str:
    if isinstance(item, TextContent):
        return item.text
    if isinstance(item, ResourceContent):
        text = item.resource.get("text")
        if text:
            return text if isinstance(text, str) else _dump(text)
        return _dump(item.resource)
    if isinstance(item, ResourceLinkContent):
        meta = " - ".join(str(part) for part in (item.name, item.description, item.mime_type) if part)
        return f"{meta} ({item.uri})"
    return _dump(item.raw)


def render_content(content: Any) -> str:
    """Flatten a ``content`` value (string, item list or anything else) into text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "\n".join(render_content_item(parse_content_item(item)) for item in content)
    return _dump(content)


def _event_error(event: dict) -> Any:
    """Return the error payload carried by an envelope or stream event, if any."""
    if "error" in event:
        return event["error"]
    for key, value in event.items():
        if isinstance(key, str) and key != "isError" and key.endswith(("Exception", "Error")):
            return value
    return None


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        message = error.get("message") or error.get("Message")
        return message if isinstance(message, str) and message else UNKNOWN_ERROR
    if isinstance(error, str) and error:
        return error
    return UNKNOWN_ERROR


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def normalize_response(response: Any) -> InvokeResult:
    """Collapse an invoke_code_interpreter response into an :class:`InvokeResult`.

    Streamed events overwrite each other: the last event with content (or
    the last error event) determines the result. A single envelope is
    treated as a one-event stream. Concatenation only happens between the
    items of a single content list.
    """
    response = _as_dict(response)
    envelope_error = bool(response.get("isError"))
    outcome = InvokeResult(text="", is_error=envelope_error)

    stream = response.get("stream")
    if stream is None:
        _apply_event(outcome, response, envelope_error)
    elif isinstance(stream, Iterable) and not isinstance(stream, (str, bytes, dict)):
        for event in stream:
            _apply_event(outcome, _as_dict(event), envelope_error)

    return outcome


def _apply_event(outcome: InvokeResult, event: dict, envelope_error: bool) -> None:
    _apply_result(outcome, _as_dict(event.get("result")), envelope_error)
    error = _event_error(event)
    if error is not None:
        outcome.text = _error_message(error)
        outcome.is_error = True


def _apply_result(outcome: InvokeResult, result: dict, envelope_error: bool) -> None:
    content = result.get("content")
    if content:
        outcome.text = render_content(content)
        outcome.is_error = bool(result.get("isError", envelope_error))
    elif result.get("isError"):
        outcome.is_error = True
    structured = result.get("structuredContent")
    if isinstance(structured, dict):
        outcome.structured_content = structured
