from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

# Key prefix that marks a file parameter in marker-style mappings.
FILE_MARKER = "@"

FILE_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True, slots=True)
class Scalar:
    """A plain form field value.

    Any parameter value that is not a FilePayload is treated as a Scalar;
    wrapping is only needed to be explicit.
    """

    value: Any


@dataclass(frozen=True, slots=True)
class FilePayload:
    """A parameter sent as a file part.

    The part's field name and file name are both the parameter key. `content`
    is sent as-is when it is bytes, otherwise as the UTF-8 of its text form.
    """

    content: Any

    @classmethod
    def from_path(cls, path: str, *, max_bytes: int = 25 * 1024 * 1024) -> "FilePayload":
        """Read a local file into a payload, refusing files over max_bytes."""

        with open(path, "rb") as f:
            data = f.read(max_bytes + 1)
        if len(data) > max_bytes:
            raise ValueError(f"file too large for upload cap: {path} > {max_bytes} bytes")
        return cls(data)


Parameter = Union[Scalar, FilePayload]


def from_marked_parameters(parameters: Mapping[Any, Any]) -> Dict[str, Any]:
    """Convert a marker-style mapping to explicit parameters.

    Keys starting with FILE_MARKER lose the marker and their value becomes a
    FilePayload; other entries are copied unchanged.

    Example:
      {"@database_file": "a,b"} -> {"database_file": FilePayload("a,b")}

    Raises:
      ValueError: when a marked and an unmarked key name the same parameter.
    """

    out: Dict[str, Any] = {}
    for key, value in parameters.items():
        name = _text(key)
        if name.startswith(FILE_MARKER):
            name, value = name[len(FILE_MARKER):], FilePayload(value)
        if name in out:
            raise ValueError(f"parameter {name!r} given both as a field and as a file")
        out[name] = value
    return out


def encode_request(
    credential: str,
    section: Any,
    action: Any,
    parameters: Optional[Mapping[Any, Any]] = None,
) -> Tuple[bytes, str]:
    """Encode one API call as multipart/form-data.

    The fixed fields api_key, section and action always come first, followed
    by the parameters in mapping order.

    Returns:
      (body, content_type) where content_type carries the body's boundary.
    """

    fields: List[Tuple[str, Parameter]] = [
        ("api_key", Scalar(credential)),
        ("section", Scalar(section)),
        ("action", Scalar(action)),
    ]
    for key, value in (parameters or {}).items():
        if not isinstance(value, (Scalar, FilePayload)):
            value = Scalar(value)
        fields.append((_text(key), value))

    boundary = "----codereadr-" + uuid.uuid4().hex
    body = _encode_multipart(fields, boundary)
    return body, f"multipart/form-data; boundary={boundary}"


def _encode_multipart(fields: List[Tuple[str, Parameter]], boundary: str) -> bytes:
    """Encode named parts. Callers pick a boundary that cannot occur in values."""

    crlf = "\r\n"
    parts: List[bytes] = []

    for name, param in fields:
        quoted = _quote(name)
        parts.append(f"--{boundary}{crlf}".encode("utf-8"))
        if isinstance(param, FilePayload):
            parts.append(
                f'Content-Disposition: form-data; name="{quoted}"; filename="{quoted}"{crlf}'.encode(
                    "utf-8"
                )
            )
            parts.append(f"Content-Type: {FILE_CONTENT_TYPE}{crlf}{crlf}".encode("utf-8"))
            content = param.content
            if isinstance(content, (bytes, bytearray)):
                parts.append(bytes(content))
            else:
                parts.append(_text(content).encode("utf-8"))
        else:
            parts.append(f'Content-Disposition: form-data; name="{quoted}"{crlf}{crlf}'.encode("utf-8"))
            parts.append(_text(param.value).encode("utf-8"))
        parts.append(crlf.encode("utf-8"))

    parts.append(f"--{boundary}--{crlf}".encode("utf-8"))
    return b"".join(parts)


def _text(value: Any) -> str:
    """Textual form of a field value."""

    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def _quote(name: str) -> str:
    # Keep the Content-Disposition header well formed.
    return name.replace("\\", "\\\\").replace('"', '\\"')
