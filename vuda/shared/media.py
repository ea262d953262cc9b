from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Any, Tuple
from .errors import ValidationError

MAX_UPLOAD_BYTES = 20 * 1024 * 1024

_DATA_URI = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


@dataclass(frozen=True)
class VideoUpload:
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    def data_uri(self) -> str:
        return to_data_uri(self.data, self.content_type)


def to_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    m = _DATA_URI.match(uri or "")
    if not m:
        raise ValidationError("Expected a base64 data URI: data:<mimetype>;base64,<data>")
    try:
        data = base64.b64decode(m.group("data"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"Invalid base64 payload in data URI: {e}") from e
    return m.group("mime"), data


def check_video(content_type: str | None, size: int, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
    if not (content_type or "").startswith("video/"):
        raise ValidationError("Please select a valid video file.")
    if size > max_bytes:
        mb = max_bytes // (1024 * 1024)
        raise ValidationError(f"Please select a video file smaller than {mb}MB.")
    if size == 0:
        raise ValidationError("The selected video file is empty.")


async def read_video_upload(upload: Any, max_bytes: int = MAX_UPLOAD_BYTES) -> VideoUpload:
    """Read an uploaded file and validate it before any model call.

    ``upload`` is a Starlette ``UploadFile``; a declared size over the limit
    is rejected before the body is read.
    """
    content_type = upload.content_type or ""
    declared = getattr(upload, "size", None)
    check_video(content_type, declared if declared is not None else 1, max_bytes)
    try:
        data = await upload.read()
    except OSError as e:
        raise ValidationError("Failed to read video file.") from e
    check_video(content_type, len(data), max_bytes)
    return VideoUpload(filename=upload.filename or "video", content_type=content_type, data=data)
