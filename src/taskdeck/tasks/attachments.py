# src/taskdeck/tasks/attachments.py

from __future__ import annotations

import base64
import binascii
import mimetypes
from collections.abc import Callable
from pathlib import Path

from .task_models import Attachment

# (raw bytes, mime type) -> self-describing text payload
AttachmentEncoder = Callable[[bytes, str], str]

DEFAULT_MIME = "application/octet-stream"


def encode_data_url(data: bytes, mime: str) -> str:
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime or DEFAULT_MIME};base64,{payload}"


def decode_data_url(text: str) -> bytes:
    """
    Inverse of encode_data_url.

    Raises ValueError for anything that is not a base64 data URL.
    """
    if not text.startswith("data:") or "," not in text:
        raise ValueError("not a data URL")
    header, payload = text.split(",", 1)
    if not header.endswith(";base64"):
        raise ValueError("only base64 data URLs are supported")
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid base64 payload: {e}") from e


def load_attachment(path: str | Path, encoder: AttachmentEncoder = encode_data_url) -> Attachment:
    """Read a file and encode it. OSError propagates to the caller."""
    p = Path(path).expanduser()
    raw = p.read_bytes()
    mime = mimetypes.guess_type(p.name)[0] or DEFAULT_MIME
    return Attachment(name=p.name, type=mime, data=encoder(raw, mime))
