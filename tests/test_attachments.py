# tests/test_attachments.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskdeck.tasks.attachments import decode_data_url, encode_data_url, load_attachment


def test_encode_is_self_describing() -> None:
    assert encode_data_url(b"hi", "text/plain") == "data:text/plain;base64,aGk="
    assert encode_data_url(b"", "").startswith("data:application/octet-stream;base64,")


def test_decode_rejects_non_data_urls() -> None:
    with pytest.raises(ValueError):
        decode_data_url("https://example.com/file")
    with pytest.raises(ValueError):
        decode_data_url("data:text/plain,plain-text")


def test_load_attachment_guesses_mime(tmp_path: Path) -> None:
    f = tmp_path / "scan.unknownext"
    f.write_bytes(b"\x00\x01")

    att = load_attachment(f)

    assert att.name == "scan.unknownext"
    assert att.type == "application/octet-stream"
    assert decode_data_url(att.data) == b"\x00\x01"
