"""Tests for the fixed-layout Premiere Pro caption payload.

WHY: Premiere Pro refuses the whole graphic clip if the payload layout is
off by a single byte, and it gives no useful error when it does.
"""

from __future__ import annotations

import base64

import pytest

from autocut.errors import ValidationError
from autocut.formatters.caption_payload import (
    CAPTION_FOOTER,
    CAPTION_HEADER,
    FOOTER_SIZE,
    HEADER_SIZE,
    PAYLOAD_SIZE,
    TEXT_SECTION_SIZE,
    build_caption_payload,
    caption_payload_base64,
    encode_caption_text,
)


class TestConstants:

    def test_header_and_footer_sizes(self):
        assert len(CAPTION_HEADER) == HEADER_SIZE == 240
        assert len(CAPTION_FOOTER) == FOOTER_SIZE == 126
        assert PAYLOAD_SIZE == 668

    def test_header_names_the_font(self):
        assert b"YuGothic-Bold" in CAPTION_HEADER


class TestPayload:

    def test_ten_byte_text(self):
        text = "Hello caps"
        assert len(text.encode("utf-8")) == 10
        raw = base64.b64decode(caption_payload_base64(text))
        assert len(raw) == 668
        assert raw[:240] == CAPTION_HEADER
        assert raw[-126:] == CAPTION_FOOTER
        assert raw[240:250] == b"Hello caps"
        assert raw[250:542] == b"\x00" * 292

    def test_multibyte_text(self):
        raw = build_caption_payload("こんにちは")
        section = raw[HEADER_SIZE:HEADER_SIZE + TEXT_SECTION_SIZE]
        assert section.rstrip(b"\x00").decode("utf-8") == "こんにちは"

    def test_exactly_full_section_accepted(self):
        text = "a" * TEXT_SECTION_SIZE
        assert encode_caption_text(text) == text.encode("ascii")

    def test_oversize_text_rejected(self):
        # 101 three-byte characters = 303 bytes
        with pytest.raises(ValidationError):
            encode_caption_text("あ" * 101)

    def test_empty_text(self):
        assert encode_caption_text("") == b"\x00" * TEXT_SECTION_SIZE
