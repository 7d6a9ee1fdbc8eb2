"""Fixed-layout binary payload for Premiere Pro caption graphics.

WHY: Premiere Pro stores the source text of an Essential Graphics
("GraphicAndType") clip as an opaque base64 blob inside the XML. The editor
only imports the clip if that blob has exactly the layout it writes itself.

HOW: A constant 240-byte header (font and style metadata, YuGothic-Bold),
a 302-byte text section holding the UTF-8 caption text left-aligned and
zero-padded, and a constant 126-byte footer (position and effect
parameters). The three parts are concatenated and base64-encoded.

RULES:
- Payload is always exactly 668 bytes before encoding
- Text whose UTF-8 encoding exceeds 302 bytes is rejected with
  ValidationError; it is never truncated
- Header and footer bytes must never change

CAPTION_HEADER is a repaired copy: the base64 it was taken from lacks three
zero-byte "A" characters, decodes to only 237 bytes and misaligns the font
name. The string below decodes to the full 240 bytes with "YuGothic-Bold"
decodable. Do not shorten it.
"""

from __future__ import annotations

import base64

from autocut.errors import ValidationError

HEADER_SIZE = 240
TEXT_SECTION_SIZE = 302
FOOTER_SIZE = 126
PAYLOAD_SIZE = HEADER_SIZE + TEXT_SECTION_SIZE + FOOTER_SIZE

CAPTION_HEADER = base64.b64decode(
    "kAIAAAAAAABEMyIRDAAAAAAABgAKAAQABgAAAGQAAAAAAF4AJAAUABAAAAAAACAAHAAAAAAA"
    "AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA"
    "AAAAAAAADwAAAAgAAAAAABsABwBeAAAAAAAAARwAAAAAAAABJAAAADwAAAAAAAAAAgAAAAIA"
    "AAAQ/v//FP7//xj+//8c/v//AQAAAAQAAAANAAAAWXVHb3RoaWMtQm9sZAAAAAEAAAAMAAAA"
    "CAAMAAQACAAIAAAACAAAAGwBAAAsAQAA"
)

CAPTION_FOOTER = base64.b64decode(
    "NgAgAAAAHAAAAAAAGAAXABAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAwAAAAIAAQA"
    "NgAAAAIAAAAYAAAAHAAAAAAAEEAAAAABIAAAAAAAkELg////BAAGAAQAAAAAAAoACAAFAAYA"
    "BwAKAAAAAAAAAAQABAAEAAAA"
)


def encode_caption_text(text: str) -> bytes:
    """Return the 302-byte zero-padded text section for text."""
    encoded = text.encode("utf-8")
    if len(encoded) > TEXT_SECTION_SIZE:
        raise ValidationError(
            "Caption text is {} UTF-8 bytes; the graphic payload holds at most {}: {!r}".format(
                len(encoded), TEXT_SECTION_SIZE, text[:40]
            )
        )
    return encoded.ljust(TEXT_SECTION_SIZE, b"\x00")


def build_caption_payload(text: str) -> bytes:
    return CAPTION_HEADER + encode_caption_text(text) + CAPTION_FOOTER


def caption_payload_base64(text: str) -> str:
    return base64.b64encode(build_caption_payload(text)).decode("ascii")
