"""
Test suite for reply shape matching and part classification.

System role: Verification of the classify phase
"""

from dreamgen.core.generation.parts import (
    ImagePart,
    TextPart,
    classify_parts,
    extract_parts,
)


class TestExtractParts:
    """Test suite for extract_parts() shape matchers."""

    def test_direct_parts(self) -> None:
        reply = {"parts": [{"type": "text", "text": "hi"}]}

        assert extract_parts(reply) == [{"type": "text", "text": "hi"}]

    def test_first_candidate_content_parts(self) -> None:
        reply = {
            "candidates": [
                {"content": {"parts": [{"type": "text", "text": "first"}]}},
                {"content": {"parts": [{"type": "text", "text": "second"}]}},
            ]
        }

        assert extract_parts(reply) == [{"type": "text", "text": "first"}]

    def test_single_content_with_mime_type(self) -> None:
        content = {"mimeType": "image/png", "type": "image", "data": "AAAA"}
        reply = {"candidates": [{"content": content}]}

        assert extract_parts(reply) == [content]

    def test_direct_parts_take_precedence(self) -> None:
        reply = {
            "parts": [{"type": "text", "text": "direct"}],
            "candidates": [{"content": {"parts": [{"type": "text", "text": "nested"}]}}],
        }

        assert extract_parts(reply) == [{"type": "text", "text": "direct"}]

    def test_unknown_shapes_should_yield_empty_list(self) -> None:
        assert extract_parts(None) == []
        assert extract_parts({}) == []
        assert extract_parts({"candidates": []}) == []
        assert extract_parts({"candidates": [{"content": {"role": "model"}}]}) == []
        assert extract_parts("plain text") == []


class TestClassifyParts:
    """Test suite for classify_parts()."""

    def test_should_tag_text_and_image_in_order(self) -> None:
        raw = [
            {"type": "text", "text": "one"},
            {"type": "image", "mimeType": "image/jpeg", "data": "AAAA"},
            {"type": "text", "text": "two"},
        ]

        assert classify_parts(raw) == [
            TextPart("one"),
            ImagePart("image/jpeg", "AAAA"),
            TextPart("two"),
        ]

    def test_should_skip_empty_and_unknown_parts(self) -> None:
        raw = [
            {"type": "text", "text": ""},
            {"type": "image", "data": "   "},
            {"type": "video", "data": "AAAA"},
            "stray string",
            {"text": "untyped"},
        ]

        assert classify_parts(raw) == []

    def test_image_mime_defaults_and_aliases(self) -> None:
        raw = [
            {"type": "image", "data": "AAAA"},
            {"type": "image", "mime_type": "image/webp", "data": "BBBB"},
        ]

        assert classify_parts(raw) == [
            ImagePart("image/png", "AAAA"),
            ImagePart("image/webp", "BBBB"),
        ]
