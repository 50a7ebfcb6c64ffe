"""Fenced code extraction tests."""

from __future__ import annotations

from afritest.postproc.fences import ResponseExtractor


def test_extracts_fenced_typescript_block() -> None:
    text = "```typescript\ndescribe('x', () => {});\n```"

    assert ResponseExtractor().extract(text) == "describe('x', () => {});"


def test_text_without_fence_is_returned_unchanged() -> None:
    text = "  describe('x', () => {});\n"

    assert ResponseExtractor().extract(text) == text


def test_first_block_wins_and_prose_is_dropped() -> None:
    text = (
        "Here are your tests:\n\n"
        "```ts\nconst first = 1;\n```\n\n"
        "And another:\n```js\nconst second = 2;\n```\n"
    )

    assert ResponseExtractor().extract(text) == "const first = 1;"


def test_fence_without_language_tag() -> None:
    assert ResponseExtractor().extract("```\nit('works');\n```") == "it('works');"


def test_extraction_is_idempotent() -> None:
    extractor = ResponseExtractor()
    text = "```typescript\nexpect(1).toBe(1);\n```"

    once = extractor.extract(text)

    assert extractor.extract(once) == once


def test_failure_sentinel_passes_through() -> None:
    sentinel = "// AI generation failed: HTTP 503"

    assert ResponseExtractor().extract(sentinel) == sentinel


def test_crlf_response_is_extracted() -> None:
    text = "```typescript\r\nit('x');\r\n```\r\n"

    assert ResponseExtractor().extract(text) == "it('x');"
