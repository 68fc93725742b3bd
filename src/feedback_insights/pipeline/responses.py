"""Unwrapping of oracle response envelopes into plain text.

The oracle returns whatever its transport hands back: a plain string, a JSON
string, a ``{"response": ...}`` object, a Messages-API envelope with top-level
``content`` blocks, or a Responses-API envelope whose ``output`` list mixes
reasoning entries with assistant messages. Each known shape has one
unwrapper; they are tried in a fixed order and the last resort stringifies
the raw value, so ``unwrap_response`` never fails.
"""

import json
from typing import Any, Optional

from feedback_insights.pipeline.matching import first_match

TEXT_BLOCK_TYPES = ("output_text", "text")


def _decode(raw: Any) -> Any:
    """Parse JSON strings into objects or text; leave everything else alone."""
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            return raw
        if isinstance(parsed, (dict, list, str)):
            return parsed
    return raw


def _block_texts(blocks: Any) -> list[str]:
    if not isinstance(blocks, list):
        return []
    texts = []
    for block in blocks:
        if not isinstance(block, dict):
            continue
        if block.get("type", "output_text") not in TEXT_BLOCK_TYPES:
            continue
        text = block.get("text")
        if isinstance(text, str):
            texts.append(text)
    return texts


def _is_assistant_message(entry: Any) -> bool:
    return (
        isinstance(entry, dict)
        and entry.get("type", "message") == "message"
        and entry.get("role", "assistant") == "assistant"
    )


def _output_messages(payload: Any) -> Optional[str]:
    """``{"output": [{"type": "message", "content": [{"type": "output_text", ...}]}]}``."""
    entries = payload.get("output") if isinstance(payload, dict) else payload
    if not isinstance(entries, list):
        return None

    texts = []
    for entry in filter(_is_assistant_message, entries):
        texts.extend(_block_texts(entry.get("content")))
    return "".join(texts) or None


def _content_blocks(payload: Any) -> Optional[str]:
    """``{"content": [{"type": "text", "text": ...}]}``."""
    if not isinstance(payload, dict):
        return None
    return "".join(_block_texts(payload.get("content"))) or None


def _response_field(payload: Any) -> Optional[str]:
    """``{"response": ...}``."""
    if not isinstance(payload, dict):
        return None
    text = payload.get("response")
    return text if isinstance(text, str) and text else None


def _plain_text(payload: Any) -> Optional[str]:
    return payload if isinstance(payload, str) and payload else None


UNWRAPPERS = (
    _output_messages,
    _content_blocks,
    _response_field,
    _plain_text,
)


def stringify(raw: Any) -> str:
    """Render any raw value as text."""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        return raw.decode("utf-8", errors="replace")
    if raw is None:
        return ""
    if isinstance(raw, (dict, list)):
        try:
            return json.dumps(raw, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            pass
    return str(raw)


def unwrap_response(raw: Any) -> str:
    """Extract the narrative text from an oracle response of any known shape."""
    text = first_match(UNWRAPPERS, _decode(raw))
    if text is None:
        return stringify(raw)
    return text
