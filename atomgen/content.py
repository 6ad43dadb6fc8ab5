"""Content classification: https://www.rfc-editor.org/rfc/rfc4287#section-4.1.3.3

Decides which representation a payload gets inside atom:content:
child markup for XHTML/XML types, character data for text types, and
base64 for everything else.
"""
import base64
import logging
from typing import Optional, Union

from atomgen.mediatypes import ContentKind, content_kind
from atomgen.models import Content, ExternalContent, MarkupContent, TextContent

logger = logging.getLogger(__name__)


def _as_text(payload: Union[bytes, str]) -> str:
    if isinstance(payload, str):
        return payload
    return payload.decode("utf-8", errors="replace")


def _as_bytes(payload: Union[bytes, str]) -> bytes:
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return payload


def classify_content(
    content_type: str = "",
    source: str = "",
    payload: Union[bytes, str, None] = None,
) -> Optional[Content]:
    """Build the content record matching ``content_type``.

    Returns None when there is neither a source nor a payload, meaning the
    element should be left out. Never raises.
    """
    content_type = content_type or ""
    if not source and not payload:
        return None

    if source:
        if payload:
            logger.warning(f"[Content] Dropping inline payload: src={source!r} is set and content must be empty")
        return ExternalContent(src=source, type=content_type)

    kind = content_kind(content_type)
    if kind is ContentKind.MARKUP:
        return MarkupContent(markup=_as_text(payload), type=content_type)
    if kind is ContentKind.TEXT:
        return TextContent(value=_as_text(payload), type=content_type)

    # all other types MUST be base64 encoded
    encoded = base64.b64encode(_as_bytes(payload)).decode("ascii")
    logger.debug(f"[Content] Base64-encoded {len(payload)} bytes of {content_type}")
    return TextContent(value=encoded, type=content_type, base64_encoded=True)
