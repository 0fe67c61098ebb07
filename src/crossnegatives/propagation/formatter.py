"""Negative keyword literal formatting.

Literals follow the advertising platform's bulk notation: broad match is the
bare text, phrase match is wrapped in double quotes and exact match in
square brackets.
"""

import logging

from crossnegatives.models.keyword import Keyword, KeywordMatchType

logger = logging.getLogger(__name__)


def format_literal(text: str, match_type: KeywordMatchType) -> str:
    """Wrap keyword text in the notation for its match type."""
    if match_type == KeywordMatchType.EXACT:
        return f"[{text}]"
    if match_type == KeywordMatchType.PHRASE:
        return f'"{text}"'
    return text


def format_negative_keyword(
    keyword: Keyword, use_original_match_type: bool
) -> str | None:
    """Format a keyword as a negative keyword literal.

    Args:
        keyword: Source keyword
        use_original_match_type: Keep the keyword's match type; when False
            every negative is exact match

    Returns:
        The literal, or None when the keyword's match type is unknown
    """
    if keyword.match_type is None:
        logger.debug(f"Skipping '{keyword.text}': unknown match type")
        return None

    if not use_original_match_type:
        return format_literal(keyword.text, KeywordMatchType.EXACT)

    return format_literal(keyword.text, keyword.match_type)


def parse_negative_keyword(literal: str) -> tuple[str, KeywordMatchType]:
    """Split a negative keyword literal into text and match type.

    Raises:
        ValueError: If the literal has no text
    """
    stripped = literal.strip()
    if len(stripped) >= 2 and stripped[0] == "[" and stripped[-1] == "]":
        text, match_type = stripped[1:-1], KeywordMatchType.EXACT
    elif len(stripped) >= 2 and stripped[0] == '"' and stripped[-1] == '"':
        text, match_type = stripped[1:-1], KeywordMatchType.PHRASE
    else:
        text, match_type = stripped, KeywordMatchType.BROAD

    text = text.strip()
    if not text:
        raise ValueError(f"Empty negative keyword literal: {literal!r}")
    return text, match_type
