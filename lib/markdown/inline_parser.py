"""
Inline Parser for the Markdown to HTML converter

This module turns the tokens of a single line into an inline expression
tree: plain text, italic, bold, bold-italic and links. Parsing is total;
markup that cannot be resolved degrades to its literal characters.
"""

from typing import List, Optional

from .ast_nodes import EmphasisType, MDEmphasis, MDLink, MDNode, MDText, make_sequence
from .tokenizer import Token, TokenCursor, TokenType

EMPHASIS_MARKERS = (TokenType.ASTERISK, TokenType.UNDERSCORE)


class InlineParser:
    """
    Parser for inline Markdown elements.

    Emphasis is resolved by delimiter runs: an opening run of L markers is
    matched against the next run of the same marker on the line (R markers).
    min(L, R) selects the emphasis kind and the excess markers on either side
    stay in the output as literal text.
    """

    def __init__(self):
        self.emphasis_types = {
            1: EmphasisType.ITALIC,
            2: EmphasisType.BOLD,
        }

    def parse(self, tokens: List[Token]) -> MDNode:
        """
        Parse the tokens of one line into a single inline expression.

        Args:
            tokens: Tokens of one line; parsing stops at a NEWLINE token

        Returns:
            MDText, MDEmphasis, MDLink, or MDSequence of those
        """
        return make_sequence(self._parse_inline_elements(tokens))

    def _parse_inline_elements(self, tokens: List[Token]) -> List[MDNode]:
        """Scan tokens left to right building inline nodes."""
        nodes: List[MDNode] = []
        cursor = TokenCursor(tokens)

        while not cursor.is_at_end():
            token = cursor.peek()
            assert token is not None

            if token.type == TokenType.NEWLINE:
                break

            # 1. Emphasis (bold, italic, bold-italic)
            if token.type in EMPHASIS_MARKERS and self._try_parse_emphasis(cursor, nodes):
                continue

            # 2. Links
            if token.type == TokenType.LBRACKET:
                link = self._try_parse_link(cursor)
                if link:
                    nodes.append(link)
                    continue

            # 3. Everything else, including unmatched markup, is literal text
            self._append_text(nodes, token.content)
            cursor.advance()

        return nodes

    def _try_parse_emphasis(self, cursor: TokenCursor, nodes: List[MDNode]) -> bool:
        """
        Try to resolve the delimiter run at the cursor.

        On success the wrapped node (and any excess markers) is appended to
        nodes and the cursor moves past the closing run. When no closing run
        exists nothing is consumed.
        """
        opening = cursor.peek()
        assert opening is not None

        closing_offset = cursor.find(opening.type, 1)
        if closing_offset == -1:
            return False
        closing = cursor.peek(closing_offset)
        assert closing is not None

        marker = opening.content[0]
        left, right = opening.count, closing.count
        matched = min(left, right)

        child = self.parse(cursor.slice(1, closing_offset))
        emphasis = MDEmphasis(self._emphasis_type(matched), child)

        if left > right:
            self._append_text(nodes, marker * (left - right))
        nodes.append(emphasis)
        if right > left:
            self._append_text(nodes, marker * (right - left))

        cursor.advance(closing_offset + 1)
        return True

    def _emphasis_type(self, matched: int) -> EmphasisType:
        """Map a matched delimiter count to an emphasis kind."""
        return self.emphasis_types.get(matched, EmphasisType.BOLD_ITALIC)

    def _try_parse_link(self, cursor: TokenCursor) -> Optional[MDLink]:
        """Try to parse [title](url) at the cursor without consuming on failure."""
        bracket_end = cursor.find(TokenType.RBRACKET, 1)
        if bracket_end == -1:
            return None

        # The url must follow the closing bracket immediately
        if not cursor.peek_is(TokenType.LPAREN, bracket_end + 1):
            return None

        paren_end = cursor.find(TokenType.RPAREN, bracket_end + 2)
        if paren_end == -1:
            return None

        title = self.parse(cursor.slice(1, bracket_end))
        url = self.parse(cursor.slice(bracket_end + 2, paren_end))
        cursor.advance(paren_end + 1)
        return MDLink(title, url)

    def _append_text(self, nodes: List[MDNode], content: str) -> None:
        """Append text, merging it into a preceding text node."""
        if nodes and isinstance(nodes[-1], MDText):
            nodes[-1] = MDText(nodes[-1].content + content)
        else:
            nodes.append(MDText(content))


def parse_inline(tokens: List[Token]) -> MDNode:
    """Parse the tokens of one line into an inline expression."""
    return InlineParser().parse(tokens)
