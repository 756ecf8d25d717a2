"""
Block Parser for the Markdown to HTML converter

This module splits the token stream into lines, classifies every line as a
header, list item or paragraph, and groups contiguous list items into lists.
"""

import logging
from typing import Any, Dict, List, Optional

from .ast_nodes import (
    ListType,
    MDDocument,
    MDHeader,
    MDList,
    MDListItem,
    MDNode,
    MDParagraph,
    MDStatement,
    MDText,
)
from .inline_parser import InlineParser
from .tokenizer import Token, TokenType

logger = logging.getLogger(__name__)

MAX_HEADING_LEVEL = 6


def split_lines(tokens: List[Token]) -> List[List[Token]]:
    """
    Split tokens into lines at NEWLINE boundaries.

    A newline terminating the input does not open an extra empty line, and
    empty input has no lines at all.
    """
    if not tokens:
        return []

    lines: List[List[Token]] = [[]]
    for token in tokens:
        if token.type == TokenType.NEWLINE:
            lines.append([])
        else:
            lines[-1].append(token)

    if len(lines) > 1 and not lines[-1]:
        lines.pop()

    return lines


class BlockParser:
    """
    Parser for block-level Markdown elements.

    Each source line becomes exactly one statement. Lines whose block marker
    is malformed fall back to a paragraph built from the unmodified tokens,
    so no characters are lost.
    """

    def __init__(
        self,
        tokens: List[Token],
        options: Optional[Dict[str, Any]] = None,
        inline_parser: Optional[InlineParser] = None,
    ):
        self.tokens = tokens
        self.options = options or {}
        self.inline_parser = inline_parser or InlineParser()

        # Parser options
        self.max_heading_level = min(int(self.options.get('max_heading_level', MAX_HEADING_LEVEL)), MAX_HEADING_LEVEL)

        self.statements: List[MDStatement] = []
        self.pos = 0

    def parse(self) -> MDDocument:
        """
        Parse tokens into a document AST.

        Returns:
            MDDocument whose children are statements and list groups.
        """
        document = MDDocument()
        self.statements = self.parse_statements()
        self.pos = 0

        while not self._is_at_end():
            statement = self._current_statement()
            if isinstance(statement, MDListItem):
                document.add_child(self._parse_list())
            else:
                document.add_child(statement)
                self._advance()

        return document

    def parse_statements(self) -> List[MDStatement]:
        """Parse every line into one statement, without list grouping."""
        return [self._parse_line(line) for line in split_lines(self.tokens)]

    def _parse_line(self, tokens: List[Token]) -> MDStatement:
        """Classify a line by its leading tokens."""
        if not tokens:
            return MDParagraph(MDText(""))

        first = tokens[0]
        if first.type == TokenType.HEADING:
            return self._parse_header(tokens)
        if first.type == TokenType.NUMBER:
            return self._parse_ordered_item(tokens)
        if first.type == TokenType.HYPHEN:
            return self._parse_unordered_item(tokens)

        return self._parse_paragraph(tokens)

    def _parse_header(self, tokens: List[Token]) -> MDStatement:
        """Parse `#... text`; degrade to a paragraph when the marker is malformed."""
        level = tokens[0].count
        if level > self.max_heading_level or not self._is_type_at(tokens, 1, TokenType.WHITESPACE):
            return self._parse_paragraph(tokens)

        body = self._skip_separator(tokens[1], tokens[2:])
        return MDHeader(level, self._parse_inline(body))

    def _parse_ordered_item(self, tokens: List[Token]) -> MDStatement:
        """Parse `N. text`; degrade to a paragraph when the marker is malformed."""
        if not (self._is_type_at(tokens, 1, TokenType.DOT) and
                self._is_type_at(tokens, 2, TokenType.WHITESPACE)):
            return self._parse_paragraph(tokens)

        body = self._skip_separator(tokens[2], tokens[3:])
        return MDListItem(ListType.ORDERED, self._parse_inline(body), number=tokens[0].value)

    def _parse_unordered_item(self, tokens: List[Token]) -> MDStatement:
        """Parse `- text` or a task item `- [ ] text` / `- [x] text`."""
        if not self._is_type_at(tokens, 1, TokenType.WHITESPACE):
            return self._parse_paragraph(tokens)

        rest = self._skip_separator(tokens[1], tokens[2:])

        checked = self._task_marker_state(rest)
        if checked is not None:
            body = self._skip_separator(rest[3], rest[4:])
            return MDListItem(ListType.TASK, self._parse_inline(body), checked=checked)

        # A malformed checkbox stays in the item as literal text
        return MDListItem(ListType.UNORDERED, self._parse_inline(rest))

    def _task_marker_state(self, tokens: List[Token]) -> Optional[bool]:
        """
        Check for a `[ ]` or `[x]` checkbox followed by whitespace.

        Returns:
            True for `[x]`, False for `[ ]`, None when there is no valid checkbox.
        """
        if not (self._is_type_at(tokens, 0, TokenType.LBRACKET) and
                self._is_type_at(tokens, 2, TokenType.RBRACKET) and
                self._is_type_at(tokens, 3, TokenType.WHITESPACE)):
            return None

        mark = tokens[1]
        if mark.type == TokenType.WHITESPACE and mark.content == ' ':
            return False
        if mark.type == TokenType.WORD and mark.content == 'x':
            return True
        return None

    def _parse_paragraph(self, tokens: List[Token]) -> MDParagraph:
        """Parse the whole line as plain inline content."""
        return MDParagraph(self._parse_inline(tokens))

    def _parse_list(self) -> MDList:
        """
        Group the list item at the current position with the items following it.

        Ordered lists continue only while the next line is an ordered item
        numbered exactly one more than the previous one. Unordered and task
        lists continue while the next line is an item of the same kind. The
        line that ends the list is left unconsumed.
        """
        first = self._current_statement()
        assert isinstance(first, MDListItem)

        if first.list_type == ListType.ORDERED:
            assert first.number is not None
            md_list = MDList(ListType.ORDERED, first.number)
            expected = first.number + 1
        else:
            md_list = MDList(first.list_type)
            expected = 0

        md_list.add_child(first)
        self._advance()

        while not self._is_at_end():
            statement = self._current_statement()
            if not isinstance(statement, MDListItem) or statement.list_type != md_list.list_type:
                break

            if md_list.list_type == ListType.ORDERED:
                if statement.number != expected:
                    logger.debug(
                        f"Ordered list closed at line {self.pos + 1}: expected {expected}, got {statement.number}"
                    )
                    break
                expected += 1

            md_list.add_child(statement)
            self._advance()

        return md_list

    # Helper methods

    def _parse_inline(self, tokens: List[Token]) -> MDNode:
        return self.inline_parser.parse(tokens)

    def _skip_separator(self, separator: Token, rest: List[Token]) -> List[Token]:
        """
        Drop the single whitespace character separating a marker from its content.

        Whitespace beyond the first character stays as leading content.
        """
        if separator.count > 1:
            leftover = separator._replace(content=separator.content[1:], column=separator.column + 1)
            return [leftover] + rest
        return rest

    def _is_type_at(self, tokens: List[Token], index: int, token_type: TokenType) -> bool:
        """Check if token at index exists and is of given type."""
        return index < len(tokens) and tokens[index].type == token_type

    def _current_statement(self) -> MDStatement:
        return self.statements[self.pos]

    def _advance(self) -> None:
        """Move to the next statement."""
        self.pos += 1

    def _is_at_end(self) -> bool:
        """Check if we're at the end of statements."""
        return self.pos >= len(self.statements)
