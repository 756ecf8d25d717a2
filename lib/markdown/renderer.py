"""
Renderers for the Markdown to HTML converter

This module provides rendering functionality to convert the parsed
Markdown AST into HTML fragments, or back into normalized Markdown.
"""

from typing import Any, Dict, Optional

from .ast_nodes import (
    EmphasisType,
    ListType,
    MDDocument,
    MDEmphasis,
    MDHeader,
    MDLink,
    MDList,
    MDListItem,
    MDNode,
    MDParagraph,
    MDSequence,
    MDText,
)

EMPHASIS_MARKER_COUNTS = {
    EmphasisType.ITALIC: 1,
    EmphasisType.BOLD: 2,
    EmphasisType.BOLD_ITALIC: 3,
}


class HTMLRenderer:
    """
    Renderer that converts Markdown AST to HTML.

    Output is a concatenation of HTML fragments in document order, without
    an enclosing <html> document. Text is emitted verbatim (no escaping).
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        """
        Initialize the HTML renderer.

        Args:
            options: Optional rendering configuration
        """
        self.options = options or {}

        # Default rendering options
        self.block_separator = self.options.get("block_separator", "")
        self.checkbox_checked = self.options.get("checkbox_checked", "[x]")
        self.checkbox_unchecked = self.options.get("checkbox_unchecked", "[ ]")

    def render(self, document: MDDocument) -> str:
        """
        Render a Markdown document to HTML.

        Args:
            document: The root document node to render

        Returns:
            HTML string representation of the document
        """
        if not isinstance(document, MDDocument):
            raise ValueError("Expected MDDocument as root node")

        html_parts = [self._render_node(child) for child in document.children]
        return self.block_separator.join(html_parts)

    def _render_node(self, node: MDNode) -> str:
        """Render a single AST node to HTML."""
        if isinstance(node, MDParagraph):
            return self._render_paragraph(node)
        elif isinstance(node, MDHeader):
            return self._render_header(node)
        elif isinstance(node, MDList):
            return self._render_list(node)
        elif isinstance(node, MDListItem):
            return self._render_list_item(node)
        elif isinstance(node, MDEmphasis):
            return self._render_emphasis(node)
        elif isinstance(node, MDLink):
            return self._render_link(node)
        elif isinstance(node, MDSequence):
            return self._render_children(node)
        elif isinstance(node, MDText):
            return node.content
        else:
            raise ValueError(f"Unknown node type: {type(node).__name__}")

    def _render_paragraph(self, node: MDParagraph) -> str:
        """Render paragraph node. A blank line renders as an empty paragraph."""
        return f"<p>{self._render_node(node.body)}</p>"

    def _render_header(self, node: MDHeader) -> str:
        """Render header node."""
        level = node.level
        content = self._render_node(node.body)
        return f"<h{level}>{content}</h{level}>"

    def _render_list(self, node: MDList) -> str:
        """Render list node."""
        tag = "ol" if node.list_type == ListType.ORDERED else "ul"

        # Add start attribute for ordered lists if not starting at 1
        start_attr = ""
        if node.list_type == ListType.ORDERED and node.start_number != 1:
            start_attr = f' start="{node.start_number}"'

        inner_html = self._render_children(node)
        return f"<{tag}{start_attr}>{inner_html}</{tag}>"

    def _render_list_item(self, node: MDListItem) -> str:
        """Render list item node; task items lead with a checkbox marker."""
        content = self._render_node(node.body)
        if node.list_type == ListType.TASK:
            checkbox = self.checkbox_checked if node.checked else self.checkbox_unchecked
            content = f"{checkbox} {content}"
        return f"<li>{content}</li>"

    def _render_emphasis(self, node: MDEmphasis) -> str:
        """Render emphasis node."""
        content = self._render_node(node.child)

        if node.emphasis_type == EmphasisType.ITALIC:
            return f"<i>{content}</i>"
        elif node.emphasis_type == EmphasisType.BOLD:
            return f"<strong>{content}</strong>"
        else:
            return f"<strong><i>{content}</i></strong>"

    def _render_link(self, node: MDLink) -> str:
        """Render link node."""
        title = self._render_node(node.title)
        url = self._render_node(node.url)
        return f'<a href="{url}">{title}</a>'

    def _render_children(self, node: MDNode) -> str:
        """Render all children of a node and return concatenated result."""
        return "".join(self._render_node(child) for child in node.children)


class MarkdownRenderer:
    """
    Renderer that converts AST back to Markdown.

    Useful for reformatting or normalizing Markdown documents.
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        """Initialize the Markdown renderer."""
        self.options = options or {}
        self.emphasis_style = self.options.get("emphasis_style", "asterisk")  # 'asterisk' or 'underscore'
        self.list_marker = self.options.get("list_marker", "-")

    def render(self, document: MDDocument) -> str:
        """Render a Markdown document back to Markdown, one line per statement."""
        if not isinstance(document, MDDocument):
            raise ValueError("Expected MDDocument as root node")

        lines = []
        for child in document.children:
            lines.append(self._render_node(child))

        return "\n".join(lines)

    def _render_node(self, node: MDNode) -> str:
        """Render a single AST node back to Markdown."""
        if isinstance(node, MDParagraph):
            return self._render_node(node.body)
        elif isinstance(node, MDHeader):
            return f"{'#' * node.level} {self._render_node(node.body)}"
        elif isinstance(node, MDList):
            return self._render_list(node)
        elif isinstance(node, MDListItem):
            return self._render_list_item(node, node.number or 1)
        elif isinstance(node, MDEmphasis):
            char = "_" if self.emphasis_style == "underscore" else "*"
            marker = char * EMPHASIS_MARKER_COUNTS[node.emphasis_type]
            return f"{marker}{self._render_node(node.child)}{marker}"
        elif isinstance(node, MDLink):
            return f"[{self._render_node(node.title)}]({self._render_node(node.url)})"
        elif isinstance(node, MDSequence):
            return "".join(self._render_node(child) for child in node.children)
        elif isinstance(node, MDText):
            return node.content

        raise ValueError(f"Unknown node type: {type(node)}")

    def _render_list(self, node: MDList) -> str:
        """Render list node, renumbering ordered items from the list start."""
        lines = []
        for index, item in enumerate(node.items):
            lines.append(self._render_list_item(item, node.start_number + index))
        return "\n".join(lines)

    def _render_list_item(self, node: MDListItem, number: int) -> str:
        """Render list item node."""
        content = self._render_node(node.body)
        if node.list_type == ListType.ORDERED:
            return f"{number}. {content}"
        if node.list_type == ListType.TASK:
            mark = "x" if node.checked else " "
            return f"{self.list_marker} [{mark}] {content}"
        return f"{self.list_marker} {content}"
