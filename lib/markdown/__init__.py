"""
Markdown to HTML converter

A small converter for a constrained subset of Markdown: ATX headers,
ordered, unordered and task lists, italic, bold, bold-italic and inline
links. Anything it cannot resolve is kept as literal text, so conversion
never fails and never drops characters.

This module provides:
- Tokenization of Markdown input into counted tokens
- Block-level parsing (one statement per line, list grouping)
- Inline parsing (delimiter-run emphasis resolution, links)
- AST (Abstract Syntax Tree) representation
- HTML rendering
- Markdown rendering (normalization)

Usage:
    from lib.markdown import MarkdownParser, render_document

    # Basic HTML rendering
    parser = MarkdownParser()
    html = parser.parse_to_html("# Hello World\\nThis is **bold** text.")

    # Convenience function
    html = render_document("**Bold** and *italic* text")
"""

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
    MDStatement,
    MDText,
    NodeType,
)
from .block_parser import BlockParser
from .inline_parser import InlineParser, parse_inline
from .parser import MarkdownParser, markdown_to_html, normalize_markdown, parse_markdown, render_document
from .renderer import HTMLRenderer, MarkdownRenderer
from .tokenizer import Token, Tokenizer, TokenType, tokenize

__version__ = "1.0.0"
__all__ = [
    "MarkdownParser",
    "parse_markdown",
    "markdown_to_html",
    "render_document",
    "normalize_markdown",
    "Tokenizer",
    "Token",
    "TokenType",
    "tokenize",
    "BlockParser",
    "InlineParser",
    "parse_inline",
    "HTMLRenderer",
    "MarkdownRenderer",
    # AST Nodes
    "NodeType",
    "EmphasisType",
    "ListType",
    "MDNode",
    "MDDocument",
    "MDStatement",
    "MDParagraph",
    "MDHeader",
    "MDList",
    "MDListItem",
    "MDEmphasis",
    "MDLink",
    "MDSequence",
    "MDText",
]
