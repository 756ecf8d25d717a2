"""
Main Markdown Parser for the Markdown to HTML converter

This module provides the MarkdownParser class that orchestrates
tokenization, block parsing, inline parsing, and rendering.
"""

import logging
from typing import Any, Dict, Optional

from .ast_nodes import MDDocument, MDList
from .block_parser import BlockParser
from .inline_parser import InlineParser
from .renderer import HTMLRenderer, MarkdownRenderer
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)


class MarkdownParser:
    """
    Main Markdown parser that coordinates all parsing stages.

    Processing model:
    1. Tokenization: Split input into counted, coalesced tokens
    2. Block Parsing: Classify every line and group list items into lists
    3. Inline Parsing: Resolve emphasis and links within each line
    4. Rendering: Convert parsed structure to output format

    Parsing never fails on markup: anything malformed is kept as literal text.
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        """
        Initialize the Markdown parser.

        Args:
            options: Optional parser configuration
        """
        self.options = dict(options or {})

        # Initialize components
        self.inline_parser = InlineParser()

        # Rendering options
        self.html_renderer = HTMLRenderer(self.options.get('html_options', {}))
        self.markdown_renderer = MarkdownRenderer(self.options.get('markdown_options', {}))

        # Statistics and debugging
        self.parse_stats: Dict[str, int] = {}
        self._reset_stats()

    def parse(self, markdown_text: str) -> MDDocument:
        """
        Parse Markdown text into an AST.

        Args:
            markdown_text: The Markdown text to parse

        Returns:
            MDDocument representing the parsed document

        Raises:
            ValueError: If input is not a string
        """
        if not isinstance(markdown_text, str):
            raise ValueError("Input must be a string")

        self._reset_stats()

        # Stage 1: Tokenization
        tokens = Tokenizer(markdown_text).tokenize()
        self.parse_stats['tokens_processed'] = len(tokens)

        # Stages 2 and 3: Block parsing, which runs the inline parser per line
        block_parser = BlockParser(tokens, self.options, self.inline_parser)
        document = block_parser.parse()

        self.parse_stats['lines_parsed'] = len(block_parser.statements)
        self.parse_stats['blocks_parsed'] = len(document.children)
        self.parse_stats['lists_parsed'] = sum(1 for child in document.children if isinstance(child, MDList))

        logger.debug(f"Parsed document: {self.parse_stats}")
        return document

    def parse_to_html(self, markdown_text: str) -> str:
        """
        Parse Markdown text and render to HTML.

        Args:
            markdown_text: The Markdown text to parse

        Returns:
            HTML string representation
        """
        document = self.parse(markdown_text)
        return self.html_renderer.render(document)

    def parse_to_markdown(self, markdown_text: str) -> str:
        """
        Parse Markdown text and render back to normalized Markdown.

        Args:
            markdown_text: The Markdown text to parse

        Returns:
            Normalized Markdown string
        """
        document = self.parse(markdown_text)
        return self.markdown_renderer.render(document)

    def get_ast_json(self, markdown_text: str) -> Dict[str, Any]:
        """
        Parse Markdown text and return AST as JSON-serializable dictionary.

        Args:
            markdown_text: The Markdown text to parse

        Returns:
            Dictionary representation of the AST
        """
        document = self.parse(markdown_text)
        return document.to_dict()

    def _reset_stats(self) -> None:
        """Reset parsing statistics."""
        self.parse_stats = {
            'tokens_processed': 0,
            'lines_parsed': 0,
            'blocks_parsed': 0,
            'lists_parsed': 0,
        }

    def get_stats(self) -> Dict[str, int]:
        """
        Get parsing statistics from the last parse operation.

        Returns:
            Dictionary containing parsing statistics
        """
        return self.parse_stats.copy()

    def set_option(self, key: str, value: Any) -> None:
        """
        Set a parser option.

        Args:
            key: Option name
            value: Option value
        """
        # Renderer options may be set one by one with a prefix
        if key.startswith('html_') and key != 'html_options':
            html_options = dict(self.options.get('html_options', {}))
            html_options[key[5:]] = value  # Remove 'html_' prefix
            key, value = 'html_options', html_options
        elif key.startswith('markdown_') and key != 'markdown_options':
            markdown_options = dict(self.options.get('markdown_options', {}))
            markdown_options[key[9:]] = value  # Remove 'markdown_' prefix
            key, value = 'markdown_options', markdown_options

        self.options[key] = value

        # Update components if needed
        if key == 'html_options':
            self.html_renderer = HTMLRenderer(value)
        elif key == 'markdown_options':
            self.markdown_renderer = MarkdownRenderer(value)

    def get_option(self, key: str, default: Any = None) -> Any:
        """
        Get a parser option.

        Args:
            key: Option name
            default: Default value if option not found

        Returns:
            Option value or default
        """
        return self.options.get(key, default)


# Convenience functions for quick parsing

def parse_markdown(text: str, **options) -> MDDocument:
    """
    Parse Markdown text into an AST.

    Args:
        text: Markdown text to parse
        **options: Parser options

    Returns:
        MDDocument representing the parsed document
    """
    parser = MarkdownParser(options)
    return parser.parse(text)


def markdown_to_html(text: str, **options) -> str:
    """
    Convert Markdown text to HTML.

    Args:
        text: Markdown text to convert
        **options: Parser and renderer options

    Returns:
        HTML string
    """
    parser = MarkdownParser(options)
    return parser.parse_to_html(text)


def render_document(markdown_text: str, **options) -> str:
    """Render a whole Markdown document to concatenated HTML fragments."""
    return markdown_to_html(markdown_text, **options)


def normalize_markdown(text: str, **options) -> str:
    """
    Normalize Markdown text by parsing and re-rendering.

    Args:
        text: Markdown text to normalize
        **options: Parser and renderer options

    Returns:
        Normalized Markdown string
    """
    parser = MarkdownParser(options)
    return parser.parse_to_markdown(text)
