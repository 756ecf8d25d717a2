"""
md2html - convert a constrained Markdown document into HTML fragments.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from internal.config.manager import ConfigManager
from lib.logging_utils import initLogging
from lib.markdown import MarkdownParser

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.WARNING)
logger = logging.getLogger(__name__)


class MarkdownConverter:
    """Reads a Markdown file, renders it and writes the HTML output."""

    def __init__(self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None):
        """Initialize converter with configuration, logging and parser."""
        self.configManager = ConfigManager(configPath, configDirs)

        initLogging(self.configManager.getLoggingConfig())

        filesConfig = self.configManager.getFilesConfig()
        self.defaultInput = filesConfig.get("input", "index.md")
        self.defaultOutput = filesConfig.get("output", "index.html")
        self.encoding = filesConfig.get("encoding", "utf-8")

        self.parser = MarkdownParser(self.configManager.getMarkdownConfig())

    def readContents(self, filepath: str) -> str:
        """Read the Markdown source, exiting with status 1 if it cannot be read."""
        try:
            with open(filepath, "rt", encoding=self.encoding) as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {filepath}: {e}")
            sys.exit(1)

    def writeContents(self, filepath: str, contents: str) -> None:
        """Write the rendered HTML, exiting with status 1 if it cannot be written."""
        try:
            with open(filepath, "wt", encoding=self.encoding) as f:
                f.write(contents)
        except OSError as e:
            logger.error(f"Failed to write {filepath}: {e}")
            sys.exit(1)

    def convert(self, inputPath: str, outputPath: str) -> str:
        """Convert inputPath to outputPath and return the rendered HTML."""
        markdown = self.readContents(inputPath)
        html = self.parser.parse_to_html(markdown)
        logger.info(f"Rendered {inputPath}: {self.parser.get_stats()}")
        self.writeContents(outputPath, html)
        return html


def readFilepath(instruction: str, default: str) -> str:
    """Prompt for a file path; an empty (trimmed) answer selects the default."""
    try:
        answer = input(f"{instruction} [{default}]: ")
    except EOFError:
        answer = ""

    filepath = answer.strip()
    return filepath or default


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="md2html - convert a constrained Markdown document into HTML"
    )
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times)",
    )
    parser.add_argument(
        "-i",
        "--input",
        help="Markdown file to convert (prompted for when omitted)",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="HTML file to write (prompted for when omitted)",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit",
    )
    args = parser.parse_args(argv)
    args.config = os.path.abspath(args.config)

    if args.config_dir:
        args.config_dir = [os.path.abspath(dir_path) for dir_path in args.config_dir]

    return args


def prettyPrintConfig(configManager: ConfigManager):
    """Pretty-print the loaded configuration."""
    print("=== md2html Configuration ===")
    print()
    print(json.dumps(configManager.config, indent=2, ensure_ascii=False, sort_keys=True))


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = parse_arguments(argv)

    converter = MarkdownConverter(configPath=args.config, configDirs=args.config_dir)

    if args.print_config:
        prettyPrintConfig(converter.configManager)
        sys.exit(0)

    inputPath = args.input or readFilepath("Enter the filepath of your markdown file", converter.defaultInput)
    outputPath = args.output or readFilepath("Enter the filepath of the output file", converter.defaultOutput)

    converter.convert(inputPath, outputPath)
    print(f"Successfully wrote to {outputPath}")


if __name__ == "__main__":
    main()
