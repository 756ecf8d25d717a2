"""
AST Node Classes for the Markdown to HTML converter

This module defines the tree produced by the parser. Block nodes
(statements) each come from exactly one source line; inline nodes
(expressions) describe the formatted content of a line. Nodes own their
children exclusively, the tree has no back references.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional


class NodeType(Enum):
    """Enumeration of all AST node types."""
    DOCUMENT = "document"
    PARAGRAPH = "paragraph"
    HEADER = "header"
    LIST = "list"
    LIST_ITEM = "list_item"
    EMPHASIS = "emphasis"
    LINK = "link"
    TEXT = "text"
    SEQUENCE = "sequence"


class EmphasisType(Enum):
    """Types of emphasis formatting."""
    ITALIC = "italic"
    BOLD = "bold"
    BOLD_ITALIC = "bold_italic"


class ListType(Enum):
    """Types of lists."""
    UNORDERED = "unordered"
    ORDERED = "ordered"
    TASK = "task"


class MDNode(ABC):
    """Base class for all Markdown AST nodes."""

    def __init__(self, node_type: NodeType):
        self.node_type = node_type
        self.children: List['MDNode'] = []

    def add_child(self, child: 'MDNode') -> None:
        """Add a child node."""
        self.children.append(child)

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary representation."""
        pass

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MDNode):
            return NotImplemented
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.node_type.value})"


# Inline nodes (expressions)


class MDText(MDNode):
    """Plain text node, rendered verbatim."""

    def __init__(self, content: str = ""):
        super().__init__(NodeType.TEXT)
        self.content = content

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "content": self.content
        }

    def __repr__(self) -> str:
        return f"MDText({self.content!r})"


class MDEmphasis(MDNode):
    """Emphasis node for bold, italic and bold-italic text."""

    def __init__(self, emphasis_type: EmphasisType, child: MDNode):
        super().__init__(NodeType.EMPHASIS)
        self.emphasis_type = emphasis_type
        self.add_child(child)

    @property
    def child(self) -> MDNode:
        return self.children[0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "emphasis_type": self.emphasis_type.value,
            "child": self.child.to_dict()
        }

    def __repr__(self) -> str:
        return f"MDEmphasis({self.emphasis_type.value}, {self.child!r})"


class MDLink(MDNode):
    """Link node; both the title and the url are inline expressions."""

    def __init__(self, title: MDNode, url: MDNode):
        super().__init__(NodeType.LINK)
        self.add_child(title)
        self.add_child(url)

    @property
    def title(self) -> MDNode:
        return self.children[0]

    @property
    def url(self) -> MDNode:
        return self.children[1]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "title": self.title.to_dict(),
            "url": self.url.to_dict()
        }

    def __repr__(self) -> str:
        return f"MDLink({self.title!r}, {self.url!r})"


class MDSequence(MDNode):
    """Ordered run of inline nodes. Always holds two or more children."""

    def __init__(self, children: List[MDNode]):
        super().__init__(NodeType.SEQUENCE)
        if len(children) < 2:
            raise ValueError(f"Sequence needs at least 2 children, got {len(children)}")
        for child in children:
            self.add_child(child)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "children": [child.to_dict() for child in self.children]
        }

    def __repr__(self) -> str:
        return f"MDSequence({self.children!r})"


def make_sequence(nodes: List[MDNode]) -> MDNode:
    """Combine inline nodes, degenerating empty and single-node runs."""
    if not nodes:
        return MDText("")
    if len(nodes) == 1:
        return nodes[0]
    return MDSequence(nodes)


# Block nodes (statements)


class MDStatement(MDNode):
    """Base class for single-line block nodes carrying an inline body."""

    def __init__(self, node_type: NodeType, body: MDNode):
        super().__init__(node_type)
        self.add_child(body)

    @property
    def body(self) -> MDNode:
        return self.children[0]


class MDParagraph(MDStatement):
    """Plain line of text."""

    def __init__(self, body: MDNode):
        super().__init__(NodeType.PARAGRAPH, body)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "body": self.body.to_dict()
        }


class MDHeader(MDStatement):
    """Header node with level (1-6)."""

    def __init__(self, level: int, body: MDNode):
        super().__init__(NodeType.HEADER, body)
        if not 1 <= level <= 6:
            raise ValueError(f"Header level must be 1-6, got {level}")
        self.level = level

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "level": self.level,
            "body": self.body.to_dict()
        }


class MDListItem(MDStatement):
    """List item: ordered (with number), unordered or task (with checked state)."""

    def __init__(
        self,
        list_type: ListType,
        body: MDNode,
        number: Optional[int] = None,
        checked: Optional[bool] = None,
    ):
        super().__init__(NodeType.LIST_ITEM, body)
        if list_type == ListType.ORDERED and number is None:
            raise ValueError("Ordered list item requires a number")
        if list_type == ListType.TASK and checked is None:
            raise ValueError("Task list item requires a checked state")
        self.list_type = list_type
        self.number = number
        self.checked = checked

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "type": self.node_type.value,
            "list_type": self.list_type.value,
        }
        if self.list_type == ListType.ORDERED:
            result["number"] = self.number
        if self.list_type == ListType.TASK:
            result["checked"] = self.checked
        result["body"] = self.body.to_dict()
        return result


# Grouping nodes


class MDList(MDNode):
    """Contiguous run of list items of one kind."""

    def __init__(self, list_type: ListType, start_number: int = 1):
        super().__init__(NodeType.LIST)
        self.list_type = list_type
        self.start_number = start_number  # for ordered lists

    @property
    def items(self) -> List[MDListItem]:
        return [child for child in self.children if isinstance(child, MDListItem)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "list_type": self.list_type.value,
            "start_number": self.start_number,
            "children": [child.to_dict() for child in self.children]
        }


class MDDocument(MDNode):
    """Root document node containing statements and list groups."""

    def __init__(self):
        super().__init__(NodeType.DOCUMENT)

    def statements(self) -> List[MDStatement]:
        """Flatten list groups back into one statement per source line."""
        result: List[MDStatement] = []
        for child in self.children:
            if isinstance(child, MDList):
                result.extend(child.items)
            elif isinstance(child, MDStatement):
                result.append(child)
        return result

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "children": [child.to_dict() for child in self.children]
        }
