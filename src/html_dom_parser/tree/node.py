"""Document node model.

A tree is owned top-down: each node holds strong references to its children
only. The parent link is a weak reference fixed when the node is created, so
it can answer "who is my parent" but never keeps a tree alive. Once the root
and every intermediate owner have been released, ``parent`` reads ``None``.
"""

import weakref
from enum import Enum, auto
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from html_dom_parser.elements import AnyElementKind, ElementKind, UnknownElement


class NodeType(Enum):
    """Kinds of node in a document tree."""

    DOCUMENT = auto()
    ELEMENT = auto()
    TEXT = auto()
    COMMENT = auto()


class Node:
    """A node in a parsed document tree.

    Use the ``document``/``create_*`` factories rather than the constructor.
    Non-document nodes must name their parent at creation time, and can only
    be appended to that parent.
    """

    def __init__(
        self,
        node_type: NodeType,
        element: Optional[AnyElementKind] = None,
        data: Optional[str] = None,
        attributes: Optional[Dict[str, str]] = None,
        boolean_attributes: Optional[Iterable[str]] = None,
        parent: Optional["Node"] = None
    ) -> None:
        if node_type is NodeType.DOCUMENT:
            if parent is not None:
                raise ValueError("Document nodes cannot have a parent")
        elif parent is None:
            raise ValueError("Non-document nodes require a parent")

        if node_type is NodeType.ELEMENT:
            if not isinstance(element, (ElementKind, UnknownElement)):
                raise TypeError("Element nodes require an ElementKind or UnknownElement")
        elif element is not None:
            raise ValueError(f"{node_type.name} nodes cannot carry an element kind")

        if node_type in (NodeType.TEXT, NodeType.COMMENT):
            if not isinstance(data, str):
                raise TypeError(f"{node_type.name} nodes require string data")
        elif data is not None:
            raise ValueError(f"{node_type.name} nodes cannot carry data")

        self.node_type = node_type
        self.element = element
        self.data = data
        self.attributes: Dict[str, str] = dict(attributes or {})
        self.boolean_attributes = frozenset(boolean_attributes or ())
        if not self.boolean_attributes <= set(self.attributes):
            raise ValueError("Boolean attributes must also appear in attributes")

        self.children: List["Node"] = []
        self._parent_ref: Optional["weakref.ReferenceType[Node]"] = (
            weakref.ref(parent) if parent is not None else None
        )
        self._attached = False

    # Factories

    @classmethod
    def document(cls) -> "Node":
        """Create an empty document root."""
        return cls(NodeType.DOCUMENT)

    @classmethod
    def create_element(
        cls,
        element: AnyElementKind,
        parent: "Node",
        attributes: Optional[Dict[str, str]] = None,
        boolean_attributes: Optional[Iterable[str]] = None
    ) -> "Node":
        return cls(
            NodeType.ELEMENT,
            element=element,
            attributes=attributes,
            boolean_attributes=boolean_attributes,
            parent=parent,
        )

    @classmethod
    def create_text(cls, data: str, parent: "Node") -> "Node":
        return cls(NodeType.TEXT, data=data, parent=parent)

    @classmethod
    def create_comment(
        cls,
        data: str,
        parent: "Node",
        attributes: Optional[Dict[str, str]] = None
    ) -> "Node":
        return cls(NodeType.COMMENT, data=data, attributes=attributes, parent=parent)

    # Structure

    @property
    def parent(self) -> Optional["Node"]:
        """The owning node, or None for the root or once the tree is gone."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def is_orphaned(self) -> bool:
        """Check if this node had a parent that no longer exists."""
        return self._parent_ref is not None and self._parent_ref() is None

    def append_child(self, child: "Node") -> None:
        """Attach a child created for this node as the last child.

        Raises:
            TypeError: If this node is a text or comment node
            ValueError: If this node is a void element, or the child belongs to
                another parent or is already attached
        """
        if not isinstance(child, Node):
            raise TypeError("Child must be a Node instance")
        if self.node_type in (NodeType.TEXT, NodeType.COMMENT):
            raise TypeError(f"{self.node_type.name} nodes cannot have children")
        if self.is_void:
            raise ValueError(f"Void element <{self.tag_name}> cannot have children")
        if child.parent is not self:
            raise ValueError("Child was created for a different parent")
        if child._attached:
            raise ValueError("Child is already attached")

        child._attached = True
        self.children.append(child)

    def ancestors(self) -> Iterator["Node"]:
        """Yield the parent, grandparent and so on up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    @property
    def depth(self) -> int:
        """Number of ancestors (the document root has depth 0)."""
        return sum(1 for _ in self.ancestors())

    def iter_descendants(self) -> Iterator["Node"]:
        """Yield every descendant in pre-order, excluding this node."""
        from html_dom_parser.query import iter_preorder

        nodes = iter_preorder(self)
        next(nodes)
        return nodes

    # Node kind

    @property
    def is_document(self) -> bool:
        return self.node_type is NodeType.DOCUMENT

    @property
    def is_element(self) -> bool:
        return self.node_type is NodeType.ELEMENT

    @property
    def is_text(self) -> bool:
        return self.node_type is NodeType.TEXT

    @property
    def is_comment(self) -> bool:
        return self.node_type is NodeType.COMMENT

    @property
    def is_void(self) -> bool:
        return self.element is not None and self.element.is_void

    @property
    def tag_name(self) -> Optional[str]:
        if self.element is None:
            return None
        return self.element.tag_name

    # Attributes

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def is_boolean_attribute(self, name: str) -> bool:
        """Check if ``name`` was written without a value, as in ``<input required>``."""
        return name in self.boolean_attributes

    @property
    def class_list(self) -> List[str]:
        return self.attributes.get("class", "").split()

    @property
    def text_content(self) -> str:
        """Concatenated text of this node and all descendant text nodes."""
        from html_dom_parser.query import iter_preorder

        return "".join(
            node.data for node in iter_preorder(self)
            if node.node_type is NodeType.TEXT and node.data is not None
        )

    # Query and serialization

    def get_element_by_id(self, id_value: str) -> Optional["Node"]:
        from html_dom_parser.query import get_element_by_id

        return get_element_by_id(self, id_value)

    def get_elements_by_class(self, class_name: str) -> List["Node"]:
        from html_dom_parser.query import get_elements_by_class

        return get_elements_by_class(self, class_name)

    def get_elements_by_tag(self, kind: Union[AnyElementKind, str]) -> List["Node"]:
        from html_dom_parser.query import get_elements_by_tag

        return get_elements_by_tag(self, kind)

    def outer_html(self, attribute_order: str = "sorted") -> Optional[str]:
        """Markup for this element and its subtree, None for other nodes."""
        from html_dom_parser.query import outer_html

        return outer_html(self, attribute_order)

    def inner_html(self, attribute_order: str = "sorted") -> Optional[str]:
        """Markup for the children of this node, None for text and comments."""
        from html_dom_parser.query import inner_html

        return inner_html(self, attribute_order)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the subtree to a plain dictionary."""
        result: Dict[str, Any] = {"type": self.node_type.name}
        if self.element is not None:
            result["tag"] = self.element.tag_name
            result["known"] = isinstance(self.element, ElementKind)
        if self.data is not None:
            result["data"] = self.data
        if self.attributes:
            result["attributes"] = dict(self.attributes)
        if self.boolean_attributes:
            result["boolean_attributes"] = sorted(self.boolean_attributes)
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result

    def __repr__(self) -> str:
        if self.node_type is NodeType.ELEMENT:
            return f"<Node ELEMENT {self.tag_name} attributes={self.attributes!r}>"
        if self.data is not None:
            preview = self.data if len(self.data) <= 30 else self.data[:27] + "..."
            return f"<Node {self.node_type.name} {preview!r}>"
        return f"<Node {self.node_type.name} children={len(self.children)}>"
