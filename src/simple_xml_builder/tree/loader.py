"""Construction of element trees from plain dict/JSON descriptions.

A description is a mapping with a required ``name`` and optional
``attributes`` (mapping), ``children`` (list of descriptions) and ``text``
(any value). ``text`` and a non-empty ``children`` list are mutually
exclusive, just as on ``XMLElement``.
"""

from typing import Any, List, Mapping, Optional, Tuple

from simple_xml_builder.shared.errors import TreeDescriptionError
from simple_xml_builder.tree.element import XMLElement

DESCRIPTION_KEYS = frozenset({"name", "attributes", "children", "text"})


def element_from_dict(data: Mapping[str, Any]) -> XMLElement:
    """Build an element tree from a description.

    Args:
        data: Element description, e.g. parsed from JSON

    Returns:
        Root XMLElement of the described tree

    Raises:
        TreeDescriptionError: If the description is malformed
    """
    root: Optional[XMLElement] = None
    # (description, path of the parent, parent element) frames, depth-first
    stack: List[Tuple[Any, str, Optional[XMLElement]]] = [(data, "", None)]

    while stack:
        description, parent_path, parent = stack.pop()
        element, path, children = _build_element(description, parent_path)

        if parent is None:
            root = element
        else:
            parent.add_child(element)

        for index in reversed(range(len(children))):
            stack.append((children[index], f"{path}[{index}]", element))

    assert root is not None
    return root


def _build_element(data: Any, path: str) -> Tuple[XMLElement, str, List[Any]]:
    """Build a single element without its children.

    Returns the element, its path and the child descriptions still to build.
    """
    if not isinstance(data, Mapping):
        raise TreeDescriptionError("element description must be an object", path or "/")

    name = data.get("name")
    if name is None or name == "":
        raise TreeDescriptionError("element description needs a non-empty 'name'", path or "/")
    try:
        element = XMLElement(name)
    except ValueError as e:
        raise TreeDescriptionError(str(e), path or "/") from e
    path = f"{path}/{element.name}"

    unknown = sorted(set(data) - DESCRIPTION_KEYS)
    if unknown:
        raise TreeDescriptionError(f"unknown keys: {', '.join(unknown)}", path)

    attributes = data.get("attributes")
    if attributes is None:
        attributes = {}
    elif not isinstance(attributes, Mapping):
        raise TreeDescriptionError("'attributes' must be an object", path)

    children = data.get("children")
    if children is None:
        children = []
    elif not isinstance(children, list):
        raise TreeDescriptionError("'children' must be a list", path)

    text = data.get("text")
    if text is not None and children:
        raise TreeDescriptionError("an element cannot have both 'text' and 'children'", path)

    try:
        for attr_name, value in attributes.items():
            element.add_attribute(attr_name, value)
        if text is not None:
            element.add_text(text)
    except ValueError as e:
        raise TreeDescriptionError(str(e), path) from e

    return element, path, children
