"""Maven POM reading and property resolution.

Reads the few coordinates the validation needs (artifactId, version,
packaging) from a ``pom.xml``, the way Maven would hand them to a goal.
"""

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from .descriptor_models import BuildDescriptor
from .errors import DescriptorNotFoundError, ExecutionError

# XML namespace used by Maven POM files (POM model version 4.0.0).
NS = {"m": "http://maven.apache.org/POM/4.0.0"}


def _find(el, tag, ns=NS):
    """Find a direct child XML element, trying with and without the Maven namespace.

    Args:
        el: Parent XML element to search within.
        tag: Tag name to look for (without namespace prefix).
        ns: Namespace mapping (defaults to Maven POM 4.0.0).

    Returns:
        The first matching child element, or ``None`` if not found.
    """
    result = el.find(f"m:{tag}", ns)
    if result is not None:
        return result
    return el.find(tag)


def _text(el, tag, ns=NS):
    """Extract the stripped text of a child element, or ``None`` if missing or empty."""
    child = _find(el, tag, ns)
    if child is not None and child.text:
        return child.text.strip()
    return None


def _properties(root) -> dict:
    props = {}
    props_el = _find(root, "properties")
    if props_el is not None:
        for child in props_el:
            tag = child.tag.split("}")[-1] if "}" in child.tag else child.tag
            if child.text:
                props[tag] = child.text.strip()
    return props


def parse_pom(pom_path: Path) -> BuildDescriptor:
    """Read the build descriptor from a ``pom.xml`` file.

    Handles both namespaced and non-namespaced POM files. The version is
    inherited from ``<parent>`` when the POM does not declare its own, and
    ``${...}`` references are resolved against ``<properties>``.

    Args:
        pom_path: Filesystem path to the pom.xml file.

    Returns:
        The BuildDescriptor for the POM. Packaging defaults to ``jar``.

    Raises:
        DescriptorNotFoundError: If ``pom_path`` does not exist.
        ExecutionError: If the file is unreadable, is not valid XML, or
            declares no artifactId or version.
    """
    if not pom_path.is_file():
        raise DescriptorNotFoundError(f"No pom.xml found at {pom_path}")
    try:
        root = ET.parse(pom_path).getroot()
    except (ET.ParseError, OSError) as e:
        raise ExecutionError(f"Unable to read {pom_path}: {e}") from e

    parent_ver = None
    parent_el = _find(root, "parent")
    if parent_el is not None:
        parent_ver = _text(parent_el, "version")

    properties = _properties(root)
    coordinates = {
        "artifactId": _text(root, "artifactId"),
        "version": _text(root, "version") or parent_ver,
        "packaging": _text(root, "packaging") or "jar",
    }
    # Maven exposes the POM's own coordinates as project.* properties.
    for name, value in coordinates.items():
        if value:
            properties.setdefault(f"project.{name}", value)

    artifact_id = resolve_property(coordinates["artifactId"], properties)
    version = resolve_property(coordinates["version"], properties)
    packaging = resolve_property(coordinates["packaging"], properties)

    if not artifact_id:
        raise ExecutionError(f"No artifactId declared in {pom_path}")
    if not version:
        raise ExecutionError(f"No version declared in {pom_path} or its parent")

    return BuildDescriptor(artifact_id=artifact_id, packaging=packaging, version=version)


def resolve_property(value: Optional[str], properties: dict, _depth: int = 0) -> Optional[str]:
    """Resolve a value that is entirely one ``${property}`` reference.

    Chains are followed up to a depth of 10; anything unresolvable, or not a
    single reference, is returned unchanged.
    """
    if not value or _depth > 10:
        return value
    match = re.match(r"^\$\{(.+?)\}$", value)
    if match and match.group(1) in properties:
        resolved = properties[match.group(1)]
        if resolved and "${" in resolved:
            return resolve_property(resolved, properties, _depth + 1)
        return resolved
    return value
