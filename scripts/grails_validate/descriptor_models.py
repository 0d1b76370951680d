"""Descriptor data model classes.

Pure data structures for the three descriptors the validation compares:
the Maven build descriptor, the Grails application descriptor and the
Grails plugin descriptor. No behavior or imports from other modules.
"""

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class BuildDescriptor:
    """The Maven side of the comparison, read from ``pom.xml``.

    Attributes:
        artifact_id: Maven artifactId (e.g. ``grails-shiro``).
        packaging: Maven packaging (``grails-plugin`` marks a plugin project).
        version: Maven version string, compared after stripping whitespace.
    """
    artifact_id: str
    packaging: str
    version: str


@dataclass
class ApplicationDescriptor:
    """A Grails ``application.properties`` file.

    Attributes:
        app_name: The ``app.name`` property.
        app_version: The ``app.version`` property, or ``None`` when absent.
        grails_version: The ``app.grails.version`` property, if any.
        properties: Every property in the file, so that write-back keeps them.
    """
    app_name: Optional[str]
    app_version: Optional[str] = None
    grails_version: Optional[str] = None
    properties: dict = field(default_factory=dict)


@dataclass(frozen=True)
class PluginDescriptor:
    """A Grails plugin descriptor (``*GrailsPlugin.groovy``).

    Attributes:
        plugin_name: Logical plugin name (``ShiroGrailsPlugin`` → ``shiro``).
        version: The ``version`` declared by the descriptor, as written.
        file_name: Descriptor file name, used in error messages only.
    """
    plugin_name: str
    version: str
    file_name: str


@dataclass(frozen=True)
class ApplicationMode:
    """Validate a Grails application against its ``application.properties``."""
    artifact_id: str
    version: str


@dataclass(frozen=True)
class PluginMode:
    """Validate a Grails plugin against its plugin descriptor."""
    artifact_id: str
    version: str


BuildMode = Union[ApplicationMode, PluginMode]
