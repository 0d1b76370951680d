"""Shared test fixtures for the Grails descriptor validation test suite."""

import textwrap
from pathlib import Path

import pytest

from grails_validate.build_log import BuildLog
from grails_validate.descriptor_models import ApplicationDescriptor, BuildDescriptor, PluginDescriptor
from grails_validate.errors import DescriptorNotFoundError
from grails_validate.grails_services import GrailsServices


@pytest.fixture
def tmp_pom(tmp_path):
    """Factory fixture that writes a pom.xml to a temp directory and returns the path."""
    def _write(content: str) -> Path:
        pom = tmp_path / "pom.xml"
        pom.write_text(textwrap.dedent(content), encoding="utf-8")
        return pom
    return _write


@pytest.fixture
def tmp_app_properties(tmp_path):
    """Factory fixture that writes application.properties and returns the path."""
    def _write(content: str) -> Path:
        path = tmp_path / "application.properties"
        path.write_text(textwrap.dedent(content), encoding="latin-1")
        return path
    return _write


@pytest.fixture
def tmp_plugin_descriptor(tmp_path):
    """Factory fixture that writes a ``<ClassName>.groovy`` plugin descriptor."""
    def _write(class_name: str, content: str) -> Path:
        path = tmp_path / f"{class_name}.groovy"
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path
    return _write


class RecordingServices(GrailsServices):
    """In-memory descriptor service that records write-backs."""

    def __init__(self, app=None, plugin=None):
        super().__init__(Path("."))
        self.app = app
        self.plugin = plugin
        self.writes = []

    def read_project_descriptor(self):
        if self.app is None:
            raise DescriptorNotFoundError("No application.properties found")
        return self.app

    def write_project_descriptor(self, basedir, descriptor):
        self.writes.append((basedir, descriptor))

    def read_grails_plugin_project(self):
        if self.plugin is None:
            raise DescriptorNotFoundError("No Grails plugin descriptor found")
        return self.plugin


@pytest.fixture
def log():
    return BuildLog()


@pytest.fixture
def app_build():
    """POM coordinates of a plain Grails application."""
    return BuildDescriptor(artifact_id="bookstore", packaging="war", version="1.2.0")


@pytest.fixture
def plugin_build():
    """POM coordinates of the shiro Grails plugin."""
    return BuildDescriptor(artifact_id="grails-shiro", packaging="grails-plugin", version="1.0")


@pytest.fixture
def bookstore_app():
    return ApplicationDescriptor(app_name="bookstore", app_version="1.2.0", grails_version="1.3.7")


@pytest.fixture
def shiro_plugin():
    return PluginDescriptor(plugin_name="shiro", version="1.0", file_name="ShiroGrailsPlugin.groovy")
