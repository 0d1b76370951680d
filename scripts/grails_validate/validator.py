"""Consistency checks between the Maven and Grails descriptors.

Runs once per build, before anything else. A Grails application must have
``app.name``/``app.version`` matching the POM's artifactId/version; a Grails
plugin (packaging ``grails-plugin``) must have an artifactId of
``grails-<plugin name>`` and the same version as its plugin descriptor.
"""

from pathlib import Path

from .descriptor_models import ApplicationMode, BuildDescriptor, BuildMode, PluginMode
from .errors import DescriptorNotFoundError, ValidationFailure

PLUGIN_PACKAGING = "grails-plugin"
PLUGIN_PREFIX = "grails-"

# Written to application.properties when it has no app.version.
DEFAULT_APP_VERSION = "0.1"


def select_mode(build: BuildDescriptor) -> BuildMode:
    """Pick the validation to run from the POM packaging."""
    if build.packaging == PLUGIN_PACKAGING:
        return PluginMode(artifact_id=build.artifact_id, version=build.version)
    return ApplicationMode(artifact_id=build.artifact_id, version=build.version)


def validate(build: BuildDescriptor, services, log, basedir: Path):
    """Check ``build`` against the Grails descriptors of the project at ``basedir``.

    Args:
        build: Coordinates from the POM.
        services: Descriptor reader/writer (see ``GrailsServices``).
        log: Object with ``info(msg)`` and ``warn(msg)``.
        basedir: Project directory, used for the application write-back.

    Raises:
        ValidationFailure: If the descriptors disagree.
        ExecutionError: If a descriptor is present but cannot be read or written.
    """
    mode = select_mode(build)
    if isinstance(mode, PluginMode):
        _validate_grails_plugin(mode, services)
    else:
        _validate_grails_app(mode, services, log, basedir)


def _validate_grails_app(mode: ApplicationMode, services, log, basedir: Path):
    try:
        project = services.read_project_descriptor()
    except DescriptorNotFoundError:
        log.info("No Grails application found - skipping validation.")
        return

    if mode.artifact_id != project.app_name:
        raise ValidationFailure(
            f"app.name [{project.app_name}] in application.properties is different "
            f"of the artifactId [{mode.artifact_id}] in the pom.xml"
        )

    # An absent app.version compares as empty, so the back-fill below is only
    # reached when the POM version is blank as well.
    pom_version = mode.version.strip()
    grails_version = (project.app_version or "").strip()

    if grails_version != pom_version:
        raise ValidationFailure(
            f"app.version [{grails_version}] in application.properties is different "
            f"of the version [{pom_version}] in the pom.xml"
        )

    if project.app_version is None:
        project.app_version = DEFAULT_APP_VERSION
        log.warn("application.properties didn't contain an app.version property")
        log.warn(f"Setting to default value '{project.app_version}'.")

        services.write_project_descriptor(basedir, project)


def _validate_grails_plugin(mode: PluginMode, services):
    plugin = services.read_grails_plugin_project()
    plugin_name = plugin.plugin_name

    if mode.artifact_id == plugin_name:
        raise ValidationFailure(
            f"The artifact id in pom.xml has to be the same as in {plugin.file_name} "
            f"prefixed with '{PLUGIN_PREFIX}'. This is to avoid confusion when the "
            f"artifact is installed in the Maven repository."
        )

    expected = PLUGIN_PREFIX + plugin_name
    if mode.artifact_id != expected:
        raise ValidationFailure(
            f"The plugin name [{plugin_name}] in {plugin.file_name} does not match the "
            f"artifactId [{mode.artifact_id}] in the pom.xml, expected {expected}. "
            f"Please correct the pom or the plugin descriptor."
        )

    pom_version = mode.version.strip()
    if plugin.version != pom_version:
        raise ValidationFailure(
            f"The version specified in the plugin descriptor [{plugin.version}] in "
            f"{plugin.file_name} is different of the version [{pom_version}] in the pom.xml"
        )
