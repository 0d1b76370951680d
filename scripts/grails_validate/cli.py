"""CLI entry point and exit status handling.

Wires together POM reading, the descriptor service and the validator,
and turns validation outcomes into a process exit status.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .build_log import BuildLog
from .descriptor_models import BuildDescriptor
from .errors import ExecutionError, ValidationFailure
from .grails_services import GrailsServices
from .pom_parser import parse_pom
from .validator import validate

EXIT_VALIDATION_FAILURE = 1
EXIT_EXECUTION_ERROR = 2


def load_build_descriptor(
    project_path: Path,
    artifact_id: Optional[str] = None,
    packaging: Optional[str] = None,
    version: Optional[str] = None,
) -> BuildDescriptor:
    """Build the descriptor from ``project_path/pom.xml`` and explicit overrides.

    The POM is only read when at least one value is not overridden, so a
    project without a ``pom.xml`` can still be checked by passing all three.

    Raises:
        ExecutionError: If the POM is needed but missing or unreadable.
    """
    if artifact_id is not None and packaging is not None and version is not None:
        return BuildDescriptor(artifact_id=artifact_id, packaging=packaging, version=version)

    pom = parse_pom(project_path / "pom.xml")
    return BuildDescriptor(
        artifact_id=artifact_id if artifact_id is not None else pom.artifact_id,
        packaging=packaging if packaging is not None else pom.packaging,
        version=version if version is not None else pom.version,
    )


def run(
    project_path: Path,
    artifact_id: Optional[str] = None,
    packaging: Optional[str] = None,
    version: Optional[str] = None,
    log=None,
) -> int:
    """Validate the project at ``project_path`` and return the exit status.

    Returns:
        0 when the descriptors are consistent (or there is nothing to check),
        1 on a validation failure, 2 when a descriptor cannot be read or written.
    """
    log = log or BuildLog()
    try:
        build = load_build_descriptor(project_path, artifact_id, packaging, version)
        validate(build, GrailsServices(project_path), log, project_path)
    except ValidationFailure as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_VALIDATION_FAILURE
    except ExecutionError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_EXECUTION_ERROR
    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Validate consistency between Grails (application.properties or "
                    "plugin descriptor) and Maven (pom.xml) settings"
    )
    parser.add_argument("project", type=Path, nargs="?", default=Path("."),
                        help="Path to the Grails project root (default: current directory)")
    parser.add_argument("--artifact-id", default=None, help="Override the artifactId read from pom.xml")
    parser.add_argument("--packaging", default=None, help="Override the packaging read from pom.xml")
    parser.add_argument("--version", dest="version", default=None,
                        help="Override the version read from pom.xml")
    return parser.parse_args(argv)


def main(argv=None):
    """CLI entry point. Parses arguments and delegates to ``run()``."""
    args = parse_args(argv)
    sys.exit(run(args.project, args.artifact_id, args.packaging, args.version))
