#!/usr/bin/env python3
"""Validate consistency between Grails and Maven settings.

Checks that a Grails project built with Maven declares the same name and
version in pom.xml as in its Grails descriptor:

    - applications: app.name / app.version in application.properties
    - plugins (packaging grails-plugin): the *GrailsPlugin.groovy descriptor,
      whose artifactId must be ``grails-<plugin name>``

Usage:
    python validate_descriptors.py [<path-to-grails-project>]
        [--artifact-id ID] [--packaging TYPE] [--version VERSION]

Exits 0 when consistent, 1 on a mismatch, 2 when a descriptor cannot be read.
"""

from grails_validate.cli import main

if __name__ == "__main__":
    main()
