"""Exceptions raised while validating descriptors."""


class GrailsValidateError(Exception):
    """Base class for every error this package raises."""


class ExecutionError(GrailsValidateError):
    """A descriptor could not be read or written. Aborts the build."""


class DescriptorNotFoundError(ExecutionError):
    """The descriptor file does not exist."""


class ValidationFailure(GrailsValidateError):
    """The Maven and Grails descriptors disagree."""
