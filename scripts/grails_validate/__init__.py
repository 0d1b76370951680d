"""Grails/Maven descriptor consistency validation package."""

from .cli import main, run
from .descriptor_models import ApplicationDescriptor, BuildDescriptor, PluginDescriptor
from .errors import DescriptorNotFoundError, ExecutionError, ValidationFailure
from .validator import validate

__all__ = [
    "main", "run", "validate",
    "BuildDescriptor", "ApplicationDescriptor", "PluginDescriptor",
    "ExecutionError", "DescriptorNotFoundError", "ValidationFailure",
]
