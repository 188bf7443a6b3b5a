from qmake_project.constants import BEGIN_MARKER, END_MARKER, MAGIC_EXIT_STRING, NAMESPACE
from qmake_project.errors import (
    CommandParseError,
    ConfigurationError,
    DiscoveryError,
    InvocationError,
    QMakeProjectError,
    ResolutionError,
)
from qmake_project.kind import Kind
from qmake_project.lazy_value import LazyValue
from qmake_project.project import Project

__version__ = "0.85"

__all__ = [
    "Project",
    "LazyValue",
    "Kind",
    "QMakeProjectError",
    "ConfigurationError",
    "DiscoveryError",
    "CommandParseError",
    "ResolutionError",
    "InvocationError",
    "NAMESPACE",
    "BEGIN_MARKER",
    "END_MARKER",
    "MAGIC_EXIT_STRING",
]
