PREFIX = "qmake_project: "


class QMakeProjectError(Exception):
    """Base class of every failure raised by qmake_project."""

    def __init__(self, message):
        if not message.startswith(PREFIX):
            message = PREFIX + message
        super(QMakeProjectError, self).__init__(message)


class ConfigurationError(QMakeProjectError):
    pass


class CommandError(QMakeProjectError):
    """A failure attributable to an external command.

    Carries the command line, the directory it ran in, its exit status and
    everything it printed, whichever of those are known.
    """

    def __init__(self, message, command=None, cwd=None, status=None, output=None):
        self.command = command
        self.cwd = cwd
        self.status = status
        self.output = output
        if output is not None:
            message = "%s, output follows:\n%s" % (message, output)
        super(CommandError, self).__init__(message)


class DiscoveryError(CommandError):
    pass


class CommandParseError(CommandError):
    pass


class ResolutionError(CommandError):
    pass


class InvocationError(CommandError):
    pass


__all__ = [
    "QMakeProjectError",
    "ConfigurationError",
    "CommandError",
    "DiscoveryError",
    "CommandParseError",
    "ResolutionError",
    "InvocationError",
]
