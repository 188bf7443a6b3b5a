import collections
import logging
import os
import shlex

from qmake_project.errors import CommandParseError

logger = logging.getLogger(__name__)

ParsedCommand = collections.namedtuple(
    "ParsedCommand", ["qmake", "output_file", "project_files", "args"]
)


def split_command(command, windows=None):
    """Splits a command line into a list of arguments as qmake's main() would receive."""
    if windows is None:
        windows = os.name == "nt"
    if windows:
        # The command lines qmake writes are simple enough that sh rules work
        # for cmd too, except that \ has no special meaning there.
        command = command.replace("\\", "\\\\")
    try:
        return shlex.split(command)
    except ValueError as e:
        raise CommandParseError("command (%s) could not be split: %s" % (command, e), command=command)


class QmakeCommandParser(object):
    """Parses a qmake command line, as written into a Makefile by qmake itself.

    Known options are kept verbatim in `args`, except `-o`, whose value is the
    output makefile. The remaining arguments are sorted the way qmake's
    option.cpp sorts them: assignments, unknown options, or .pro files.
    """

    flags = {
        "project",
        "makefile",
        "Wnone",
        "Wall",
        "Wparser",
        "Wlogic",
        "Wdeprecated",
        "d",
        "help",
        "v",
        "after",
        "norecursive",
        "recursive",
        "nocache",
        "nodepend",
        "nomoc",
        "nopwd",
        "macx",
        "unix",
        "win32",
    }
    options_with_value = {"unset", "query", "cache", "spec", "t", "tp"}
    output_option = "o"

    def __init__(self, windows=None):
        self.windows = windows

    def _option_name(self, arg):
        if arg.startswith("--"):
            name = arg[2:]
        elif arg.startswith("-"):
            name = arg[1:]
        else:
            return None, None
        if "=" in name:
            name, value = name.split("=", 1)
            return name, value
        return name, None

    def parse(self, command):
        words = split_command(command, windows=self.windows)
        if not words:
            raise CommandParseError("command (%s) is empty" % command, command=command)

        # The first element is the qmake binary itself
        qmake = words[0]
        output_file = None
        project_files = []
        args = []

        def fail(reason):
            raise CommandParseError(
                "command (%s) could not be parsed: %s" % (command, reason), command=command
            )

        words = iter(words[1:])
        options_done = False
        for arg in words:
            if not options_done and arg == "--":
                options_done = True
                continue

            name, inline_value = (None, None) if options_done else self._option_name(arg)

            if name in self.flags:
                if inline_value is not None:
                    fail("option -%s does not take an argument" % name)
                args.append("-" + name)
                continue

            if name in self.options_with_value or name == self.output_option:
                value = inline_value
                if value is None:
                    value = next(words, None)
                    if value is None:
                        fail("option -%s requires an argument" % name)
                if name == self.output_option:
                    output_file = value
                else:
                    args.extend(["-" + name, value])
                continue

            if "=" in arg:
                # user variable assignment
                args.append(arg)
            elif arg.startswith("-") and not options_done:
                # Probably a qmake option added after this code was written.
                # It may need special handling; keep going, but say so.
                logger.warning("in (%s), the meaning of %s is unknown" % (command, arg))
                args.append(arg)
            else:
                project_files.append(arg)

        return ParsedCommand(qmake, output_file, project_files, args)


__all__ = ["ParsedCommand", "QmakeCommandParser", "split_command"]
