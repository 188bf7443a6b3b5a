import collections
import glob
import logging
import os
import re

from qmake_project import process
from qmake_project.constants import DEFAULT_BUILD_FILE
from qmake_project.errors import DiscoveryError, ResolutionError
from qmake_project.parsers.qmake_command import QmakeCommandParser

logger = logging.getLogger(__name__)

# Everything needed to run qmake the way it was (or would be) run for real.
ResolvedFiles = collections.namedtuple(
    "ResolvedFiles", ["qmake", "args", "project_file", "build_file"]
)

QMAKE_LINE_RE = re.compile(r"qmake", re.IGNORECASE)


def discover_qmake_command(make, build_file):
    """Returns the qmake command line (one string) which generates build_file.

    Must be called from the directory containing build_file.
    """
    command = process.shquote(make, "-f", build_file, "-n", "qmake")
    # Don't inherit anything from a calling make (e.g. when run from `make check')
    env = process.make_cleaned_env()
    output = process.check_command(command, DiscoveryError, env=env)

    # the qmake command should be the last non-empty line
    for line in reversed(output.splitlines()):
        line = line.strip()
        if not line:
            continue
        if QMAKE_LINE_RE.search(line):
            logger.debug("Discovered qmake command for %s: %s" % (build_file, line))
            return line

    raise DiscoveryError(
        "could not figure out qmake command used to generate %s (from command `%s')"
        % (build_file, command),
        command=command,
        cwd=os.getcwd(),
        status=0,
        output=output,
    )


def resolve_from_build_file(build_file, make, windows=None):
    build_dir = os.path.dirname(os.path.abspath(build_file))
    with process.working_directory(build_dir):
        command = discover_qmake_command(make, os.path.basename(build_file))
        parsed = QmakeCommandParser(windows=windows).parse(command)

    def fail(reason):
        raise ResolutionError("in (%s), %s" % (command, reason), command=command, cwd=build_dir)

    if not parsed.output_file:
        fail("the output makefile could not be determined")
    if not parsed.project_files:
        fail("the input .pro file could not be determined")
    if len(parsed.project_files) > 1:
        fail("this is an unusual, unsupported qmake command")

    output_file = os.path.join(build_dir, parsed.output_file)
    project_file = os.path.join(os.path.dirname(output_file), parsed.project_files[0])
    return ResolvedFiles(
        parsed.qmake,
        parsed.args,
        os.path.normpath(project_file),
        os.path.normpath(output_file),
    )


def _project_basename(path):
    return os.path.splitext(os.path.basename(path))[0]


def find_project_file(directory):
    """Picks the .pro file of a directory, or raises ResolutionError."""
    candidates = sorted(glob.glob(os.path.join(glob.escape(directory), "*.pro")))
    if len(candidates) == 1:
        return candidates[0]

    dir_name = os.path.basename(os.path.normpath(os.path.abspath(directory)))
    candidates = [c for c in candidates if _project_basename(c).lower() == dir_name.lower()]
    if len(candidates) == 1:
        return candidates[0]

    candidates = [c for c in candidates if _project_basename(c) == dir_name]
    if len(candidates) == 1:
        return candidates[0]

    raise ResolutionError("could not resolve project file in directory %s" % directory)


def resolve_from_project_path(path, qmake):
    """qmake is a callable returning the qmake binary to use."""
    if os.path.isfile(path):
        path = os.path.abspath(path)
        return ResolvedFiles(
            qmake(), [], path, os.path.join(os.path.dirname(path), DEFAULT_BUILD_FILE)
        )

    if os.path.isdir(path):
        directory = os.path.abspath(path)
        project_file = find_project_file(directory)
        logger.debug("Using project file %s from directory %s" % (project_file, directory))
        return ResolvedFiles(
            qmake(), [], project_file, os.path.join(directory, DEFAULT_BUILD_FILE)
        )

    raise ResolutionError("%s is not an existing directory or file" % path)


__all__ = [
    "ResolvedFiles",
    "discover_qmake_command",
    "find_project_file",
    "resolve_from_build_file",
    "resolve_from_project_path",
]
