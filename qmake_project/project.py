import logging
import os
import re
import shutil

from qmake_project import discovery, invoker
from qmake_project.constants import QMAKE_CANDIDATES
from qmake_project.errors import ConfigurationError, QMakeProjectError
from qmake_project.kind import Kind, Request
from qmake_project.lazy_value import LazyValue
from qmake_project.parsers.qmake_output import QmakeOutputParser

logger = logging.getLogger(__name__)

PROJECT_FILE_RE = re.compile(r"\.pr.$", re.IGNORECASE)


def default_make():
    """make command suited to the platform."""
    if os.name == "nt":
        return "nmake"
    return "make"


class Project(object):
    """Gives access to qmake variables and tests (scopes) of a qmake project.

    qmake is the only thing able to parse qmake, so nothing is parsed here:
    requested values are printed by qmake itself, running over a modified
    copy of the project, and read back from its output.

    Running qmake is slow, so values() and test() only queue the request and
    return a LazyValue. qmake runs once, for all queued requests, when one of
    those values is first used.

        project = Project("test.pro")
        target = project.values("TARGET")
        testcase = project.test("testcase")
        if testcase:  # qmake runs here, resolving both
            run(str(target))
    """

    def __init__(self, path=None):
        self._build_file = None
        self._project_file = None
        self._make = default_make()
        self._qmake = None
        self._found_qmake = None
        self._die_on_error = True
        self._pending = {}
        self._resolved = {}
        # number of times qmake has been run
        self.oracle_run_count = 0

        if path:
            if os.path.isdir(path) or PROJECT_FILE_RE.search(path):
                self.set_project_file(path)
            else:
                self.set_build_file(path)

    def _reset(self):
        self._pending = {}
        self._resolved = {}

    def build_file(self):
        return self._build_file

    def set_build_file(self, build_file):
        self._build_file = build_file
        self._project_file = None
        self._reset()

    def project_file(self):
        return self._project_file

    def set_project_file(self, project_file):
        self._project_file = project_file
        self._build_file = None
        self._reset()

    def make(self):
        return self._make

    def set_make(self, make):
        self._make = make

    def qmake(self):
        """The qmake explicitly set with set_qmake(), if any."""
        return self._qmake

    def set_qmake(self, qmake):
        self._qmake = qmake

    def die_on_error(self):
        return self._die_on_error

    def set_die_on_error(self, value):
        self._die_on_error = bool(value)

    def _find_qmake(self):
        if not self._found_qmake:
            for candidate in QMAKE_CANDIDATES:
                found = shutil.which(candidate)
                if found:
                    self._found_qmake = found
                    break
        return self._found_qmake

    def _qmake_binary(self):
        qmake = self._qmake or self._find_qmake()
        if not qmake:
            raise ConfigurationError(
                "no qmake set, and none of (%s) found in PATH" % ", ".join(QMAKE_CANDIDATES)
            )
        return qmake

    def values(self, name):
        """Returns a LazyValue for the qmake variable `name`."""
        return self._request(Kind.VARIABLE, name)

    def test(self, expression):
        """Returns a LazyValue for a qmake test; anything usable as a qmake scope."""
        return self._request(Kind.TEST, expression)

    def _request(self, kind, name):
        self._pending[Request(kind, name)] = None
        return LazyValue(self, kind, name)

    def resolve(self):
        """Runs qmake now for all queued requests; returns a copy of everything resolved."""
        self._resolve()
        return {kind: dict(values) for kind, values in self._resolved.items()}

    def _lookup(self, kind, name):
        return self._resolved.get(kind, {}).get(name)

    def _resolve(self):
        try:
            self._resolve_impl()
        except QMakeProjectError as e:
            if self._die_on_error:
                raise
            logger.warning("%s" % e)

    def _resolve_files(self):
        if self._build_file:
            resolved = discovery.resolve_from_build_file(self._build_file, self._make)
            if self._qmake:
                resolved = resolved._replace(qmake=self._qmake)
            return resolved
        if not self._project_file:
            raise ConfigurationError("no makefile or project file set")
        return discovery.resolve_from_project_path(self._project_file, self._qmake_binary)

    def _resolve_impl(self):
        requests = list(self._pending)
        self._pending = {}
        if not requests:
            return self._resolved

        resolved_files = self._resolve_files()
        output = invoker.run_qmake(resolved_files, requests)
        self.oracle_run_count += 1

        QmakeOutputParser.merge(self._resolved, QmakeOutputParser().parse(output))
        return self._resolved


__all__ = ["Project", "default_make"]
