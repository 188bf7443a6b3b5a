import contextlib
import glob
import logging
import os
import tempfile

from qmake_project import process
from qmake_project.constants import SAFE_NAMESPACE
from qmake_project.errors import InvocationError
from qmake_project.rewriter import write_modified_project

logger = logging.getLogger(__name__)


def _remove(paths):
    for path in paths:
        try:
            if os.path.exists(path):
                os.remove(path)
                logger.debug("Removed %s" % path)
        except OSError as e:
            logger.warning("failed to remove %s: %s" % (path, e))


@contextlib.contextmanager
def temporary_artifacts(project_file, build_file):
    """Yields (temp_pro, temp_build_file, features_dir), all removed on exit.

    The temporary .pro and Makefile must sit beside the real ones, since
    that affects qmake's behavior (e.g. values of $$PWD, $$_PRO_FILE_PWD_).
    """
    created = []
    # qmake may silently create other makefiles next to ours
    # (e.g. Debug, Release makefiles), so those go too.
    family = []
    try:
        with tempfile.TemporaryDirectory(prefix=SAFE_NAMESPACE + "_") as features_dir:
            try:
                fd, temp_build = tempfile.mkstemp(
                    prefix=SAFE_NAMESPACE + "_Makefile.", dir=os.path.dirname(build_file)
                )
                os.close(fd)
                created.append(temp_build)
                family.append(glob.escape(temp_build) + ".*")
                fd, temp_pro = tempfile.mkstemp(
                    prefix=SAFE_NAMESPACE + "_", suffix=".pro", dir=os.path.dirname(project_file)
                )
                os.close(fd)
                created.append(temp_pro)
            except OSError as e:
                raise InvocationError("could not create temporary files: %s" % e)
            yield temp_pro, temp_build, features_dir
    finally:
        for pattern in family:
            created.extend(glob.glob(pattern))
        _remove(created)


def initial_target(project_file):
    """Default value of TARGET, which qmake derives from the .pro file name."""
    target = os.path.basename(project_file).split(".", 1)[0]
    # needs quoting in the shell and again for qmake
    if " " in target:
        target = '"%s"' % target
    return target


def features_env(features_dir, environ=None):
    env = dict(os.environ if environ is None else environ)
    if env.get("QMAKEFEATURES"):
        env["QMAKEFEATURES"] = features_dir + os.pathsep + env["QMAKEFEATURES"]
    else:
        env["QMAKEFEATURES"] = features_dir
    return env


def run_qmake(resolved, requests):
    """Runs qmake over a rewritten copy of the project; returns its output."""
    with temporary_artifacts(resolved.project_file, resolved.build_file) as (
        temp_pro,
        temp_build,
        features_dir,
    ):
        write_modified_project(resolved.project_file, temp_pro, features_dir, requests)

        # We renamed the .pro file, which would change the default TARGET;
        # keep the old one by passing it on the command line.
        command = process.shquote(
            resolved.qmake,
            "-o",
            temp_build,
            "TARGET=%s" % initial_target(resolved.project_file),
            temp_pro,
            *(resolved.args or [])
        )
        return process.check_command(
            command,
            InvocationError,
            cwd=os.path.dirname(temp_build),
            env=features_env(features_dir),
        )


__all__ = ["features_env", "initial_target", "run_qmake", "temporary_artifacts"]
