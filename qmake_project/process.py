import contextlib
import logging
import os
import subprocess

from qmake_project.constants import MAGIC_EXIT_STRING, MAKE_ENV_VARIABLES
from qmake_project.errors import DiscoveryError

logger = logging.getLogger(__name__)


def run_command(command, cwd=None, env=None):
    """Runs a shell command line, returns (output, status).

    stdout and stderr are captured together, in the order they were written.
    """
    logger.debug("Running command '%s' in %s" % (command, cwd or os.getcwd()))
    proc = subprocess.run(
        command,
        shell=True,
        cwd=cwd,
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
    )
    output = proc.stdout.decode("utf-8", errors="replace")
    if proc.returncode != 0:
        logger.debug("Command '%s' exited with status %d" % (command, proc.returncode))
    return output, proc.returncode


def check_command(command, error_class, cwd=None, env=None):
    """Like run_command(), but raises error_class on a nonzero exit status.

    A nonzero status is accepted when the output contains the magic string,
    since that means qmake was stopped on purpose.
    """
    output, status = run_command(command, cwd=cwd, env=env)
    if status != 0 and MAGIC_EXIT_STRING not in output:
        cwd = cwd or os.getcwd()
        raise error_class(
            "command `%s', in directory %s, exited with status %d" % (command, cwd, status),
            command=command,
            cwd=cwd,
            status=status,
            output=output,
        )
    return output


def make_cleaned_env(environ=None):
    """Returns a copy of the environment without make-related variables."""
    env = dict(os.environ if environ is None else environ)
    for name in MAKE_ENV_VARIABLES:
        env.pop(name, None)
    return env


@contextlib.contextmanager
def working_directory(path):
    previous = os.getcwd()
    try:
        os.chdir(path)
    except OSError as e:
        raise DiscoveryError("cannot enter directory %s: %s" % (path, e), cwd=path)
    try:
        yield path
    finally:
        os.chdir(previous)


def shquote(*command):
    """Joins arguments into one command line understood by both sh and cmd.

    ['"Hello", world!', 'nice day'] => '"\\"Hello\\", world!" "nice day"'
    """
    return " ".join('"%s"' % arg.replace('"', '\\"') for arg in command)


__all__ = ["run_command", "check_command", "make_cleaned_env", "working_directory", "shquote"]
