import re

# Namespace for every line we make qmake print. Must never look like
# something a real project would message().
NAMESPACE = "qmake_project.Project"

# Same namespace, usable as a qmake variable or file name.
SAFE_NAMESPACE = re.sub(r"[^a-zA-Z0-9]", "_", NAMESPACE)

BEGIN_MARKER = NAMESPACE + "::BEGIN"
END_MARKER = NAMESPACE + "::END"

# Magic string denoting we've deliberately exited qmake early
MAGIC_EXIT_STRING = NAMESPACE + ":EXITING"

FEATURE_NAME = "_" + SAFE_NAMESPACE + "_magic"

DEFAULT_BUILD_FILE = "Makefile"

QMAKE_CANDIDATES = ("qmake", "qmake-qt5", "qmake-qt4")

# make variables which would leak the state of a calling make into ours
MAKE_ENV_VARIABLES = ("MAKEFLAGS", "MAKELEVEL", "MFLAGS")

__all__ = [
    "NAMESPACE",
    "SAFE_NAMESPACE",
    "BEGIN_MARKER",
    "END_MARKER",
    "MAGIC_EXIT_STRING",
    "FEATURE_NAME",
    "DEFAULT_BUILD_FILE",
    "QMAKE_CANDIDATES",
    "MAKE_ENV_VARIABLES",
]
