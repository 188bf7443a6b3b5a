import logging
import os
import shutil

from qmake_project.constants import (
    BEGIN_MARKER,
    END_MARKER,
    FEATURE_NAME,
    MAGIC_EXIT_STRING,
    NAMESPACE,
    SAFE_NAMESPACE,
)
from qmake_project.errors import InvocationError
from qmake_project.kind import Kind

logger = logging.getLogger(__name__)

# Scratch variable for the injected code; can't collide with a real one.
SCRATCH = SAFE_NAMESPACE
FOUND = "found_" + SAFE_NAMESPACE

# Most qmake variables are lists, but a few special substitutions
# (e.g. _PRO_FILE_PWD_) are not; for() yields nothing for those, so we
# fall back to printing the plain value.
VARIABLE_TEMPLATE = """
unset({found})
for({scratch},{name}) {{
    message("{ns}::variable:{name}:$${scratch}")
    {found}=1
}}
isEmpty({found}):message("{ns}::variable:{name}:$${name}")
"""

TEST_TEMPLATE = """{scratch}=0
{test}:{scratch}=1
message("{ns}::test:{test}:$${scratch}")
"""


def feature_code(requests):
    """Returns the text of the .prf which prints every requested value, then stops qmake."""
    # Set PWD back to the directory of the real .pro file, hiding that
    # we're evaluated from a temporary copy.
    lines = ['PWD="$$_PRO_FILE_PWD_"\n', 'message("%s")\n' % BEGIN_MARKER]

    for request in requests:
        if request.kind is Kind.VARIABLE:
            lines.append(VARIABLE_TEMPLATE.format(
                found=FOUND, scratch=SCRATCH, name=request.name, ns=NAMESPACE
            ))
    for request in requests:
        if request.kind is Kind.TEST:
            lines.append(TEST_TEMPLATE.format(scratch=SCRATCH, test=request.name, ns=NAMESPACE))

    lines.append("\nunset(%s)\nunset(%s)\n" % (SCRATCH, FOUND))
    lines.append('message("%s")\n' % END_MARKER)
    # Everything we need has been printed; don't waste time writing the Makefile.
    lines.append("error(%s)\n" % MAGIC_EXIT_STRING)
    return "".join(lines)


def write_modified_project(project_file, output_pro, features_dir, requests):
    """Copies project_file to output_pro and makes it load our feature file last.

    Returns the path of the feature file written into features_dir.
    """
    prf_path = os.path.join(features_dir, FEATURE_NAME + ".prf")
    try:
        with open(project_file, "rb") as src, open(output_pro, "wb") as dst:
            shutil.copyfileobj(src, dst)
            # CONFIG features are loaded right-to-left, so going first
            # means being loaded last.
            dst.write(("\n\nCONFIG=%s $$CONFIG\n" % FEATURE_NAME).encode("utf-8"))
        with open(prf_path, "w", encoding="utf-8") as prf:
            prf.write(feature_code(requests))
    except IOError as e:
        raise InvocationError("could not write modified copy of %s: %s" % (project_file, e))

    logger.debug("Wrote %s and %s for %d request(s)" % (output_pro, prf_path, len(requests)))
    return prf_path


__all__ = ["feature_code", "write_modified_project"]
