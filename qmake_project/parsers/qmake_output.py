import logging
import re

from qmake_project.constants import NAMESPACE
from qmake_project.kind import Kind

logger = logging.getLogger(__name__)


class QmakeOutputParser(object):
    """Decodes the marker lines printed by the injected feature file.

    Only the region between the BEGIN and END markers is looked at, so
    unrelated messages from the project can't confuse us.
    """

    def __init__(self, namespace=NAMESPACE):
        ns = r"\b" + re.escape(namespace)
        self.patterns = {
            "begin": re.compile(ns + r"::BEGIN"),
            "end": re.compile(ns + r"::END"),
            Kind.VARIABLE: re.compile(ns + r"::variable:([^:]+):(.+)\Z"),
            # a test expression may itself contain ':', the result never does
            Kind.TEST: re.compile(ns + r"::test:(.+):([^:]+)\Z"),
        }

    def parse(self, output):
        """Returns {Kind.VARIABLE: {name: [values]}, Kind.TEST: {expr: flag}}."""
        resolved = {Kind.VARIABLE: {}, Kind.TEST: {}}
        parsing = False
        for line in output.split("\n"):
            line = line.rstrip("\r")
            if self.patterns["begin"].search(line):
                parsing = True
                continue
            if self.patterns["end"].search(line):
                if parsing:
                    break
                continue
            if not parsing:
                continue

            match = self.patterns[Kind.VARIABLE].search(line)
            if match:
                resolved[Kind.VARIABLE].setdefault(match.group(1), []).append(match.group(2))
                continue
            match = self.patterns[Kind.TEST].search(line)
            if match:
                resolved[Kind.TEST][match.group(1)] = match.group(2)

        logger.debug(
            "Decoded %d variable(s), %d test(s)"
            % (len(resolved[Kind.VARIABLE]), len(resolved[Kind.TEST]))
        )
        return resolved

    @staticmethod
    def merge(cache, resolved):
        """Merges a parse() result into cache, in place.

        Entries from this run replace earlier ones; entries this run knows
        nothing about are kept.
        """
        for kind, values in resolved.items():
            cache.setdefault(kind, {}).update(values)
        return cache


__all__ = ["QmakeOutputParser"]
