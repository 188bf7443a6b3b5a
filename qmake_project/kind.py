import collections
import enum


class Kind(enum.Enum):
    VARIABLE = "variable"
    TEST = "test"


Request = collections.namedtuple("Request", ["kind", "name"])

__all__ = ["Kind", "Request"]
