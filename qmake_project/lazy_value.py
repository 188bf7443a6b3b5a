import functools
import numbers
import re

NUMBER_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")

_PENDING = object()


def to_number(value):
    """Numeric form of a qmake value: its leading number, or 0."""
    if value is None:
        return 0
    if isinstance(value, numbers.Number):
        return value
    match = NUMBER_RE.match(str(value))
    if not match:
        return 0
    text = match.group(1)
    if re.match(r"^[-+]?\d+$", text):
        return int(text)
    return float(text)


def to_bool(value):
    # qmake tests print "0" for false
    return value is not None and value != "" and value != "0"


def _cmp(a, b):
    return (a > b) - (a < b)


@functools.total_ordering
class LazyValue(object):
    """A qmake variable or test, evaluated on first use.

    Creating one only queues the request on the project. The first call to
    one of the as_*() accessors (or str(), int(), bool(), comparison...)
    runs qmake for everything queued so far, and the result is then kept by
    this handle.
    """

    def __init__(self, project, kind, name):
        self.project = project
        self.kind = kind
        self.name = name
        self._resolved = _PENDING

    @property
    def is_resolved(self):
        return self._resolved is not _PENDING

    def _get(self):
        if self._resolved is _PENDING:
            self.project._resolve()
            self._resolved = self.project._lookup(self.kind, self.name)
        return self._resolved

    def as_list(self):
        """All elements; empty if the value is undefined or evaluation failed."""
        resolved = self._get()
        if resolved is None:
            return []
        if isinstance(resolved, list):
            return list(resolved)
        return [resolved]

    def as_string(self):
        """First element, or None if undefined."""
        resolved = self._get()
        if isinstance(resolved, list):
            return resolved[0] if resolved else None
        return resolved

    def as_number(self):
        return to_number(self.as_string())

    def as_bool(self):
        return to_bool(self.as_string())

    def compare(self, other):
        """String comparison, returning -1, 0 or 1."""
        return _cmp(self.as_string() or "", _string_of(other))

    def compare_numeric(self, other):
        return _cmp(self.as_number(), _number_of(other))

    def __str__(self):
        return self.as_string() or ""

    def __int__(self):
        return int(self.as_number())

    def __float__(self):
        return float(self.as_number())

    def __bool__(self):
        return self.as_bool()

    def __iter__(self):
        return iter(self.as_list())

    def __len__(self):
        return len(self.as_list())

    def __eq__(self, other):
        if isinstance(other, numbers.Number):
            return self.compare_numeric(other) == 0
        if isinstance(other, (str, LazyValue)):
            return self.compare(other) == 0
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, numbers.Number):
            return self.compare_numeric(other) < 0
        if isinstance(other, (str, LazyValue)):
            return self.compare(other) < 0
        return NotImplemented

    # mutable and lazy; equality depends on the other operand
    __hash__ = None

    def __repr__(self):
        if self._resolved is _PENDING:
            return "<LazyValue %s %r (pending)>" % (self.kind.value, self.name)
        return "<LazyValue %s %r = %r>" % (self.kind.value, self.name, self._resolved)


def _string_of(other):
    if isinstance(other, LazyValue):
        return other.as_string() or ""
    return "" if other is None else str(other)


def _number_of(other):
    if isinstance(other, LazyValue):
        return other.as_number()
    return to_number(other)


__all__ = ["LazyValue", "to_bool", "to_number"]
