import math
import operator


class Reducer:
    """
    Associative operation together with its identity value.
    """

    def __init__(
        self,
        op,
        identity,
    ):
        self._op = op
        self._identity = identity

    def reduce(self, a, b):
        return self._op(a, b)

    def identity(self):
        return self._identity

    def __repr__(self):
        name = getattr(self._op, "__name__", repr(self._op))
        return f"Reducer(op={name}, identity={self._identity!r})"


class ValueReducer:
    """
    Reducer for value types which carry their own combine operation.

    Instances of `value_type` must implement `reduce(other)`. The identity is taken
    from `value_type.identity()` if present, otherwise `value_type()` is used.
    """

    def __init__(self, value_type):
        self.value_type = value_type

    def reduce(self, a, b):
        return a.reduce(b)

    def identity(self):
        identity = getattr(self.value_type, "identity", None)
        if callable(identity):
            return identity()
        return self.value_type()

    def __repr__(self):
        return f"ValueReducer({self.value_type.__name__})"


SUM = Reducer(operator.add, 0)
MIN = Reducer(min, float("inf"))
MAX = Reducer(max, float("-inf"))
GCD = Reducer(math.gcd, 0)
CONCAT = Reducer(operator.add, "")

REDUCERS = {
    "sum": SUM,
    "min": MIN,
    "max": MAX,
    "gcd": GCD,
    "concat": CONCAT,
}


def make_reducer(name):
    """
    Look up a stock reducer by name.
    """
    try:
        return REDUCERS[name]
    except KeyError:
        raise KeyError(f"Unknown reducer {name!r}, choose from {sorted(REDUCERS)}.") from None
