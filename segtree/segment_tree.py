import operator

from segtree.reducer import MAX, MIN, SUM


class SegmentTreeError(Exception):
    """
    Base class for segment tree errors.
    """


class InvalidRangeError(SegmentTreeError, ValueError):
    """
    A partition [start, end] with start > end was met while building.
    """


class OutOfRangeError(SegmentTreeError, IndexError):
    """
    An index or range lies outside [0, element_count).
    """


def get_mid(start, end):
    return start + (end - start) // 2


def _check_index(idx, name):
    try:
        return operator.index(idx)
    except TypeError:
        raise TypeError(f"{name} must be an integer, got {type(idx).__name__}.") from None


class SegmentTree:
    """
    Segment tree over a fixed number of elements.

    https://en.wikipedia.org/wiki/Segment_tree

    The tree is stored as a flat list in which node `i` has its children at
    `2i + 1` and `2i + 2`. The list is padded up to a complete binary tree and
    unused slots hold `reducer.identity()`.

    Parameters
    ----------
    values: iterable
        Initial elements. Must not be empty.
    reducer: object
        Anything exposing `reduce(a, b)`, an associative operation, and
        `identity()`, its neutral element. See `segtree.reducer`.
    """

    def __init__(
        self,
        values,
        reducer,
    ):
        values = list(values)
        self._reducer = reducer
        self._n = len(values)
        if self._n == 0:
            raise InvalidRangeError("Cannot build a segment tree from an empty sequence.")

        # (n - 1).bit_length() == ceil(log2(n)) for n >= 1.
        height = (self._n - 1).bit_length()
        self._storage = [reducer.identity() for _ in range(2 * 2 ** height - 1)]
        self._build(values, 0, 0, self._n - 1)

    @classmethod
    def build(cls, values, reducer):
        return cls(values, reducer)

    def _build(self, values, i, start, end):
        if start > end:
            raise InvalidRangeError(f"Start index {start} is larger than end index {end}.")

        if start == end:
            self._storage[i] = values[start]
            return

        mid = get_mid(start, end)
        self._build(values, 2 * i + 1, start, mid)
        self._build(values, 2 * i + 2, mid + 1, end)
        self._storage[i] = self._reducer.reduce(self._storage[2 * i + 1], self._storage[2 * i + 2])

    def _query(self, i, start, end, from_, to):
        # Fully covered.
        if from_ <= start and end <= to:
            return self._storage[i]

        # Disjoint.
        if end < from_ or start > to:
            return self._reducer.identity()

        mid = get_mid(start, end)
        left = self._query(2 * i + 1, start, mid, from_, to)
        right = self._query(2 * i + 2, mid + 1, end, from_, to)
        return self._reducer.reduce(left, right)

    def query(self, from_, to):
        """Returns reduce(arr[from_], ..., arr[to]), both bounds inclusive."""
        from_ = _check_index(from_, "from_")
        to = _check_index(to, "to")
        if not 0 <= from_ < self._n:
            raise OutOfRangeError(f"from_={from_} is out of range for {self._n} elements.")
        if not 0 <= to < self._n:
            raise OutOfRangeError(f"to={to} is out of range for {self._n} elements.")
        if from_ > to:
            raise OutOfRangeError(f"from_={from_} cannot be greater than to={to}.")
        return self._query(0, 0, self._n - 1, from_, to)

    def _update(self, i, start, end, idx, value):
        if idx < start or idx > end:
            return

        if start == end:
            self._storage[i] = value
            return

        mid = get_mid(start, end)
        if idx <= mid:
            self._update(2 * i + 1, start, mid, idx, value)
        else:
            self._update(2 * i + 2, mid + 1, end, idx, value)
        self._storage[i] = self._reducer.reduce(self._storage[2 * i + 1], self._storage[2 * i + 2])

    def update(self, idx, value):
        """
        Replace the element at `idx` and recompute its ancestors.
        """
        idx = _check_index(idx, "idx")
        if not 0 <= idx < self._n:
            raise OutOfRangeError(f"idx={idx} is out of range for {self._n} elements.")
        self._update(0, 0, self._n - 1, idx, value)

    def reduce(self, start=0, end=None):
        """
        Returns result of applying the reducer to a contiguous subsequence,
        with `end` excluded like a Python slice.

        Parameters
        ----------
        start: int
            beginning of the subsequence
        end: int or None
            end of the subsequence, `None` for the number of elements
        """
        if end is None:
            end = self._n
        return self.query(start, _check_index(end, "end") - 1)

    @property
    def storage(self):
        return tuple(self._storage)

    @property
    def element_count(self):
        return self._n

    @property
    def reducer(self):
        return self._reducer

    def __len__(self):
        return self._n

    def __getitem__(self, idx):
        return self.query(idx, idx)

    def __setitem__(self, idx, value):
        self.update(idx, value)

    def __repr__(self):
        return f"{type(self).__name__}(element_count={self._n}, reducer={self._reducer!r})"


class SumTree(SegmentTree):
    """
    Sum tree.
    """

    def __init__(self, values):
        super().__init__(values, SUM)

    def sum(self, start=0, end=None):
        return self.reduce(start, end)

    def find_prefixsum_idx(self, prefixsum):
        """
        Find the highest index `i` such that arr[0] + ... + arr[i - 1] <= prefixsum.

        If the elements are non-negative weights, feeding a uniform sample from
        [0, total) draws an index proportionally to its weight.
        """
        if not 0 <= prefixsum <= self._storage[0] + 1e-5:
            raise OutOfRangeError(f"prefixsum={prefixsum} is outside [0, {self._storage[0]}].")

        # Traverse to the leaf.
        i, start, end = 0, 0, self._n - 1
        while start < end:
            mid = get_mid(start, end)
            left = 2 * i + 1
            if self._storage[left] > prefixsum:
                i, end = left, mid
            else:
                prefixsum -= self._storage[left]
                i, start = left + 1, mid + 1
        return start


class MinTree(SegmentTree):
    """
    Min tree.
    """

    def __init__(self, values):
        super().__init__(values, MIN)

    def min(self, start=0, end=None):
        return self.reduce(start, end)


class MaxTree(SegmentTree):
    """
    Max tree.
    """

    def __init__(self, values):
        super().__init__(values, MAX)

    def max(self, start=0, end=None):
        return self.reduce(start, end)
