from .reducer import CONCAT, GCD, MAX, MIN, REDUCERS, SUM, Reducer, ValueReducer, make_reducer
from .segment_tree import (
    InvalidRangeError,
    MaxTree,
    MinTree,
    OutOfRangeError,
    SegmentTree,
    SegmentTreeError,
    SumTree,
    get_mid,
)
