"""Hypothesis strategies for JSON value property-based testing."""

from hypothesis import strategies as st

# JSON primitive strategy
json_primitive_strategy = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.floats(allow_nan=False, allow_infinity=False),
    st.text(),
)

# JSON value strategy (recursive, bounded depth)
json_value_strategy = st.recursive(
    json_primitive_strategy,
    lambda children: st.one_of(
        st.lists(children, max_size=5),
        st.dictionaries(st.text(max_size=20), children, max_size=5),
    ),
    max_leaves=50,
)

# JSON object strategy
json_object_strategy = st.dictionaries(
    st.text(max_size=20),
    json_value_strategy,
    max_size=10,
)

# Lists of record lists sharing a small id space so duplicates are common
record_strategy = st.fixed_dictionaries(
    {"id": st.integers(min_value=0, max_value=5)},
    optional={"n": st.text(max_size=5)},
)
record_lists_strategy = st.lists(st.lists(record_strategy, max_size=5), max_size=5)
