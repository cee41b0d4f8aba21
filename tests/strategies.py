"""Shared hypothesis strategies for formatr property-based testing.

Provides reusable strategies that generate template inputs at three levels:

- **Text**: Plain text and escaped braces
- **Placeholders**: Valid paths and filter chains from the built-in registry
- **Fuzz**: Arbitrary strings that stress the parser

Individual test modules compose them into property-specific strategies.
"""

from __future__ import annotations

from hypothesis import strategies as st

# ---------------------------------------------------------------------------
# Text strategies
# ---------------------------------------------------------------------------

# Plain text that contains no braces
plain_text = st.text(
    alphabet=st.characters(
        blacklist_categories=("Cs",),  # no surrogates
        blacklist_characters="{}",
    ),
    min_size=1,
    max_size=200,
)

# Text mixing plain runs with {{ and }} escapes, paired with its rendering
escaped_text = st.lists(
    st.one_of(
        plain_text.map(lambda s: (s, s)),
        st.just(("{{", "{")),
        st.just(("}}", "}")),
    ),
    min_size=1,
    max_size=8,
).map(lambda pairs: ("".join(src for src, _ in pairs), "".join(out for _, out in pairs)))

# ---------------------------------------------------------------------------
# Placeholder strategies
# ---------------------------------------------------------------------------

identifier = st.from_regex(r"[A-Za-z_][A-Za-z0-9_]{0,10}", fullmatch=True)

path = st.lists(identifier, min_size=1, max_size=4).map(tuple)

# Filters that take no arguments and accept any value
unary_filter = st.sampled_from(["upper", "lower", "trim"])

filter_chain = st.lists(unary_filter, min_size=0, max_size=3)

placeholder = st.tuples(path, filter_chain).map(
    lambda pf: "{" + ".".join(pf[0]) + "".join(f"|{name}" for name in pf[1]) + "}"
)

# Well-formed templates: plain text interleaved with placeholders
template_source = st.lists(
    st.one_of(plain_text, placeholder),
    min_size=1,
    max_size=6,
).map("".join)

# Flat contexts with scalar values
scalar = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-10**6, max_value=10**6),
    st.text(max_size=20),
)
context = st.dictionaries(identifier, scalar, max_size=8)

# ---------------------------------------------------------------------------
# Fuzz strategies
# ---------------------------------------------------------------------------

# Arbitrary input biased toward template syntax characters
arbitrary_template_source = st.text(
    alphabet=st.one_of(
        st.sampled_from(list("{}|:,.>\\'\" ")),
        st.characters(blacklist_categories=("Cs",)),
    ),
    min_size=0,
    max_size=120,
)
