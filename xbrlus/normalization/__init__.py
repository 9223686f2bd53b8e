"""
normalization package — Turning XBRL US XML responses into DataFrames.

Submodules:
    - document: parsed XML response (ordered, repeatable named nodes).
    - expander: multi-value parameter join / fan-out.
    - flattener: document nodes to flat records.
    - harmonizer: union-of-columns merge into a DataFrame.
    - coercion: numeric and date columns for facts.
"""
