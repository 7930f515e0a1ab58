"""Key resolver package.

Translates external data variable labels (CSV/JSON column names) into codebook
keys: direct key hits, exact names, `_x`/`_y` location axes and `name_option`
categorical encodings. Pure-python, deterministic. See `interviewer/keys/core.py`.
"""
