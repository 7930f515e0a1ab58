"""Translation: external interview data (roster CSV / network JSON) onto codebook keys.

- sources.py: readers for roster CSV and network JSON
- engine.py: resolves entity types and attribute labels via the key resolver
"""
