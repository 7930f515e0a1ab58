"""Protocol codebook model.

- model.py: node/edge entity types and their variables, plus ego variables,
  exposed as resolver-ready mappings
"""
