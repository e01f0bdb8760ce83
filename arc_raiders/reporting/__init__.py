"""
arc_raiders.reporting — flat-file export of fetched records.

Modules:
  export — JSON (2-space indent) and CSV (dotted columns) writers.
"""
