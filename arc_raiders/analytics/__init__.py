"""
arc_raiders.analytics — descriptive statistics over fetched records.

Modules:
  stats — calculate_stats, weapon/armor stats, rarity distribution, best-of pickers.
"""
