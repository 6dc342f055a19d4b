"""
stormrank package
=================

Severe-weather impact ranking over the NOAA Storm Database.

- The CLI entry point is in `stormrank/cli.py`.
- Event-type canonicalization (the ordered rule table) is in `stormrank/categories.py`.
- Damage scaling is in `stormrank/damage.py`.
- Grouping and ranking is in `stormrank/engine.py`.
- Dataset loading is in `stormrank/loader.py`.
"""

__version__ = '0.1.0'
