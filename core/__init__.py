"""
Wikisocion reference data core.

Static socionics dataset plus the pieces built around it:
- Canonical type, glossary and duality tables
- Intertype relation classifier
- Search index and type filters
- Scrape pipeline that refreshes the exported JSON files
"""

__version__ = "0.1.0"
