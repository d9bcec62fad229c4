"""
Core package for the shop-floor dashboard application.

Submodules provide CSV snapshot loading, row classification, facet building,
and user interface rendering helpers that are orchestrated by the top-level
`app.py`.
"""
