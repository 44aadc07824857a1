"""Core logic for the Catalog Merger.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- normalize SKUs and join the primary and secondary datasets
- compose unified records (title, description, attributes)
- extract translation batches and re-import translated values
- read uploads and export tables
"""
