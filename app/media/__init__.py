"""
Media app for the gallery, uploads, and collections.

This app provides:
- MediaItem / Collection records kept in an external document store
- Uploads to an external media host, one file at a time
- Collection filtering with derived per-collection counts
- Moves by context action or drag-and-drop, and confirmed deletes
"""
