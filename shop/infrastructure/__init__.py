"""Infrastructure layer.

Configuration, logging, database wiring and file storage.
"""
