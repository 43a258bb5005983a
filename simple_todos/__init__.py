"""
Simple Todos - a single-user task list with local persistence.

Presentation layers build an AppContext with create_app_context() and drive
its TaskStore; the ViewProjector keeps the filtered list current.
"""

__version__ = "1.0.0"
