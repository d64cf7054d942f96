"""
App Package.

Holds the CommandStack that owns state and undo/redo history.
"""
