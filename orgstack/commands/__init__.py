"""
Commands Package.

This package contains the command classes implementing the Command pattern
for undo/redo functionality. Commands encapsulate load, create, update and
delete actions on collections of units.
"""
