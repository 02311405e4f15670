"""Built-in coloring functions, one per module.

Each module exposes ``color(indices, size)``; the module name is the name the
function is selected by.
"""
