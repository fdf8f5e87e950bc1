""" Compile regular expressions into Thompson NFA graphs implemented in
pure Python.

Example usage:

>>> from lexgraph.regex import compile
>>> graph = compile('ab*')
>>> [state.opcode.name for state in graph]
['RUNE', 'SPLIT', 'RUNE', 'MATCH']

"""

# Define version here. Used in docs, and setup script:
__version_info__ = (0, 1, 0)
__version__ = '.'.join(map(str, __version_info__))
