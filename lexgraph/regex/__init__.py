""" Regular expression to NFA compiler.

Compile a pattern into a graph of states using Thompson's construction.
The graph can be executed by a Thompson NFA simulation or a
backtracking engine.

Another good resource on regular expressions:
https://swtch.com/~rsc/regexp/

"""

from ..common import MalformedPattern, InvalidClassSpec
from .instructions import OpCode, State
from .edgelist import EdgeList
from .fragment import Fragment
from .graph import Graph
from .scanner import tokenize
from .compiler import compile, Compiler


__all__ = (
    "compile",
    "Compiler",
    "tokenize",
    "Graph",
    "State",
    "OpCode",
    "EdgeList",
    "Fragment",
    "MalformedPattern",
    "InvalidClassSpec",
)
