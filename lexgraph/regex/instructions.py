""" Byte code of the compiled regular expression graph.

Every node in the graph is a State. The opcode of a state determines
how an execution engine treats the state:

- RUNE, CLASS and ANY consume a single code point and continue at
  the primary edge.
- CAPTURE records the current input position in a capture slot and
  continues at the primary edge without consuming input.
- SPLIT continues at both edges without consuming input. The primary
  edge has priority over the alt edge.
- SPLIT_TO_MATCH is a SPLIT whose alt edge goes straight to the MATCH
  state.
- MATCH accepts the input consumed so far.

"""

import enum
from ..common import InvariantError


class OpCode(enum.Enum):
    """ The kind of a graph node """
    FAIL = 0
    RUNE = 1
    CLASS = 2
    ANY = 3
    CAPTURE = 4
    SPLIT = 5
    SPLIT_TO_MATCH = 6
    MATCH = 7

    @property
    def is_branch(self):
        """ Test if states with this opcode have an alt edge """
        return self in (OpCode.SPLIT, OpCode.SPLIT_TO_MATCH)


class State:
    """ A single node in the graph.

    The edge attribute holds the primary successor, alt the second
    successor of a branching state. Successors which are not yet known
    are None until the compiler patches them.
    """

    __slots__ = ["opcode", "edge", "alt", "payload", "id"]

    def __init__(self, opcode, edge=None, alt=None, payload=None, id=0):
        if not isinstance(opcode, OpCode):
            raise TypeError("Expected OpCode but got {}".format(type(opcode)))
        if alt is not None and not opcode.is_branch:
            raise InvariantError(
                "{} state cannot have an alt edge".format(opcode.name)
            )
        self.opcode = opcode
        self.edge = edge
        self.alt = alt
        self.payload = payload
        self.id = id

    def successors(self):
        """ Get the successors of this state, primary edge first """
        return [s for s in (self.edge, self.alt) if s is not None]

    def __repr__(self):
        if self.opcode is OpCode.RUNE:
            return "State({}, {!r})".format(self.id, chr(self.payload))
        elif self.payload is not None:
            return "State({}, {} {})".format(
                self.id, self.opcode.name, self.payload
            )
        else:
            return "State({}, {})".format(self.id, self.opcode.name)
