""" Patch lists.

While the graph is being built, most successor edges are not yet
known. An EdgeList collects these dangling edges, so that they can all
be connected to the same state once it is allocated.
"""

from ..common import InvariantError

EDGE = "edge"
ALT = "alt"


class Slot:
    """ The writable successor field of a state. """

    __slots__ = ["state", "field", "next"]

    def __init__(self, state, field):
        if field not in (EDGE, ALT):
            raise ValueError("Invalid slot field {}".format(field))
        if field == ALT and not state.opcode.is_branch:
            raise InvariantError(
                "{} state has no alt edge".format(state.opcode.name)
            )
        self.state = state
        self.field = field
        self.next = None

    def set(self, target):
        """ Connect this slot to the target state """
        if getattr(self.state, self.field) is not None:
            raise InvariantError("{} of {} already patched".format(
                self.field, self.state))
        setattr(self.state, self.field, target)

    def __repr__(self):
        return "Slot({}.{})".format(self.state, self.field)


class EdgeList:
    """ A linked list of slots which still wait for a successor.

    Patching or appending consumes the list, it cannot be used
    afterwards.
    """

    __slots__ = ["head", "tail", "consumed"]

    def __init__(self, head=None, tail=None):
        self.head = head
        self.tail = tail
        self.consumed = False

    @classmethod
    def single(cls, state, field=EDGE):
        """ Create a list holding a single slot """
        slot = Slot(state, field)
        return cls(slot, slot)

    def __iter__(self):
        slot = self.head
        while slot is not None:
            yield slot
            slot = slot.next

    def __len__(self):
        return sum(1 for _ in self)

    def __repr__(self):
        return "EdgeList({})".format(", ".join(map(repr, self)))

    def _consume(self):
        if self.consumed:
            raise InvariantError("Edge list is already used")
        self.consumed = True

    def patch(self, target):
        """ Connect every slot in this list to target """
        self._consume()
        for slot in self:
            slot.set(target)

    def append(self, other):
        """ Create a list with the slots of this list followed by other """
        if self is other:
            raise InvariantError("Cannot append edge list to itself")
        self._consume()
        other._consume()
        if self.head is None:
            return EdgeList(other.head, other.tail)
        if other.head is not None:
            self.tail.next = other.head
            return EdgeList(self.head, other.tail)
        return EdgeList(self.head, self.tail)
