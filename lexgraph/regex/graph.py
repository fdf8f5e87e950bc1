""" The compiled regular expression graph. """

from ..common import InvariantError
from ..utils.runeset import RuneSet
from .instructions import OpCode


def dfs(start_state):
    """ Visit states in depth-first-search order, primary edge first. """
    visited = set()
    worklist = [start_state]
    while worklist:
        state = worklist.pop()
        if state not in visited:
            visited.add(state)
            yield state
            if state.alt is not None:
                worklist.append(state.alt)
            if state.edge is not None:
                worklist.append(state.edge)


class Graph:
    """ A fully connected NFA.

    The graph owns all states reachable from the entry state. It is
    not modified after the compiler returns it, so it can be shared by
    any number of execution engines.
    """

    def __init__(self, entry, ngroups=0, max_depth=0):
        self._entry = entry
        self.ngroups = ngroups
        self.max_depth = max_depth
        self.states = tuple(dfs(entry))
        self._numbers = {s: n for n, s in enumerate(self.states)}

    @property
    def entry(self):
        """ The state where execution starts """
        return self._entry

    @property
    def match(self):
        """ The single MATCH state of this graph """
        matches = [s for s in self.states if s.opcode is OpCode.MATCH]
        if len(matches) != 1:
            raise InvariantError(
                "Expected one match state, found {}".format(len(matches))
            )
        return matches[0]

    def __iter__(self):
        return iter(self.states)

    def __len__(self):
        return len(self.states)

    def __repr__(self):
        return "Graph({} states, {} groups)".format(
            len(self.states), self.ngroups
        )

    def number(self, state):
        """ Get the position of a state in traversal order """
        return self._numbers[state]

    def verify(self):
        """ Check that the graph is completely connected.

        Raises InvariantError when a state is not connected, when
        a FAIL state is reachable or when there is not exactly one
        MATCH state.
        """
        match = self.match
        for state in self.states:
            opcode = state.opcode
            if opcode is OpCode.FAIL:
                raise InvariantError("Fail state {} in graph".format(state))

            if opcode is OpCode.MATCH:
                if state.edge is not None or state.alt is not None:
                    raise InvariantError("Match state has successors")
                continue

            if state.edge is None:
                raise InvariantError("{} has a dangling edge".format(state))

            if opcode.is_branch:
                if state.alt is None:
                    raise InvariantError(
                        "{} has a dangling alt edge".format(state)
                    )
            elif state.alt is not None:
                raise InvariantError("{} has an alt edge".format(state))

            if opcode is OpCode.SPLIT_TO_MATCH and state.alt is not match:
                raise InvariantError(
                    "{} does not branch to match".format(state)
                )

            if opcode in (OpCode.RUNE, OpCode.CAPTURE):
                if not isinstance(state.payload, int):
                    raise InvariantError(
                        "{} has an invalid payload".format(state)
                    )
            elif opcode is OpCode.CLASS:
                if not isinstance(state.payload, RuneSet):
                    raise InvariantError(
                        "{} has an invalid payload".format(state)
                    )

    def dump(self, f=None):
        """ Print a listing of the states, one per line. """
        for state in self.states:
            print(self._format(state), file=f)

    def _format(self, state):
        opcode = state.opcode
        if opcode is OpCode.RUNE:
            operand = " {!r}".format(chr(state.payload))
        elif opcode in (OpCode.CLASS, OpCode.CAPTURE):
            operand = " {}".format(state.payload)
        else:
            operand = ""

        targets = ", ".join(str(self.number(s)) for s in state.successors())
        if targets:
            targets = " -> " + targets

        return "{:4}: {}{}{}".format(
            self.number(state), opcode.name.lower(), operand, targets
        )

    def to_dot(self, f=None):
        """ Generate graphviz dot representation """
        for state in self.states:
            shape = (
                "doublecircle" if state.opcode is OpCode.MATCH else "box"
            )
            label = self._format(state).split(" -> ")[0].strip()
            label = label.replace("\\", "\\\\").replace('"', '\\"')
            print(
                '  s{} [label="{}" shape={}];'.format(
                    self.number(state), label, shape
                ),
                file=f,
            )
        for state in self.states:
            if state.edge is not None:
                print(
                    "  s{} -> s{};".format(
                        self.number(state), self.number(state.edge)
                    ),
                    file=f,
                )
            if state.alt is not None:
                print(
                    "  s{} -> s{} [style=dashed];".format(
                        self.number(state), self.number(state.alt)
                    ),
                    file=f,
                )
