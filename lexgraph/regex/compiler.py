""" Regular expression compiler.

Translates a pattern into a graph using Thompson's construction.

The compiler keeps a stack of fragments. Each atom in the pattern
pushes a new fragment, each operator pops its operands and pushes a
single fragment again. Edges which do not yet have a target are kept
in the dangling list of a fragment until the next state is known.

See also:

https://swtch.com/~rsc/regexp/regexp1.html

"""

import logging
from ..common import MalformedPattern, InvariantError, SourceLocation
from .edgelist import EdgeList, ALT
from .fragment import Fragment
from .graph import Graph
from .instructions import OpCode, State
from . import scanner


def compile(pattern, captures=True, optimize=False):
    """ Compile the given pattern into a graph """
    compiler = Compiler(captures=captures, optimize=optimize)
    return compiler.compile(pattern)


class GroupFrame:
    """ Saved compiler counters of the level enclosing an open group """

    __slots__ = ["nalt", "natom", "index", "loc"]

    def __init__(self, nalt, natom, index, loc):
        self.nalt = nalt
        self.natom = natom
        self.index = index
        self.loc = loc


class Compiler:
    """ Regular expression to graph compiler.

    Concatenation is applied as soon as two atoms are next to each
    other. Alternation is applied when the enclosing group, or the
    pattern, ends.
    """

    logger = logging.getLogger("regex")

    def __init__(self, captures=True, optimize=False):
        self.captures = captures
        self.optimize = optimize

    def compile(self, pattern):
        """ Compile a pattern and return the graph """
        self.logger.info("Compiling pattern %r", pattern)
        self.pattern = pattern
        self.stack = []
        self.frames = []
        self.last_alt = None
        self.max_depth = 0
        self.nstates = 0
        self.ngroups = 0

        # Amount of alternatives and atoms of the current level:
        self.nalt = 0
        self.natom = 0

        previous = None
        for token in scanner.tokenize(pattern):
            self.gen_token(token, previous)
            previous = token

        graph = self.finalize()
        self.logger.debug(
            "Compiled %r into %s states, max stack depth %s",
            pattern,
            len(graph),
            graph.max_depth,
        )
        return graph

    def gen_token(self, token, previous):
        """ Apply a single token to the operand stack """
        typ = token.typ
        if typ == scanner.RUNE:
            self.gen_atom(self.new_state(OpCode.RUNE, payload=token.val))
        elif typ == scanner.CLASS:
            self.gen_atom(self.new_state(OpCode.CLASS, payload=token.val))
        elif typ == scanner.ANY:
            self.gen_atom(self.new_state(OpCode.ANY))
        elif typ == "(":
            self.open_group(token)
        elif typ == ")":
            self.close_group(token)
        elif typ == "|":
            if self.natom == 0:
                raise MalformedPattern("Nothing to alternate", token.loc)
            self.reduce_concatenation()
            self.nalt += 1
            self.last_alt = token
        elif typ in scanner.QUANTIFIERS:
            if self.natom == 0:
                raise MalformedPattern("Nothing to repeat", token.loc)
            if previous is not None and previous.typ in scanner.QUANTIFIERS:
                raise MalformedPattern("Multiple repeat", token.loc)
            self.gen_repeat(typ)
        else:  # pragma: no cover
            raise NotImplementedError(str(token))

    def new_state(self, opcode, edge=None, alt=None, payload=None):
        state = State(opcode, edge, alt, payload, id=self.nstates)
        self.nstates += 1
        self.logger.debug("Allocated %s", state)
        return state

    def push(self, fragment):
        self.stack.append(fragment)
        self.max_depth = max(self.max_depth, len(self.stack))

    def pop(self):
        if not self.stack:
            raise InvariantError("Operand stack underflow")
        return self.stack.pop()

    def gen_atom(self, state):
        """ Push a fragment for a single atom """
        if self.natom > 1:
            self.natom -= 1
            self.concatenate()
        self.push(Fragment(state, EdgeList.single(state)))
        self.natom += 1

    def concatenate(self):
        """ e1 e2 """
        e2 = self.pop()
        e1 = self.pop()
        e1.dangling.patch(e2.entry)
        self.push(Fragment(e1.entry, e2.dangling))

    def alternate(self):
        """ e1 | e2 """
        e2 = self.pop()
        e1 = self.pop()
        split = self.new_state(OpCode.SPLIT, e1.entry, e2.entry)
        self.push(Fragment(split, e1.dangling.append(e2.dangling)))

    def gen_repeat(self, typ):
        """ Apply one of the ?, * or + operators to the top fragment """
        e = self.pop()
        split = self.new_state(OpCode.SPLIT, e.entry)
        skip = EdgeList.single(split, ALT)
        if typ == "?":
            self.push(Fragment(split, e.dangling.append(skip)))
        elif typ == "*":
            e.dangling.patch(split)
            self.push(Fragment(split, skip))
        else:
            assert typ == "+"
            e.dangling.patch(split)
            self.push(Fragment(e.entry, skip))

    def open_group(self, token):
        if self.natom > 1:
            self.natom -= 1
            self.concatenate()
        self.ngroups += 1
        self.frames.append(
            GroupFrame(self.nalt, self.natom, self.ngroups, token.loc)
        )
        self.nalt = 0
        self.natom = 0

    def close_group(self, token):
        if not self.frames:
            raise MalformedPattern("Unbalanced parenthesis", token.loc)
        if self.natom == 0:
            if self.nalt:
                msg = "Missing operand for |"
            else:
                msg = "Empty group"
            raise MalformedPattern(msg, token.loc)

        self.reduce_concatenation()
        self.reduce_alternation()

        frame = self.frames.pop()
        if self.captures:
            self.wrap_capture(frame.index)
        self.nalt = frame.nalt
        self.natom = frame.natom + 1

    def wrap_capture(self, index):
        """ Bracket the top fragment with a pair of capture states """
        e = self.pop()
        start = self.new_state(OpCode.CAPTURE, e.entry, payload=2 * index)
        end = self.new_state(OpCode.CAPTURE, payload=2 * index + 1)
        e.dangling.patch(end)
        self.push(Fragment(start, EdgeList.single(end)))

    def reduce_concatenation(self):
        """ Concatenate the atoms of the current alternative """
        self.natom -= 1
        while self.natom > 0:
            self.concatenate()
            self.natom -= 1

    def reduce_alternation(self):
        while self.nalt > 0:
            self.alternate()
            self.nalt -= 1

    def finalize(self):
        """ Collapse the stack and connect everything to the match state """
        if self.frames:
            raise MalformedPattern("Missing )", self.frames[-1].loc)

        if self.natom == 0:
            if self.nalt:
                raise MalformedPattern(
                    "Missing operand for |", self.last_alt.loc
                )
            raise MalformedPattern(
                "Empty pattern", SourceLocation(1, 1, 0, source=self.pattern)
            )

        self.reduce_concatenation()
        self.reduce_alternation()

        if len(self.stack) != 1:
            raise MalformedPattern(
                "Pattern does not reduce to a single expression",
                SourceLocation(
                    1, 1, len(self.pattern), source=self.pattern
                ),
            )

        fragment = self.pop()
        match = self.new_state(OpCode.MATCH)
        slots = list(fragment.dangling)
        fragment.dangling.patch(match)

        if self.optimize:
            for slot in slots:
                if slot.field == ALT and slot.state.opcode is OpCode.SPLIT:
                    slot.state.opcode = OpCode.SPLIT_TO_MATCH

        graph = Graph(
            fragment.entry, ngroups=self.ngroups, max_depth=self.max_depth
        )
        graph.verify()
        return graph
