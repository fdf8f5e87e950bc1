import io
import unittest
from lexgraph.common import InvariantError
from lexgraph.regex import compile, Graph, State, OpCode


def find_loops(graph):
    """ Return all back edges as (source, target) pairs """
    loops = []
    on_path = set()
    done = set()

    def visit(state):
        on_path.add(state)
        for successor in state.successors():
            if successor in on_path:
                loops.append((state, successor))
            elif successor not in done:
                visit(successor)
        on_path.remove(state)
        done.add(state)

    visit(graph.entry)
    return loops


class GraphTestCase(unittest.TestCase):
    def test_traversal_order(self):
        graph = compile("ab*")
        self.assertEqual(
            [OpCode.RUNE, OpCode.SPLIT, OpCode.RUNE, OpCode.MATCH],
            [s.opcode for s in graph])

    def test_entry_is_read_only(self):
        graph = compile("a")
        with self.assertRaises(AttributeError):
            graph.entry = State(OpCode.MATCH)

    def test_no_dangling_edges(self):
        patterns = [
            "a", "abc", "a*", "a+b?", "(a|b)*c", "a(b(c|d)+)?e",
            "[a-z]+@[a-z]+\\.(com|org)", ".*", "(a*)*", "x|y|z",
        ]
        for pattern in patterns:
            graph = compile(pattern)
            graph.verify()
            matches = [s for s in graph if s.opcode is OpCode.MATCH]
            self.assertEqual(1, len(matches))
            self.assertEqual([], matches[0].successors())
            for state in graph:
                self.assertIsNot(OpCode.FAIL, state.opcode)
                if state.opcode is OpCode.MATCH:
                    continue
                self.assertIsNotNone(state.edge)
                if state.opcode.is_branch:
                    self.assertIsNotNone(state.alt)
                else:
                    self.assertIsNone(state.alt)

    def test_acyclic(self):
        graph = compile("a?b(c|d)")
        self.assertEqual([], find_loops(graph))

    def test_one_cycle_per_loop(self):
        graph = compile("a*b+")
        loops = find_loops(graph)
        self.assertEqual(2, len(loops))
        for source, target in loops:
            self.assertIn(OpCode.SPLIT, (source.opcode, target.opcode))

    def test_loop_exit_is_alt(self):
        graph = compile("a*")
        split = graph.entry
        # Walking the primary edge returns to the split:
        self.assertIs(split, split.edge.edge)
        self.assertIs(OpCode.MATCH, split.alt.opcode)

    def test_dump(self):
        f = io.StringIO()
        compile("a*").dump(f)
        self.assertEqual(
            ["   0: split -> 1, 2", "   1: rune 'a' -> 0", "   2: match"],
            f.getvalue().splitlines())

    def test_dump_class(self):
        f = io.StringIO()
        compile("[a-c]").dump(f)
        self.assertEqual(
            ["   0: class [a-c] -> 1", "   1: match"],
            f.getvalue().splitlines())

    def test_to_dot(self):
        f = io.StringIO()
        compile("a|b").to_dot(f)
        dot = f.getvalue()
        self.assertIn('s0 [label="0: split" shape=box];', dot)
        self.assertIn("s0 -> s1;", dot)
        self.assertIn("s0 -> s3 [style=dashed];", dot)
        self.assertIn("shape=doublecircle", dot)

    def test_repr(self):
        self.assertEqual("Graph(4 states, 1 groups)", repr(compile("(a)")))


class VerifyTestCase(unittest.TestCase):
    def test_fail_state(self):
        graph = Graph(State(OpCode.FAIL, State(OpCode.MATCH)))
        with self.assertRaises(InvariantError):
            graph.verify()

    def test_dangling_edge(self):
        graph = Graph(State(OpCode.SPLIT, State(OpCode.MATCH)))
        with self.assertRaises(InvariantError):
            graph.verify()

    def test_missing_match(self):
        a = State(OpCode.RUNE, payload=ord("a"))
        a.edge = a
        with self.assertRaises(InvariantError):
            Graph(a).verify()

    def test_two_matches(self):
        graph = Graph(State(
            OpCode.SPLIT, State(OpCode.MATCH), State(OpCode.MATCH)))
        with self.assertRaises(InvariantError):
            graph.verify()

    def test_split_to_match_target(self):
        match = State(OpCode.MATCH)
        a = State(OpCode.RUNE, match, payload=ord("a"))
        split = State(OpCode.SPLIT_TO_MATCH, match, a)
        with self.assertRaises(InvariantError):
            Graph(split).verify()

    def test_bad_payload(self):
        graph = Graph(State(OpCode.CLASS, State(OpCode.MATCH), payload="a"))
        with self.assertRaises(InvariantError):
            graph.verify()


if __name__ == "__main__":
    unittest.main()
