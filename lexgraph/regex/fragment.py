from .edgelist import EdgeList


class Fragment:
    """ A partially built piece of the graph.

    The entry is the state where the fragment must be entered,
    the dangling list holds all edges leaving the fragment.
    """

    __slots__ = ["entry", "dangling"]

    def __init__(self, entry, dangling):
        assert isinstance(dangling, EdgeList)
        self.entry = entry
        self.dangling = dangling

    def __repr__(self):
        return "Fragment({}, {})".format(self.entry, self.dangling)
