"""
   Error handling routines
   Source location structures
"""


class Token:
    """
    Token is produced by the pattern scanner. The scanner takes a
    pattern and splits it into tokens.
    """

    __slots__ = ["typ", "val", "loc"]

    def __init__(self, typ, val, loc):
        self.typ = typ
        self.val = val
        assert isinstance(loc, SourceLocation)
        self.loc = loc

    def __repr__(self):
        return "Token({}, {}, {})".format(self.typ, self.val, self.loc)


class SourceLocation:
    """ A location that refers to a position in a pattern """

    __slots__ = ["row", "col", "length", "source"]

    def __init__(self, row, col, ln, source=None):
        self.row = row
        self.col = col
        self.length = ln
        self.source = source

    def __repr__(self):
        return f"({self.row}, {self.col}, {self.length})"

    def get_source_line(self):
        """ Return the source line indicated by this location """
        if self.source is not None:
            lines = self.source.split("\n")
            return lines[self.row - 1]
        else:
            return "Could not load source"

    def print_message(self, message: str, lines=None, file=None):
        """ Print a message at this location in the given source lines """
        if lines is None:
            lines = [self.get_source_line()]

        print_message(
            lines, self.row, self.col, self.length, message, file=file
        )


def print_message(
    lines, row: int, col: int, length: int, message: str, file=None
):
    """ Render a message nicely embedded in the pattern text """
    prerow = max(row - 2, 1)
    afterrow = min(row + 3, len(lines))

    for r in range(prerow, afterrow + 1):
        txt = lines[r - 1]
        print("{:5} :{}".format(r, txt), file=file)

        # Mark the offending columns:
        if r == row:
            base_txt = "      :"
            if length < 1:
                length = 1
            marker = "^" * length
            indent1_txt = base_txt + " " * (col - 1)
            indent2_txt = indent1_txt + " " * (length // 2)
            print(f"{indent1_txt}{marker}", file=file)
            print(f"{indent2_txt}|", file=file)
            print(f"{indent2_txt}+---- {message}", file=file)


class CompilerError(Exception):
    def __init__(self, msg, loc=None):
        super().__init__(msg)
        self.msg = msg
        self.loc = loc
        if loc:
            assert isinstance(loc, SourceLocation), \
                   '{0} must be SourceLocation'.format(type(loc))

    def __repr__(self):
        return '"{}"'.format(self.msg)

    def __str__(self):
        if self.loc:
            return '{} at column {}'.format(self.msg, self.loc.col)
        return self.msg

    def render(self, lines):
        """ Render this error in some lines of context """
        if self.loc:
            self.loc.print_message(
                "Error: {0}".format(self.msg), lines=lines)
        else:
            print("Error: {0}".format(self.msg))

    def print(self, file=None):
        """ Print the error inside some nice context """
        if self.loc:
            self.loc.print_message(self.msg, file=file)
        else:
            print(self.msg, file=file)


class MalformedPattern(CompilerError):
    """ The pattern does not reduce to a single expression """
    pass


class InvalidClassSpec(CompilerError):
    """ A bracket class like [a-z] is not well formed """
    pass


class InvariantError(RuntimeError):
    """ Raised on a defect in the compiler itself, never on bad input. """
    pass
