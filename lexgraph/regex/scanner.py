""" Regular expression scanning.

This module splits a pattern into tokens for the compiler. Atoms are
single code points (RUNE), character classes (CLASS) and the
wildcard (ANY). Operators are returned with their own character as
token type.

"""

from ..common import Token, SourceLocation
from ..common import MalformedPattern, InvalidClassSpec
from ..utils.runeset import RuneSet, DIGITS, WORD, SPACE

RUNE = "RUNE"
CLASS = "CLASS"
ANY = "ANY"
OPERATORS = "()|*+?"
QUANTIFIERS = "*+?"
UNSUPPORTED = {
    "^": "Anchors are not supported",
    "$": "Anchors are not supported",
    "{": "Bounded repetition is not supported",
}

CONTROL_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

CLASS_ESCAPES = {
    "d": DIGITS,
    "w": WORD,
    "s": SPACE,
    "D": DIGITS.complement(),
    "W": WORD.complement(),
    "S": SPACE.complement(),
}

META = set(OPERATORS) | set(UNSUPPORTED) | set("\\.[]}-")


def tokenize(pattern):
    """ Generate the tokens of the given pattern """
    return Scanner().tokenize(pattern)


class Scanner:
    """ Regular expression pattern scanner """

    def tokenize(self, txt):
        self.txt = txt
        self.pos = 0
        while not self.at_end():
            start = self.pos
            typ, val = self._scan_token()
            yield Token(typ, val, self.loc(start, self.pos - start))

    def loc(self, pos, length=1):
        return SourceLocation(1, pos + 1, length, source=self.txt)

    def current(self):
        if self.pos < len(self.txt):
            return self.txt[self.pos]

    def at_end(self):
        return self.pos >= len(self.txt)

    def peek(self, c):
        """ Look at next character """
        return c == self.current()

    def _next_char(self, error=MalformedPattern):
        c = self.current()
        if c is None:
            raise error("Unexpected end of pattern", self.loc(self.pos, 0))

        self.pos += 1
        return c

    def did_eat(self, c):
        if self.peek(c):
            self.pos += 1
            return True
        return False

    def _scan_token(self):
        c = self._next_char()
        if c in OPERATORS:
            return c, c
        elif c in UNSUPPORTED:
            raise MalformedPattern(UNSUPPORTED[c], self.loc(self.pos - 1))
        elif c == ".":
            return ANY, None
        elif c == "[":
            return CLASS, self._scan_class()
        elif c == "\\":
            return self._scan_escape(MalformedPattern)
        else:
            return RUNE, ord(c)

    def _scan_escape(self, error):
        """ Scan the character after a backslash """
        start = self.pos - 1
        c = self._next_char(error)
        if c in CONTROL_ESCAPES:
            return RUNE, ord(CONTROL_ESCAPES[c])
        elif c in CLASS_ESCAPES:
            return CLASS, CLASS_ESCAPES[c]
        elif c in META or c == "/":
            return RUNE, ord(c)
        elif c.isdigit():
            raise error(
                "Back references are not supported", self.loc(start, 2)
            )
        else:
            raise error(
                "Unknown escape sequence \\{}".format(c), self.loc(start, 2)
            )

    def _scan_class(self):
        """ Scan a set of options '[0-9abc]' """
        start = self.pos - 1
        if self.at_end():
            raise InvalidClassSpec(
                "Unterminated character class", self.loc(start)
            )

        complement = self.did_eat("^")
        symbols = RuneSet()
        while not self.peek("]"):
            if self.at_end():
                raise InvalidClassSpec(
                    "Unterminated character class",
                    self.loc(start, self.pos - start),
                )
            item_pos = self.pos
            low = self._scan_class_item()
            if isinstance(low, RuneSet):
                symbols = symbols | low
                continue

            # A '-' right before the closing bracket is a literal:
            if self.peek("-") and self.txt[self.pos + 1:self.pos + 2] not in (
                "]",
                "",
            ):
                self.pos += 1
                high = self._scan_class_item()
                if isinstance(high, RuneSet):
                    raise InvalidClassSpec(
                        "Class escape cannot end a range",
                        self.loc(item_pos, self.pos - item_pos),
                    )
                if high < low:
                    raise InvalidClassSpec(
                        "Range start must be before range end",
                        self.loc(item_pos, self.pos - item_pos),
                    )
                symbols = symbols | RuneSet((low, high))
            else:
                symbols = symbols | RuneSet(low)
        self.pos += 1

        if not symbols:
            raise InvalidClassSpec(
                "Expected at least 1 item in character class [...]",
                self.loc(start, self.pos - start),
            )

        if complement:
            symbols = symbols.complement()
            if not symbols:
                raise InvalidClassSpec(
                    "Character class matches nothing",
                    self.loc(start, self.pos - start),
                )

        return symbols

    def _scan_class_item(self):
        """ Scan a single code point or class escape inside brackets """
        c = self._next_char(InvalidClassSpec)
        if c == "\\":
            typ, val = self._scan_escape(InvalidClassSpec)
            return val
        elif c == "[":
            raise InvalidClassSpec(
                "Nested character classes are not supported",
                self.loc(self.pos - 1),
            )
        return ord(c)
