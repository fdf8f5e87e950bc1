""" RuneSet implementation.

A rune set stores the code points matched by a character class
as a sorted tuple of closed intervals. This keeps classes like
[^a] small, even though they cover almost the entire unicode range.

Based upon the integer set of:

https://github.com/MichaelPaddon/epsilon

"""

import bisect

MAX_RUNE = 0x10FFFF


class RuneSet:
    """ An immutable set of code points. """

    __slots__ = ["ranges"]

    def __init__(self, *values):
        ranges = []
        for value in values:
            if isinstance(value, str):
                value = ord(value)

            if isinstance(value, int):
                ranges.append((value, value))
            elif isinstance(value, tuple):
                start, end = (
                    ord(v) if isinstance(v, str) else int(v) for v in value
                )
                ranges.append((start, end))
            else:
                raise TypeError(
                    "Expected int, str or tuple but got {}".format(
                        type(value)
                    )
                )

        # Sort and merge intervals:
        ranges = sorted(filter(lambda r: r[0] <= r[1], ranges))
        self.ranges = tuple(merge_overlapping_intervals(ranges))

    def __repr__(self):
        inner = ",".join(
            _show(a) if a == b else "{}-{}".format(_show(a), _show(b))
            for a, b in self.ranges
        )
        return "[{}]".format(inner)

    def __len__(self):
        return self.cardinality()

    def __bool__(self):
        return bool(self.ranges)

    def cardinality(self) -> int:
        """ Determine total amount of code points in this set. """
        return sum(b - a + 1 for a, b in self.ranges)

    def __contains__(self, item):
        if isinstance(item, str):
            item = ord(item)
        return self.contains(item)

    def contains(self, value) -> bool:
        index = bisect.bisect(self.ranges, (value,))
        return (
            index < len(self.ranges) and value == self.ranges[index][0]
        ) or (
            index > 0
            and self.ranges[index - 1][0] <= value <= self.ranges[index - 1][1]
        )

    def union(self, other):
        return RuneSet(*(self.ranges + other.ranges))

    def __or__(self, other):
        return self.union(other)

    def complement(self):
        """ Return all code points up to MAX_RUNE not in this set. """
        ranges = []
        start = 0
        for a, b in self.ranges:
            if a > start:
                ranges.append((start, a - 1))
            start = b + 1
        if start <= MAX_RUNE:
            ranges.append((start, MAX_RUNE))
        return RuneSet(*ranges)

    def __invert__(self):
        return self.complement()

    def __eq__(self, other):
        if isinstance(other, RuneSet):
            return self.ranges == other.ranges
        else:
            return False

    def __hash__(self):
        return hash(self.ranges)


def merge_overlapping_intervals(ranges):
    if ranges:
        r = ranges[0]
        for s in ranges[1:]:
            if s[0] > r[1] + 1:
                # Found hole!
                yield r
                r = s
            else:
                r = (r[0], max(r[1], s[1]))

        yield r


def _show(rune):
    if 0x20 < rune < 0x7F:
        return chr(rune)
    return "\\x{:02x}".format(rune)


DIGITS = RuneSet(("0", "9"))
WORD = RuneSet(("a", "z"), ("A", "Z"), ("0", "9"), "_")
SPACE = RuneSet(" ", "\t", "\n", "\r", "\f", "\v")
