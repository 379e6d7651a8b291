# -*- coding: utf-8 -*-
#
# This file is part of `scof`, a library for the ScoreFall notation format
#
# Copyright © 2020-2022 by the scof authors
#
# This module is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This module is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.


"""
Distribute bars over lines and allocate the horizontal space of each line.

The input is a sequence of :class:`~.width.Extent` tuples (bar index,
intrinsic width and token count), as returned by :meth:`.Score.extents`. The
:class:`LineBreaker` walks them in four steps:

1. Bars are added to a line as long as the maximum number of bars and tokens
   per line is not exceeded, the widths fit in the page width (stretched by a
   tolerance), and the line does not get more than ``balance`` bars longer
   than the previous one.

2. The number of bars on consecutive lines may differ at most ``balance``: a
   line that ends up too short gets bars from the line before it, and if it
   can't take them, the lines are filled again with fewer bars per line.

3. The page width is distributed over the bars of a line in proportion to
   their intrinsic width, but no bar gets more than ``max_ratio`` times the
   width of the narrowest bar.

4. If a line has as many bars as the line before, and a barline is more than
   ``alignment`` times the page width away from the same barline on the
   previous line, the widths are moved towards those of the previous line.

An example::

    >>> from scof.width import Extent
    >>> from scof.layout import layout
    >>> lines = layout([Extent(i, 1000, 4) for i in range(5)], 3000)
    >>> [len(line.bars) for line in lines]
    [3, 2]
    >>> lines[1].bars
    (Placement(index=3, offset=0, width=1500.0), Placement(index=4, offset=1500.0, width=1500.0))

Layout is deterministic: the same input always gives the same output.

"""

import collections
import fractions
import logging


logger = logging.getLogger(__name__)


#: The position of a bar on its line: the bar index, the x-offset from the
#: start of the line and the allocated width.
Placement = collections.namedtuple("Placement", "index offset width")

#: A line: a tuple of :class:`Placement` and the factor the intrinsic widths
#: were scaled with on average.
Line = collections.namedtuple("Line", "bars scale")


class LayoutError(ValueError):
    """Base class for errors during layout."""


class Unsatisfiable(LayoutError):
    """Raised when the bars can't be laid out according to the rules.

    ``index`` is the index of the bar where the problem was found, ``reason``
    a short description.

    """
    def __init__(self, index, reason):
        self.index = index
        self.reason = reason
        super().__init__("can't lay out bar {}: {}".format(index, reason))


class LineBreaker:
    """Distribute bars over lines.

    All settings can be given as keyword arguments on instantiation or set as
    attributes.

    """
    #: Maximum number of bars on a line
    max_bars_per_line = 9

    #: Maximum number of tokens on a line
    max_tokens_per_line = 32

    #: How far the sum of intrinsic widths may exceed the page width
    tolerance = 0.1

    #: How many bars consecutive lines may differ
    balance = 2

    #: How many times wider than the narrowest bar a bar may become
    max_ratio = 2

    #: How far (relative to the page width) barlines may be off from the line above
    alignment = fractions.Fraction(1, 5)

    def __init__(self, **options):
        for name, value in options.items():
            if name.startswith('_') or not hasattr(type(self), name) \
                    or callable(getattr(type(self), name)):
                raise TypeError("unknown layout option: {}".format(name))
            setattr(self, name, value)

    def layout(self, extents, page_width):
        """Return a tuple of :class:`Line` tuples for the extents.

        Raises :class:`Unsatisfiable` if a bar is wider than ``page_width``.

        """
        if page_width <= 0:
            raise ValueError("page width must be positive")
        lines = self.balance_lines(extents, page_width)
        result = []
        previous = None
        for line in lines:
            widths = self.proportion([e.width for e in line], page_width)
            if previous and len(previous) == len(widths):
                widths = self.align(widths, previous, page_width)
            total = sum(e.width for e in line)
            result.append(Line(tuple(placements(line, widths)),
                               page_width / total if total > 0 else 1))
            previous = widths
        logger.debug("laid out %d bars in %d lines", sum(map(len, lines)), len(lines))
        return tuple(result)

    def fits(self, line, extent, page_width, max_bars=None):
        """Return True if the extent can be added to the line (a list)."""
        if max_bars is None:
            max_bars = self.max_bars_per_line
        return (len(line) < min(max_bars, self.max_bars_per_line)
            and sum(e.tokens for e in line) + extent.tokens <= self.max_tokens_per_line
            and sum(e.width for e in line) + extent.width <= page_width * (1 + self.tolerance))

    def break_lines(self, extents, page_width, max_bars=None):
        """Return a list of lines (lists of extents), filled greedily.

        If ``max_bars`` is given, lines get at most that many bars.

        """
        lines = []
        line = []
        for e in extents:
            if e.width > page_width:
                raise Unsatisfiable(e.index, "bar is wider than the page")
            if line and (not self.fits(line, e, page_width, max_bars) or
                    (lines and len(line) >= len(lines[-1]) + self.balance)):
                lines.append(line)
                line = []
            line.append(e)
        if line:
            lines.append(line)
        return lines

    def shift_lines(self, lines, page_width):
        """Move bars to lines that have too few bars compared to the line
        before them, as far as they fit.

        Bars only move forward, so this always ends.

        """
        changed = True
        while changed:
            changed = False
            for j in range(1, len(lines)):
                while (len(lines[j - 1]) - len(lines[j]) > self.balance
                        and self.fits(lines[j], lines[j - 1][-1], page_width)):
                    lines[j].insert(0, lines[j - 1].pop())
                    changed = True
        return lines

    def balanced(self, lines):
        """Return True if no consecutive lines differ more than ``balance`` bars."""
        return all(abs(len(a) - len(b)) <= self.balance for a, b in zip(lines, lines[1:]))

    def balance_lines(self, extents, page_width):
        """Return a list of balanced lines (lists of extents).

        The lines are filled greedily, and bars are moved forward to lines
        that are too short. If that does not balance the lines, because a
        short line can't take more bars, the lines are filled again with
        fewer bars per line. With one bar per line the lines are always
        balanced.

        """
        for max_bars in range(self.max_bars_per_line, 0, -1):
            lines = self.shift_lines(self.break_lines(extents, page_width, max_bars), page_width)
            if self.balanced(lines):
                if max_bars < self.max_bars_per_line:
                    logger.debug("balanced lines with at most %d bars per line", max_bars)
                return lines
        raise ValueError("max_bars_per_line must be at least 1")

    def proportion(self, weights, page_width):
        """Return the list of widths for the weights, filling ``page_width``.

        Widths are proportional to the weights, except that the widest bars
        are clamped to ``max_ratio`` times the narrowest, and the space they
        leave is distributed over the others.

        """
        cap = self.max_ratio * min(weights)
        clamped = [min(w, cap) for w in weights]
        total = sum(clamped)
        if total <= 0:
            return [page_width / len(weights)] * len(weights)
        return [page_width * w / total for w in clamped]

    def align(self, widths, previous, page_width):
        """Move the widths towards the widths of the previous line, if their
        barlines are too far apart.

        """
        limit = self.alignment * page_width
        result = widths
        for alpha in (0.25, 0.5, 0.75, 1):
            if misalignment(result, previous) <= limit:
                break
            result = self.proportion([(1 - alpha) * w + alpha * p
                for w, p in zip(widths, previous)], page_width)
        return result


def barlines(widths):
    """Yield the positions of the barlines between the widths."""
    pos = 0
    for w in widths[:-1]:
        pos += w
        yield pos


def misalignment(widths, other):
    """Return the largest distance between barlines of two lines."""
    return max((abs(a - b) for a, b in zip(barlines(widths), barlines(other))), default=0)


def placements(line, widths):
    """Yield a :class:`Placement` for every extent of the line."""
    offset = 0
    for e, w in zip(line, widths):
        yield Placement(e.index, offset, w)
        offset += w


def layout(bars, page_width, max_bars_per_line=9, max_tokens_per_line=32, **options):
    """Lay out the bars (:class:`~.width.Extent` tuples) in lines.

    Returns a tuple of :class:`Line`. The other keyword arguments set the
    attributes of the :class:`LineBreaker`.

    """
    breaker = LineBreaker(max_bars_per_line=max_bars_per_line,
        max_tokens_per_line=max_tokens_per_line, **options)
    return breaker.layout(list(bars), page_width)

