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
The score document model.

A :class:`Score` consists of a list of signatures and a list of bars. Every
:class:`Bar` has one or more channels, each holding the decoded notation
tokens and an optional lyric, or repeating the same channel of the previous
bar (:class:`RepeatsPrevious`). A bar may override the signature; the
signature in effect is resolved once, when assembling the score.

Scores are built with :func:`assemble`, which decodes and validates all
channels and checks the repeat structure, reporting all problems at once::

    >>> from scof.score import assemble
    >>> score = assemble([{"time": "3/4"}], [
    ...     {"chan": ["C4 D4 E4"]},
    ...     {"chan": ["%"], "repeat": ["close"]},
    ... ])
    >>> score.resolve(1, 0).tokens == score.bars[0].channels[0].tokens
    True

A Score is never changed after assembly; :meth:`Score.patch` returns a new
Score.

"""

import collections
import enum
import functools
import logging

from .decoder import DecodeError, Decoder, is_measure_repeat
from .key import Signature
from .time import ValidationError, validate


logger = logging.getLogger(__name__)


#: A channel of a bar: the decoded tokens and an optional lyric.
Channel = collections.namedtuple("Channel", "tokens lyric", defaults=(None,))

#: A channel that repeats the same channel of the previous bar.
RepeatsPrevious = collections.namedtuple("RepeatsPrevious", "lyric", defaults=(None,))


class Bar(collections.namedtuple("Bar", "channels signature override repeats")):
    """A bar.

    ``channels`` is a tuple of :class:`Channel` or :class:`RepeatsPrevious`,
    ``signature`` the index of the signature in effect, ``override`` is True
    when the bar sets the signature itself, and ``repeats`` is a tuple of
    :class:`Repeat` and :class:`Ending` markers.

    """
    __slots__ = ()

    @property
    def shows_signature(self):
        """True if the key and time signature are printed at this bar."""
        return self.override


class Repeat(enum.Enum):
    """A repeat marker of a bar."""
    OPEN = 'open'
    CLOSE = 'close'
    SEGNO = 'segno'
    DC = 'dc'
    DS = 'ds'
    CODA = 'coda'
    TO_CODA = 'tocoda'
    FINE = 'fine'


#: A numbered ending ("volta"), e.g. ``Ending(1)``.
Ending = collections.namedtuple("Ending", "number")


class AssembleError(ValueError):
    """Base class for errors in the structure of a score."""


class DanglingSignature(AssembleError):
    """A bar refers to a signature that does not exist."""


class UnmatchedRepeat(AssembleError):
    """A repeat is opened but never closed."""


class MissingRepeatTarget(AssembleError):
    """A D.S. or To Coda marker has no unique segno or coda to jump to."""


class DanglingRepeat(AssembleError):
    """A measure repeat has no channel in the previous bar to repeat."""


class UnknownRepeat(AssembleError):
    """A repeat marker is not recognized."""


#: A problem found while assembling: the bar index, the channel index (None
#: for problems concerning the whole bar) and the exception.
Problem = collections.namedtuple("Problem", "bar channel error")


class InvalidScore(ValueError):
    """Raised by :func:`assemble` with all problems that were found.

    The ``problems`` attribute is a list of :class:`Problem` tuples, ordered
    by bar and channel.

    """
    def __init__(self, problems):
        self.problems = sorted(problems, key=lambda p:
            (p.bar, -1 if p.channel is None else p.channel))
        super().__init__("{} problem(s) in score: {}".format(len(self.problems),
            "; ".join("bar {}{}: {}".format(p.bar,
                "" if p.channel is None else ", channel {}".format(p.channel),
                p.error) for p in self.problems)))


def repeat_from_string(text):
    """Return a Repeat or Ending for the text (or integer).

    Digits yield an :class:`Ending`. Raises :class:`UnknownRepeat` when the
    text is not a known repeat marker.

    """
    if isinstance(text, int) or (isinstance(text, str) and text.isdigit()):
        number = int(text)
        if number > 0:
            return Ending(number)
    elif isinstance(text, str):
        try:
            return Repeat(text.strip().lower().replace('_', ''))
        except ValueError:
            pass
    raise UnknownRepeat("unknown repeat marker: {!r}".format(text))


def _channel_input(value):
    """Return the tuple(notes, lyric) for one channel of the input."""
    if isinstance(value, str):
        return value, None
    return value.get("notes", ""), value.get("lyric")


def read_channel(text, lyric, signature, bar, channel, previous=None):
    """Decode and validate one channel of a bar.

    ``previous`` is the previous Bar, if any. Returns a :class:`Channel` or
    :class:`RepeatsPrevious`, raises a DecodeError, ValidationError or
    DanglingRepeat.

    """
    tokens = Decoder(signature.microtonal).decode(text)
    if is_measure_repeat(tokens):
        if previous is None or channel >= len(previous.channels):
            raise DanglingRepeat(
                "no channel {} in the previous bar to repeat".format(channel))
        return RepeatsPrevious(lyric)
    validate(tokens, signature, bar, channel)
    return Channel(tokens, lyric)


def assemble(signatures, bars):
    """Build a :class:`Score` from the signatures and bars.

    ``signatures`` is a list of :class:`~.key.Signature` objects or mappings
    as accepted by :meth:`.Signature.from_dict`; ``bars`` is a list of
    mappings with the keys ``"sig"`` (optional signature index), ``"chan"``
    (a list of channels, each a notation string or a mapping with the keys
    ``"notes"`` and ``"lyric"``) and ``"repeat"`` (optional list of repeat
    markers).

    All bars are checked, and if there are problems, :class:`InvalidScore` is
    raised with all of them.

    """
    signatures = tuple(s if isinstance(s, Signature) else Signature.from_dict(s)
                       for s in signatures)
    if not signatures:
        signatures = (Signature(),)
    problems = []
    result = []
    current = 0
    for i, b in enumerate(bars):
        override = i == 0
        if b.get("sig") is not None:
            override = True
            if 0 <= b["sig"] < len(signatures):
                current = b["sig"]
            else:
                problems.append(Problem(i, None, DanglingSignature(
                    "no signature with index {}".format(b["sig"]))))
        repeats = []
        for r in b.get("repeat", ()):
            try:
                repeats.append(repeat_from_string(r))
            except UnknownRepeat as e:
                problems.append(Problem(i, None, e))
        previous = result[-1] if result else None
        channels = []
        for c, value in enumerate(b.get("chan", ())):
            notes, lyric = _channel_input(value)
            try:
                channels.append(read_channel(
                    notes, lyric, signatures[current], i, c, previous))
            except (DecodeError, ValidationError, DanglingRepeat) as e:
                problems.append(Problem(i, c, e))
                channels.append(Channel((), lyric))
        result.append(Bar(tuple(channels), current, override, tuple(repeats)))
    problems.extend(check_repeats(result))
    logger.debug("assembled %d bars with %d signatures, %d problems",
                 len(result), len(signatures), len(problems))
    if problems:
        raise InvalidScore(problems)
    return Score(signatures, tuple(result))


def check_repeats(bars):
    """Yield a :class:`Problem` for every error in the repeat structure.

    Every open repeat needs a later close (a close without open repeats from
    the start), a D.S. needs exactly one segno and a To Coda exactly one coda.

    """
    opened = []
    marks = collections.defaultdict(list)
    for i, bar in enumerate(bars):
        for r in bar.repeats:
            if r is Repeat.OPEN:
                opened.append(i)
            elif r is Repeat.CLOSE:
                if opened:
                    opened.pop()
            else:
                marks[r].append(i)
    for i in opened:
        yield Problem(i, None, UnmatchedRepeat("repeat opened but never closed"))
    for jump, target in ((Repeat.DS, Repeat.SEGNO), (Repeat.TO_CODA, Repeat.CODA)):
        if marks[jump] and len(marks[target]) != 1:
            for i in marks[jump]:
                yield Problem(i, None, MissingRepeatTarget("{} needs exactly one {}, found {}".format(
                    jump.value, target.value, len(marks[target]))))


class Score(collections.namedtuple("Score", "signatures bars")):
    """An assembled score: a tuple of signatures and a tuple of bars.

    Use :func:`assemble` to create a Score.

    """
    __slots__ = ()

    def signature(self, bar):
        """Return the Signature in effect at the bar with index ``bar``."""
        return self.signatures[self.bars[bar].signature]

    def resolve(self, bar, channel):
        """Return the :class:`Channel` that is played in the specified bar and
        channel, following measure repeats back to the repeated bar.

        """
        c = self.bars[bar].channels[channel]
        while isinstance(c, RepeatsPrevious):
            bar -= 1
            c = self.bars[bar].channels[channel]
        return c

    def patch(self, bar, channel, notes, lyric=None):
        """Return a new Score with the notation of one channel replaced.

        Only the new channel is checked; :class:`InvalidScore` is raised if it
        is not valid. A ValueError is raised if the bar does not exist, or if
        the channel is not one of the bar's channels or the one after them.

        """
        if not 0 <= bar < len(self.bars):
            raise ValueError("score has no bar {}".format(bar))
        b = self.bars[bar]
        if not 0 <= channel <= len(b.channels):
            raise ValueError("bar {} has no channel {}".format(bar, channel))
        previous = self.bars[bar - 1] if bar > 0 else None
        try:
            c = read_channel(notes, lyric, self.signature(bar), bar, channel, previous)
        except (DecodeError, ValidationError, DanglingRepeat) as e:
            raise InvalidScore([Problem(bar, channel, e)]) from e
        channels = list(b.channels)
        if channel == len(channels):
            channels.append(c)
        else:
            channels[channel] = c
        bars = list(self.bars)
        bars[bar] = b._replace(channels=tuple(channels))
        logger.debug("patched bar %d, channel %d", bar, channel)
        return self._replace(bars=tuple(bars))

    def extents(self, metrics=None):
        """Return the list of :class:`~.width.Extent` tuples for all bars."""
        from . import width
        return [width.Extent(i, width.estimate_width(bar, metrics,
                    functools.partial(self.resolve, i), self.signature(i)),
                    width.token_count(bar, functools.partial(self.resolve, i)))
                for i, bar in enumerate(self.bars)]

    def layout(self, page_width, metrics=None, **options):
        """Lay out the bars in lines of ``page_width``.

        The keyword arguments are passed to :func:`~.layout.layout`.

        """
        from .layout import layout
        return layout(self.extents(metrics), page_width, **options)

