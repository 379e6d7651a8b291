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
ScoreFall notation language and transformation definition.

The :class:`Notation` language splits the text of one channel of a bar into
tokens; :class:`NotationTransform` turns those tokens into a flat list of
:class:`Lexeme` tuples, which the :mod:`~scof.decoder` combines into notes.

Alternatives are tried in order, so longer forms of a symbol are listed before
the shorter forms they start with (``~~`` before ``~``, ``>>`` before ``>``).

"""

import collections

from parce import Language, lexicon, skip
from parce.transform import Transform, transform_text
import parce.action as a


PITCH = r"[A-G](?:bb|db|t#|[bdntx#])?[-0-9]"
DURATION = r"[OXYSTQHWVL]\.*"
DYNAMIC = r"sfz|sfp|sf|fp|mp|mf|p{1,5}|f{1,5}|n"
MARKING = r'<<|>>|""|"|,|\$[pamo]'
ARTICULATION = r"_\.|\^\.|\^_|>\.|>_|['._^>+o@|]"
CONNECTION = r"~~|[=()]"
ORNAMENT = r"[~*;!:]"
BEND = r"//|\\\\|/|\\"


class Notation(Language):
    """ScoreFall notation language definition."""
    @lexicon
    def root(cls):
        yield r'\s+', skip
        yield r'\{', a.Delimiter.Bracket, cls.grace
        yield PITCH, a.Text.Music.Pitch
        yield r'R', a.Text.Music.Rest
        yield DURATION, a.Number.Duration
        yield DYNAMIC, a.Name.Builtin.Dynamic
        yield MARKING, a.Name.Symbol.Marking
        yield r'%', a.Keyword
        yield ARTICULATION, a.Name.Script.Articulation
        yield CONNECTION, a.Name.Symbol.Spanner
        yield ORNAMENT, a.Name.Script.Ornament
        yield BEND, a.Name.Symbol.Bend
        yield r'.', a.Text.Invalid

    @lexicon
    def grace(cls):
        """Grace notes between ``{`` and ``}``."""
        yield r'\s+', skip
        yield r'\}', a.Delimiter.Bracket, -1
        yield PITCH, a.Text.Music.Pitch
        yield r'.', a.Text.Invalid


#: A lexeme: the ``kind`` of the token, its ``text`` and its position.
Lexeme = collections.namedtuple("Lexeme", "kind text pos")

#: A group of grace notes: the pitch and invalid lexemes inside, the
#: position of the ``{`` and whether the group was closed with ``}``.
Grace = collections.namedtuple("Grace", "lexemes pos closed")


class NotationTransform(Transform):
    """Transform ScoreFall notation tokens to :class:`Lexeme` tuples."""
    _kinds = {
        a.Text.Music.Pitch: 'pitch',
        a.Text.Music.Rest: 'rest',
        a.Number.Duration: 'duration',
        a.Name.Builtin.Dynamic: 'dynamic',
        a.Name.Symbol.Marking: 'marking',
        a.Keyword: 'repeat',
        a.Name.Script.Articulation: 'articulation',
        a.Name.Symbol.Spanner: 'connection',
        a.Name.Script.Ornament: 'ornament',
        a.Name.Symbol.Bend: 'bend',
        a.Text.Invalid: 'invalid',
    }

    def lexemes(self, items):
        """Yield a Lexeme for every token in items."""
        for i in items:
            if i.is_token:
                yield Lexeme(self._kinds.get(i.action, 'invalid'), i.text, i.pos)

    def root(self, items):
        """Return the list of lexemes; grace groups appear as Grace tuples.

        The ``{`` that opens a grace group is in this context, directly
        followed by the group's own context, if the group has any contents.

        """
        result = []
        brace = None
        for i in items:
            if i.is_token:
                if brace is not None:
                    result.append(Grace((), brace.pos, False))
                    brace = None
                if i.action is a.Delimiter.Bracket:
                    brace = i
                else:
                    result.extend(self.lexemes((i,)))
            elif isinstance(i.obj, Grace):
                grace = i.obj
                if brace is not None:
                    grace = grace._replace(pos=brace.pos)
                    brace = None
                result.append(grace)
        if brace is not None:
            result.append(Grace((), brace.pos, False))
        return result

    def grace(self, items):
        """Build a Grace from the contents of a ``{`` ... ``}`` group."""
        pos = items[0].pos if items else None
        closed = bool(items) and items[-1] == '}'
        inner = items[:-1] if closed else items
        return Grace(tuple(self.lexemes(inner)), pos, closed)


def lex(text):
    """Return the list of lexemes and Grace tuples for the notation text."""
    return transform_text(Notation.root, text)

