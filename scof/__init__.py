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
The scof module.

Decode ScoreFall notation, assemble and validate scores, and distribute their
bars over lines. On first import, the notation language definition is added
to the parce registry.

"""

from parce import find

from .decoder import decode, encode
from .score import assemble
from .layout import layout
from .pkginfo import version, version_string


__all__ = ('assemble', 'decode', 'encode', 'find', 'layout', 'version', 'version_string')


## register bundled languages in scof here
from parce.registry import register
register("scof.lang.notation.Notation.root",
    name = "ScoreFall",
    desc = "ScoreFall notation of one channel of a bar",
)
del register
