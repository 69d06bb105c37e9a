# -*- coding: utf-8 -*-
#
# This file is part of `meiedit`, a library for editing MEI documents
#
# Copyright © 2019-2020 by Wilbert Berendsen <info@wilbertberendsen.nl>
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
Addressing the text of a :class:`parce.Document`.

The source text of an MEI document lives in a :class:`parce.Document`, and
the editor's cursor is a :class:`parce.Cursor`. Offsets are character
positions in the text. For reporting to a user interface, a
:class:`Position` is a (line, column) pair, both zero-based, and a
:class:`Span` a range between two positions.

"""

import collections


#: A position in a document, line and column are zero-based.
Position = collections.namedtuple("Position", "line column")
Position.line.__doc__ = "The line number, starting with 0."
Position.column.__doc__ = "The column, starting with 0."


class Span(collections.namedtuple("Span", "start end")):
    """A range in the document, from the ``start`` to the ``end`` Position.

    The span ``Span(-1, -1)`` is invalid; it denotes a location that could not
    be found. An invalid Span evaluates to False.

    """
    __slots__ = ()

    def __bool__(self):
        return self.start != -1


#: The invalid span.
INVALID_SPAN = Span(-1, -1)


def position(document, offset):
    """Return the :class:`Position` of the offset in the document."""
    text = document.text()
    offset = max(0, min(offset, len(text)))
    line = text.count('\n', 0, offset)
    return Position(line, offset - text.rfind('\n', 0, offset) - 1)


def span(document, pos, end):
    """Return the :class:`Span` of the range ``pos`` to ``end``."""
    return Span(position(document, pos), position(document, end))


def blocks(document, pos, end):
    """Yield the blocks (lines) of the document that the range touches.

    The first block is the one containing ``pos``, the last the one
    containing ``end``.

    """
    block = document.find_block(pos)
    while block is not None:
        yield block
        if block.end >= end:
            break
        block = block.next_block()


def leading_whitespace(text):
    """Return the number of spaces and tabs the text starts with."""
    return len(text) - len(text.lstrip(' \t'))
