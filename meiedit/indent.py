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
Smart indenting of XML text in a :class:`parce.Document`.

The indent of a line is determined by the number of elements that are open
at the start of the line. A line starting with a closing tag is dedented
one level. Blank lines and lines that start inside a tag (e.g. attributes
continued on a next line) or inside a comment are left alone.

"""

import bisect
import re

from . import buffer


_tag_re = re.compile(
    r'<!--.*?-->'
    r'|<\?.*?\?>'
    r'|<!\[CDATA\[.*?\]\]>'
    r'|<![^>]*>'
    r'|<(/?)[^\s/>!?][^\s/>]*(?:"[^"]*"|\'[^\']*\'|[^>"\'])*?(/?)>', re.S)


class _Scan:
    """Holds the tag positions of a text, to compute the depth at offsets."""
    def __init__(self, text):
        self.ends = []          # end offset of each tag
        self.depths = []        # depth after each tag
        self.spans = []         # (pos, end) of every tag, comment, etc.
        depth = 0
        for m in _tag_re.finditer(text):
            self.spans.append((m.start(), m.end()))
            if m.group(1) is None:
                continue    # comment, processing instruction, etc.
            if m.group(1):
                depth -= 1
            elif not m.group(2):
                depth += 1
            else:
                continue
            self.ends.append(m.end())
            self.depths.append(depth)
        self.starts = [s[0] for s in self.spans]

    def depth(self, offset):
        """Return the number of elements open at the offset."""
        i = bisect.bisect_right(self.ends, offset)
        return max(0, self.depths[i - 1]) if i else 0

    def inside(self, offset):
        """Return True if the offset is inside a tag or comment."""
        i = bisect.bisect_right(self.starts, offset) - 1
        return i >= 0 and self.spans[i][0] < offset < self.spans[i][1]


class Indenter:
    """Indents lines of XML text.

    Indentation preferences can be given on instantiation or by setting the
    attributes of the same name: the ``indent_width`` for every nesting
    level, and the additional ``start_indent`` which is added to every line,
    both in number of spaces.

    """
    def __init__(self,
            indent_width = 3,
            start_indent = 0,
        ):

        #: the indent width per level
        self.indent_width = indent_width

        #: the number of spaces to add to every line
        self.start_indent = start_indent

    def indent_lines(self, document, pos=0, end=None):
        """Indent the lines of the :class:`parce.Document` touched by the range.

        The lines from the one containing ``pos`` upto and including the one
        containing ``end`` are indented. If ``end`` is None, indents upto the
        end of the document. All changes are applied at once. Returns the
        number of lines that changed.

        """
        text = document.text()
        if end is None:
            end = len(text)
        scan = _Scan(text)
        changed = 0
        with document:
            for block in buffer.blocks(document, pos, end):
                width = self.line_indent(document, block, scan)
                if width is not None:
                    line = block.text()
                    ws = buffer.leading_whitespace(line)
                    if line[:ws] != ' ' * width:
                        document[block.pos:block.pos + ws] = ' ' * width
                        changed += 1
        return changed

    def indent_line(self, document, pos):
        """Indent the line containing ``pos``. Returns True if the line changed."""
        return bool(self.indent_lines(document, pos, pos))

    def line_indent(self, document, block, scan=None):
        """Return the indent width the :class:`parce.Block` should have, or None.

        None is returned for blank lines and for lines starting inside a tag
        or comment.

        """
        if scan is None:
            scan = _Scan(document.text())
        text = block.text()
        ws = buffer.leading_whitespace(text)
        if ws == len(text) or scan.inside(block.pos):
            return None
        depth = scan.depth(block.pos + ws)
        if text.startswith('</', ws):
            depth -= 1
        return self.start_indent + max(0, depth) * self.indent_width
