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
Keep the text of a document in sync with changes made to its DOM tree.

The DOM tree is always changed first. Then one of the functions in this
module translates the change into a bounded change of the text: the text of
an element is :func:`replace`-d by the new text of the element, or
:func:`remove`-d, or new text is :func:`insert`-ed at the cursor. Unrelated
text (comments, formatting of other elements) is left untouched.

The text of an element is found by searching for its tag name and
``xml:id`` (see :mod:`.locate`). If it cannot be found, the text is not
changed and a notice is logged; the tree and text have diverged for that
element.

The functions in this module also take care of re-indenting the changed
lines, if an :class:`~.indent.Indenter` is given.

"""

import logging
import re

from . import buffer, locate
from .buffer import INVALID_SPAN
from .dom.element import Document


logger = logging.getLogger(__name__)


#: The MEI namespace.
MEI_NS = "http://www.music-encoding.org/ns/mei"

_ids_re = re.compile(r'xml:id\s*=\s*["\']([^"\']+)["\']')
_head_end_re = re.compile(r'<(?:"[^"]*"|\'[^\']*\'|[^>"\'])*>')


def _ns(text):
    return text.replace(' xmlns="{}"'.format(MEI_NS), '')


def to_string(node):
    """Return the text of the node to put in the document.

    The default MEI namespace declaration is left out, except for the root
    element of a document. Adjacent tags are put on separate lines.

    """
    text = node.write()
    if not isinstance(node.parent, Document):
        text = _ns(text)
    return text.replace('><', '>\n<')


def _strip_blank_lines(document, pos, end):
    """Delete the blank lines between pos and end; return the number of characters removed."""
    ranges = []
    for block in buffer.blocks(document, pos, end):
        if not block.text().strip() and block.end < end:
            if ranges and ranges[-1][1] == block.pos:
                ranges[-1][1] = block.end + 1
            else:
                ranges.append([block.pos, block.end + 1])
    with document:
        for p, e in ranges:
            document[p:e] = ''
    return sum(e - p for p, e in ranges)


def _indent(document, indenter, pos, end):
    """Indent the lines from pos to end, and return the adjusted (pos, end)."""
    if not indenter:
        return pos, end
    first = document.find_block(pos)
    ws = buffer.leading_whitespace(first.text())
    last = document.find_block(end)
    tail = len(document.text()) - end
    if end <= last.pos + buffer.leading_whitespace(last.text()):
        # end lies in the indent of its line, keep it at the line start
        tail = len(document.text()) - last.pos
    indenter.indent_lines(document, pos, end)
    first = document.find_block(first.pos)
    return pos + buffer.leading_whitespace(first.text()) - ws, len(document.text()) - tail


def replace(cursor, node, select=False, new_node=None, indenter=None):
    """Replace the text of the node with its current serialization.

    The text is searched using the tag name and ``xml:id`` of ``node``, in
    the :class:`parce.Document` of the :class:`parce.Cursor`. If
    ``new_node`` is given, the text of that node is written instead, so the
    text of an element can be replaced with e.g. a wrapped version of it.

    If ``select`` is True, blank lines in the new text are removed, and the
    new text is selected with the cursor.

    Returns the :class:`~.buffer.Span` of the new text, or
    :data:`~.buffer.INVALID_SPAN` if the text of the node was not found.

    """
    text = to_string(new_node if new_node is not None else node)
    return replace_text(cursor, node, text, select, indenter)


def replace_text(cursor, node, text, select=False, indenter=None):
    """Replace the text of the node with the specified text.

    See :func:`replace` for the arguments and the return value.

    """
    r = locate.locate_element(cursor.document(), node)
    if r is None:
        logger.info("replace: nothing replaced for <%s> %s", node.tag, node.xml_id)
        return INVALID_SPAN
    return replace_range(cursor, r[0], r[1], text, select, indenter)


def replace_single(cursor, node, select=False, indenter=None):
    """Replace the text of an element that occurs once in a document, like ``meiHead``.

    Such an element is found by its tag name when it has no ``xml:id``. See
    :func:`replace` for the arguments and the return value.

    """
    r = locate.locate_range(cursor.document(), node.tag, node.xml_id)
    if r is None:
        logger.info("replace: nothing replaced for <%s>", node.tag)
        return INVALID_SPAN
    return replace_range(cursor, r[0], r[1], to_string(node), select, indenter)


def replace_range(cursor, pos, end, text, select=False, indenter=None):
    """Replace the text from ``pos`` to ``end`` with the specified text.

    This is used for text that can't be found by ``xml:id``, like a range of
    several elements or an element that occurs once in the document. See
    :func:`replace` for the other arguments and the return value.

    """
    document = cursor.document()
    document[pos:end] = text
    end = pos + len(text)
    if select:
        end -= _strip_blank_lines(document, pos, end)
    pos, end = _indent(document, indenter, pos, end)
    if select:
        cursor.select(pos, end)
    return buffer.span(document, pos, end)


def replace_head(document, element):
    """Replace the opening tag of the element's text with its current attributes.

    The content of the element is not touched. Returns the
    :class:`~.buffer.Span` of the new opening tag, or
    :data:`~.buffer.INVALID_SPAN` if the element's text was not found.

    """
    r = locate.locate_element(document, element)
    if r is None:
        logger.info("replace_head: nothing replaced for <%s> %s", element.tag, element.xml_id)
        return INVALID_SPAN
    pos = r[0]
    m = _head_end_re.match(document.text(), pos)
    end = m.end() - (2 if m.group().endswith('/>') else 1)
    head = element.write_head()
    if not isinstance(element.parent, Document):
        head = _ns(head)
    document[pos:end] = head
    return buffer.span(document, pos, pos + len(head))


def remove(document, node):
    """Remove the text of the node, and the line if it became blank.

    Returns True if the text was found and removed.

    """
    r = locate.locate_element(document, node)
    if r is None:
        logger.info("remove: nothing removed for <%s> %s", node.tag, node.xml_id)
        return False
    remove_range(document, *r)
    return True


def remove_range(document, pos, end):
    """Remove the text from ``pos`` to ``end``, and the line if it became blank."""
    document[pos:end] = ''
    block = document.find_block(pos)
    if not block.text().strip():
        text = document.text()
        if block.end < len(text):
            document[block.pos:block.end + 1] = ''
        elif block.pos:
            document[block.pos - 1:block.end] = ''


def insert(cursor, text, indenter=None):
    """Insert text at the :class:`parce.Cursor`.

    The cursor ends up after the inserted text. The lines of the inserted
    text are re-indented. Returns the :class:`~.buffer.Span` of the new text.

    """
    document = cursor.document()
    pos = cursor.selection()[0]
    document[pos:pos] = text
    pos, end = _indent(document, indenter, pos, pos + len(text))
    cursor.select(end)
    return buffer.span(document, pos, end)


def _id_re(xml_id):
    return re.compile(r'xml:id\s*=\s*(["\']){}\1'.format(re.escape(xml_id)))


def cursor_to_id(cursor, xml_id):
    """Put the cursor at the start of the tag with the ``xml:id``.

    Returns the offset, or None if the id was not found or is None (the
    cursor is then not moved).

    """
    if xml_id is None:
        return None
    text = cursor.document().text()
    m = _id_re(xml_id).search(text)
    if m:
        pos = max(text.rfind('<', 0, m.start()), 0)
        cursor.select(pos)
        return pos


def _cursor_before(cursor, pos):
    """Put the cursor before the tag at pos, at the line start if the tag starts the line."""
    document = cursor.document()
    start = document.find_block(pos).pos
    if document.text()[start:pos].strip():
        start = pos
    cursor.select(start)
    return start


def cursor_to_end_of_measure(cursor, pos):
    """Put the cursor before the closing tag of the measure following offset ``pos``.

    If the closing tag is the first text on its line, the cursor is put at
    the start of that line, so that text ending with a newline can be
    inserted before it. Returns the new offset, or None if there is no
    closing measure tag after ``pos``.

    """
    m = re.compile(r'</measure\s*>').search(cursor.document().text(), pos)
    if m:
        return _cursor_before(cursor, m.start())


def cursor_before_closing_tag(cursor, tag, xml_id):
    """Put the cursor before the closing tag of the element.

    Like :func:`cursor_to_end_of_measure`, the cursor is put at the start of
    the line if the closing tag starts the line. Returns the offset, or None
    if the element was not found or is self-closing.

    """
    document = cursor.document()
    r = locate.locate_range(document, tag, xml_id)
    if r:
        text = document.text()[r[0]:r[1]]
        if not text.endswith('/>'):
            return _cursor_before(cursor, r[0] + text.rfind('</'))


def cursor_after_element(cursor, tag, xml_id):
    """Put the cursor at the end of the line where the element ends.

    Returns the offset, or None if the element was not found.

    """
    document = cursor.document()
    r = locate.locate_range(document, tag, xml_id)
    if r:
        pos = document.find_block(r[1]).end
        cursor.select(pos)
        return pos


def element_id_at_cursor(cursor):
    """Return the ``xml:id`` of the element at or before the cursor.

    The ids on the cursor's line are looked at first (the first one on the
    line is returned); if the line has none, the closest id before the
    line is returned. Returns None if there is no id at all.

    """
    document = cursor.document()
    block = document.find_block(cursor.pos)
    m = _ids_re.search(block.text())
    if m:
        return m.group(1)
    result = None
    for m in _ids_re.finditer(document.text(), 0, block.pos):
        result = m.group(1)
    return result


def id_of_next_element(document, pos, tags=None):
    """Return the (xml_id, tag) of the first element after the line containing ``pos``.

    If ``tags`` is given, only elements with one of those tag names are
    considered. Returns (None, None) if there is no such element.

    """
    tag = '|'.join(map(re.escape, tags)) if tags else r'[^\s/>!?]+'
    pattern = re.compile(
        r'<({})\s(?:[^>]*?\s)?xml:id\s*=\s*["\']([^"\']+)["\']'.format(tag))
    m = pattern.search(document.text(), document.find_block(pos).end + 1)
    if m:
        return m.group(2), m.group(1)
    return None, None
