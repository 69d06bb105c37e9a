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
Find the text of an element in a :class:`parce.Document`.

An element is searched for by its tag name and ``xml:id``. First a
self-closing occurrence is searched for (``<note xml:id="n1"/>``), and if
there is none, the opening tag of a full occurrence, after which the
matching closing tag is found by counting nested elements with the same tag
name. The attribute order does not matter, and both quote styles are
recognized. The first occurrence in the text wins.

When no id is given, the first occurrence of the tag is found. This is
meant for elements that occur only once in a document.

"""

import functools
import logging
import re

from . import buffer


logger = logging.getLogger(__name__)


def _id_check(xml_id):
    """Return the pattern part that matches the xml:id attribute after the tag name."""
    if xml_id is None:
        return r'(?=[\s/>])'
    return r'\s(?:[^>]*?\s)?xml:id\s*=\s*(["\']){}\1'.format(re.escape(xml_id))


@functools.lru_cache(maxsize=256)
def _patterns(tag, xml_id):
    """Return the (self-closing, open tag, tag scanner) regular expressions."""
    t = re.escape(tag)
    check = _id_check(xml_id)
    self_closing = re.compile(r'<{}{}[^>]*?/>'.format(t, check))
    open_tag = re.compile(r'<{}{}[^>]*?(?<!/)>'.format(t, check))
    scanner = re.compile(
        r'<!--.*?-->|<!\[CDATA\[.*?\]\]>|<(/?){}(?=[\s/>])[^>]*?(/?)>'.format(t), re.S)
    return self_closing, open_tag, scanner


def locate_range(document, tag, xml_id=None):
    """Return the (pos, end) offsets of the element's text, or None.

    None is also returned when the opening tag is found but its closing tag
    is missing.

    """
    self_closing, open_tag, scanner = _patterns(tag, xml_id)
    text = document.text()
    m = self_closing.search(text)
    if m:
        return m.start(), m.end()
    m = open_tag.search(text)
    if not m:
        return None
    pos = m.start()
    depth = 1
    for m in scanner.finditer(text, m.end()):
        if m.group(1) is None or m.group(2):
            continue    # comment, CDATA or self-closing element
        elif m.group(1):
            depth -= 1
            if not depth:
                return pos, m.end()
        else:
            depth += 1


def locate(document, tag, xml_id=None):
    """Return the :class:`~.buffer.Span` of the element's text, or None."""
    r = locate_range(document, tag, xml_id)
    if r:
        return buffer.span(document, *r)


def locate_element(document, element):
    """Return the (pos, end) offsets of the text of the Element, or None.

    An element without ``xml:id`` can't be told apart from others with the
    same tag name, so None is returned for it. Use :func:`locate_range` with
    only the tag name for elements that occur once, like ``meiHead``.

    """
    if element.xml_id is None:
        logger.info("can't locate <%s> without xml:id", element.tag)
        return None
    return locate_range(document, element.tag, element.xml_id)
