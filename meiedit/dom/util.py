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
Some utility functions.
"""

from . import element


def rm_hash(ref):
    """Return the id reference without leading ``#``."""
    return ref[1:] if ref.startswith('#') else ref


def id_refs(value):
    """Return a list of the ids in a whitespace-separated reference list.

    Leading ``#`` characters are removed::

        >>> id_refs('#n1 #n2  n3')
        ['n1', 'n2', 'n3']

    """
    return [rm_hash(ref) for ref in value.split()]


def document_order(nodes):
    """Return a list with the nodes sorted in document order.

    All nodes must belong to the same tree.

    """
    return sorted(nodes, key=lambda n: n.trail())


def chord_or_self(node):
    """Return the enclosing ``chord`` if the node is a note in a chord, else the node.

    A chord without ``xml:id`` is never returned.

    """
    if node.tag == 'note':
        parent = node.parent
        if (isinstance(parent, element.Element) and parent.tag == 'chord'
                and parent.xml_id is not None):
            return parent
    return node


def identified(node):
    """Return the node if it has an ``xml:id``, else its closest ancestor with one.

    Returns None if there is no such element.

    """
    if isinstance(node, element.Element) and node.xml_id is not None:
        return node
    for n in node.ancestors():
        if isinstance(n, element.Element) and n.xml_id is not None:
            return n


def unique(nodes):
    """Return the list of nodes without duplicates and without None, in the same order."""
    result = []
    for n in nodes:
        if n is not None and n not in result:
            result.append(n)
    return result


def outermost_identified(nodes):
    """Return the elements whose text to replace after the nodes changed.

    Every node is substituted by :func:`identified`, and elements inside
    another element of the result are left out.

    """
    result = unique(map(identified, nodes))
    return [n for n in result if not any(a in result for a in n.ancestors())]


def numeric_key(value):
    """Sort key for numbers stored in attributes, ``'10'`` sorts after ``'9'``."""
    try:
        return (0, int(value), '')
    except (TypeError, ValueError):
        return (1, 0, str(value))


def first_child_element(node, tag):
    """Return the first child element with the tag, or None."""
    for n in node.elements(tag):
        return n


def strip_whitespace(node):
    """Return a copy of the node without the whitespace-only Text nodes.

    This is useful to compare trees that only differ in indenting.

    """
    copy = node.copy(False)
    for n in node:
        if isinstance(n, element.Text):
            if n.text.strip():
                copy.append(element.Text(n.text.strip()))
        else:
            copy.append(strip_whitespace(n) if len(n) else n.copy())
    return copy


def is_blank(text):
    """Return True if the text only consists of whitespace."""
    return not text.strip()
