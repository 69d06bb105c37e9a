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
This module defines the :class:`Element` class and its relatives.

An Element has a tag name, an ordered mapping of attributes and child nodes.
Child nodes are Elements, :class:`Text`, :class:`Comment` or
:class:`ProcessingInstruction` nodes. The :class:`Document` is the root node;
it knows the XML declaration and keeps an index of the ``xml:id`` values in
the tree.

You can specify all child elements in the constructor, so it is possible to
build a document fragment in one expression::

    >>> from meiedit.dom.element import Element, Text
    >>> e = Element('chord', Element('note', attrib={'pname': 'c'}),
    ...                      Element('note', attrib={'pname': 'e'}))
    >>> e.write()
    '<chord><note pname="c"/><note pname="e"/></chord>'

"""

import reprlib

from ..node import Node


#: The attribute name of the element identifier.
XML_ID = 'xml:id'


def escape(text):
    """Escape text for use in element content."""
    return text.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')


def escape_attribute(text):
    """Escape text for use in a double-quoted attribute value."""
    return escape(text).replace('"', '&quot;')


class Leaf(Node):
    """Base class for nodes that only contain a piece of text."""
    __slots__ = ('text',)

    def __init__(self, text=''):
        super().__init__()
        self.text = text

    def __repr__(self):
        return '<{} {}>'.format(type(self).__name__, reprlib.repr(self.text))

    def body_equals(self, other):
        return self.text == other.text

    def copy(self, with_children=True):
        return type(self)(self.text)


class Text(Leaf):
    """Character data."""
    __slots__ = ()

    def write(self):
        return escape(self.text)


class Comment(Leaf):
    """An XML comment."""
    __slots__ = ()

    def write(self):
        return '<!--{}-->'.format(self.text)


class ProcessingInstruction(Leaf):
    """An XML processing instruction, such as ``<?xml-model ...?>``."""
    __slots__ = ('target',)

    def __init__(self, target, text=''):
        super().__init__(text)
        self.target = target

    def __repr__(self):
        return '<{} {} {}>'.format(type(self).__name__, self.target, reprlib.repr(self.text))

    def body_equals(self, other):
        return self.target == other.target and self.text == other.text

    def copy(self, with_children=True):
        return type(self)(self.target, self.text)

    def write(self):
        if self.text:
            return '<?{} {}?>'.format(self.target, self.text)
        return '<?{}?>'.format(self.target)


class Element(Node):
    """An XML element.

    The ``tag`` is the qualified tag name as written in the source. The
    attributes are in the ``attrib`` dictionary, which keeps the order in
    which they were read or added. All attribute values are strings.

    """
    __slots__ = ('tag', 'attrib')

    def __init__(self, tag, *children, attrib=None):
        super().__init__(*children)
        self.tag = tag
        self.attrib = dict(attrib) if attrib else {}

    def __repr__(self):
        ident = self.xml_id
        c = "child" if len(self) == 1 else "children"
        return '<{} {}{} ({} {})>'.format(type(self).__name__, self.tag,
            ' #' + ident if ident else '', len(self), c)

    def body_equals(self, other):
        return self.tag == other.tag and self.attrib == other.attrib

    def copy(self, with_children=True):
        """Return a copy of this Element, including the attributes."""
        children = (n.copy() for n in self) if with_children else ()
        return type(self)(self.tag, *children, attrib=self.attrib)

    def get(self, name, default=None):
        """Return the value of the attribute, or ``default``."""
        return self.attrib.get(name, default)

    def set(self, name, value):
        """Set the attribute; the value is converted to a string."""
        self.attrib[name] = str(value)

    def has(self, name):
        """Return True if the attribute is set."""
        return name in self.attrib

    def unset(self, name):
        """Remove the attribute if it exists. Return the old value or None."""
        return self.attrib.pop(name, None)

    @property
    def xml_id(self):
        """The ``xml:id`` attribute, or None."""
        return self.attrib.get(XML_ID)

    @xml_id.setter
    def xml_id(self, value):
        if value is None:
            self.attrib.pop(XML_ID, None)
        else:
            self.attrib[XML_ID] = value

    def elements(self, *tags):
        """Return the child elements, optionally only those with a tag in ``tags``."""
        return [n for n in self if isinstance(n, Element) and (not tags or n.tag in tags)]

    def iter(self, *tags):
        """Iterate over the descendant elements in document order.

        If ``tags`` are given, only elements with one of those tag names are
        yielded.

        """
        for n in self.descendants():
            if isinstance(n, Element) and (not tags or n.tag in tags):
                yield n

    def find(self, *tags):
        """Return the first descendant element with one of the tags, or None."""
        for n in self.iter(*tags):
            return n

    def closest(self, *tags):
        """Return this element or the nearest ancestor with one of the tags, or None."""
        if self.tag in tags:
            return self
        for n in self.ancestors():
            if isinstance(n, Element) and n.tag in tags:
                return n

    def text_content(self):
        """Return the concatenated text of all descendant Text nodes."""
        return ''.join(n.text for n in self.descendants() if isinstance(n, Text))

    def write_head(self):
        """Return the opening tag, without the closing ``>`` or ``/>``."""
        attrs = ''.join(' {}="{}"'.format(name, escape_attribute(value))
                        for name, value in self.attrib.items())
        return '<' + self.tag + attrs

    def write(self):
        """Return the XML text of this element and its children."""
        head = self.write_head()
        if not len(self):
            return head + '/>'
        return ''.join((head, '>', ''.join(n.write() for n in self), '</', self.tag, '>'))


class Document(Node):
    """The root node of a DOM document.

    The children are the top-level nodes: usually some processing
    instructions and comments, and the root element. The ``declaration`` is
    the XML declaration text, if the document had one.

    The Document keeps an index of the ``xml:id`` values of its elements, see
    :meth:`find_id`.

    """
    __slots__ = ('declaration', '_ids')

    def __init__(self, *children, declaration=None):
        super().__init__(*children)
        self.declaration = declaration
        self._ids = None

    def body_equals(self, other):
        return self.declaration == other.declaration

    def copy(self, with_children=True):
        children = (n.copy() for n in self) if with_children else ()
        return type(self)(*children, declaration=self.declaration)

    @property
    def root_element(self):
        """The root element, or None."""
        for n in self:
            if isinstance(n, Element):
                return n

    def iter(self, *tags):
        """Iterate over all elements in document order, see :meth:`Element.iter`."""
        for n in self.descendants():
            if isinstance(n, Element) and (not tags or n.tag in tags):
                yield n

    def find(self, *tags):
        """Return the first element with one of the tags, or None."""
        for n in self.iter(*tags):
            return n

    def ids(self):
        """Return a dictionary mapping all ``xml:id`` values to their elements.

        If an id appears more than once, the first element is used.

        """
        index = {}
        for n in self.iter():
            ident = n.xml_id
            if ident is not None:
                index.setdefault(ident, n)
        return index

    def invalidate(self):
        """Forget the id index; it is rebuilt on the next :meth:`find_id` call."""
        self._ids = None

    def find_id(self, xml_id):
        """Return the element with the ``xml:id``, or None.

        The index is built lazily. A hit is verified (the element must still
        carry that id and belong to this document); if the index turns out to
        be stale, it is rebuilt.

        """
        if xml_id is None:
            return
        if self._ids is not None:
            node = self._ids.get(xml_id)
            if node is not None and node.xml_id == xml_id and node.root() is self:
                return node
        self._ids = self.ids()
        return self._ids.get(xml_id)

    def write(self):
        """Return the XML text of the full document."""
        parts = [n.write() for n in self]
        if self.declaration:
            parts.insert(0, self.declaration)
        return '\n'.join(parts) + '\n'
