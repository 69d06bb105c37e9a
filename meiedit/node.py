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
This module defines a :class:`Node` class, to build simple tree structures
based on Python lists.

The document tree of :mod:`meiedit.dom` is built from Node subclasses. Nodes
know their parent (via a weak reference) and their position in the document
order.

"""

import weakref


_NO_PARENT = lambda: None


class Node(list):
    """Node implements a simple tree type, based on Python :class:`list`.

    A node can have child nodes and a :attr:`parent`. The parent is referred
    to with a weak reference, so a tree does not contain circular references.
    Keep a reference to the root node, otherwise the tree is garbage
    collected.

    Adding nodes to a node sets their parent. Use :meth:`remove` or
    :meth:`detach` to take nodes out; they also unset the parent of the
    removed nodes. A node always evaluates to True, even without children.

    Nodes compare by identity, which makes ``parent.index(node)`` robust.

    """

    __slots__ = ('__weakref__', '_parent')

    def __init__(self, *children):
        self._parent = _NO_PARENT
        if children:
            list.extend(self, children)
            for node in self:
                node._parent = weakref.ref(self)

    def __repr__(self):
        c = "child" if len(self) == 1 else "children"
        return '<{} ({} {})>'.format(type(self).__name__, len(self), c)

    def __bool__(self):
        """Always True."""
        return True

    __hash__ = object.__hash__

    def __eq__(self, other):
        return self is other

    def __ne__(self, other):
        return self is not other

    @property
    def parent(self):
        """The parent Node or None; uses a weak reference."""
        return self._parent()

    @parent.setter
    def parent(self, node):
        self._parent = _NO_PARENT if node is None else weakref.ref(node)

    @parent.deleter
    def parent(self):
        self._parent = _NO_PARENT

    def root(self):
        """Return the root node."""
        root = self
        for root in self.ancestors():
            pass
        return root

    def trail(self):
        """Return the list of indices of the node and its ancestors in their
        parents, the node's own index at the end.

        Comparing trails of two nodes in the same tree tells which one comes
        first in the document order: ``a.trail() < b.trail()``.

        """
        trail = []
        n = self
        for p in self.ancestors():
            trail.append(p.index(n))
            n = p
        return trail[::-1]

    def copy(self, with_children=True):
        """Return a copy of this Node.

        If ``with_children`` is True (the default), child nodes are also
        copied.

        """
        children = (n.copy() for n in self) if with_children else ()
        return type(self)(*children)

    def append(self, node):
        """Append node to this node; the parent is set to this node."""
        node._parent = weakref.ref(self)
        list.append(self, node)

    def extend(self, nodes):
        """Append nodes to this node; the parent is set to this node."""
        index = len(self)
        list.extend(self, nodes)
        for node in self[index:]:
            node._parent = weakref.ref(self)

    def insert(self, index, node):
        """Insert node in this node; the parent is set to this node."""
        node._parent = weakref.ref(self)
        list.insert(self, index, node)

    def __setitem__(self, k, new):
        """Set self[k] to the node(s) in ``new``; the parent is set to this Node."""
        if isinstance(k, slice):
            new = tuple(new)
            for node in new:
                node._parent = weakref.ref(self)
        else:
            new._parent = weakref.ref(self)
        list.__setitem__(self, k, new)

    def remove(self, node):
        """Remove the child node and unset its parent.

        Raises ValueError if the node is not a child of this node.

        """
        list.remove(self, node)
        node._parent = _NO_PARENT

    def detach(self):
        """Remove this node from its parent, if any, and return the index it had."""
        parent = self.parent
        if parent is not None:
            index = parent.index(self)
            del parent[index]
            self._parent = _NO_PARENT
            return index

    def equals(self, other):
        """Return True if we and other are equivalent.

        This is the case when both have the same class, the same number of
        children, :meth:`body_equals` returns True, and all the children are
        equivalent as well.

        """
        return type(self) is type(other) and len(self) == len(other) and \
            self.body_equals(other) and \
            all(a.equals(b) for a, b in zip(self, other))

    def body_equals(self, other):
        """Implement this to add more :meth:`equals` tests, before all the
        children are compared.

        The default implementation returns True.

        """
        return True

    def ancestors(self):
        """Yield the parent, then the parent's parent, etcetera."""
        n = self.parent
        while n is not None:
            yield n
            n = n.parent

    def descendants(self, reverse=False):
        """Iterate over all the descendants of this node, in document order.

        If ``reverse`` is set to True, yields all descendants in backward
        direction.

        When you :meth:`~generator.send` False to this generator, child nodes
        of the just yielded node will not be yielded.

        """
        iterate = reversed if reverse else iter
        stack = []
        gen = iterate(self)
        while True:
            for n in gen:
                if (yield n) is not False and len(n):
                    stack.append(gen)
                    gen = iterate(n)
                    break
            else:
                if stack:
                    gen = stack.pop()
                else:
                    break


