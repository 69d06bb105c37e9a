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
Generate unique ``xml:id`` values for new elements.

Three naming styles are available:

``"Original"``
    the tag name and a counter, e.g. ``note-0000000001``

``"Verovio"``
    the first letter of the tag name and seven random base-36 characters,
    e.g. ``n1l4sv6a``

``"UUID"``
    the tag name and a random UUID, e.g.
    ``note-1b4e28ba-2fa1-11d2-883f-0016d3cca427``

The style is only cosmetic; in all styles an id is never returned twice by
the same generator and never equals an id that is present in the document
the generator knows of.

"""

import random
import string
import uuid


#: The available id styles.
STYLES = ('Original', 'Verovio', 'UUID')

_BASE36 = string.digits + string.ascii_lowercase


class IdGenerator:
    """Generates ids that are unique within a document.

    Call :meth:`refresh` with a DOM document to make the generator aware of
    the ids in it (this is also done on construction if a document is
    given). Every id the generator returns is remembered, so it is never
    returned again, even after the element carrying it was deleted.

    """
    def __init__(self, style='Original', document=None, seed=None):
        if style not in STYLES:
            raise ValueError("unknown xml:id style: {!r}".format(style))
        #: The default style.
        self.style = style
        #: The set of ids this generator returned (or that were reserved).
        self.issued = set()
        self._known = set()
        self._counters = {}
        self._random = random.Random(seed)
        if document is not None:
            self.refresh(document)

    def refresh(self, document):
        """Learn the ids that are present in the DOM document."""
        self._known = set(document.ids())

    def reserve(self, xml_id):
        """Mark an id, created elsewhere, as being in use."""
        self.issued.add(xml_id)

    def is_taken(self, xml_id):
        """Return True if the id is in use or has been used."""
        return xml_id in self.issued or xml_id in self._known

    def generate(self, tag, style=None):
        """Return a new unique id for an element with the tag name.

        If ``style`` is not given, the default :attr:`style` is used.

        """
        style = style or self.style
        if style == 'Verovio':
            make = self._verovio
        elif style == 'UUID':
            make = self._uuid
        elif style == 'Original':
            make = self._original
        else:
            raise ValueError("unknown xml:id style: {!r}".format(style))
        while True:
            xml_id = make(tag)
            if not self.is_taken(xml_id):
                self.issued.add(xml_id)
                return xml_id

    def _original(self, tag):
        n = self._counters.get(tag, 0) + 1
        self._counters[tag] = n
        return '{}-{:010d}'.format(tag, n)

    def _verovio(self, tag):
        return tag[:1] + ''.join(self._random.choice(_BASE36) for _ in range(7))

    def _uuid(self, tag):
        return '{}-{}'.format(tag, uuid.UUID(int=self._random.getrandbits(128), version=4))
