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
The editing session: a text buffer, the DOM document parsed from it, the
selection and the preferences, bundled in one object.

The :class:`Session` replaces the global state an editor would otherwise
keep. All edit operations (see :mod:`.edit`) receive the session as their
argument.

Example::

    >>> from meiedit.session import Session
    >>> from meiedit.pitch import shift_pitch
    >>> s = Session(text)
    >>> s.selection = ['note-0000000001']
    >>> shift_pitch(s, 1)
    >>> s.buffer.text()

"""

import contextlib
import datetime
import logging

from lxml import etree
import parce

from . import appinfo, facsimile, sync
from .dom import read, util
from .dom.element import Element
from .edit import NotApplicable
from .ids import IdGenerator
from .settings import Settings


logger = logging.getLogger(__name__)


class Session:
    """An editing session on the text of an MEI document.

    ``text`` is the initial text, ``settings`` a :class:`~.settings.Settings`
    instance (a default one is created if not given).

    ``alert`` is an optional callable that is called with a message and a
    severity string (``"info"``, ``"success"``, ``"warning"`` or
    ``"error"``) for messages the user should see.

    ``renderer`` is an optional callable that is called with the session
    when the notation needs to be rendered again, once after every edit that
    changed the text.

    ``clock`` is a callable returning the current :class:`datetime.datetime`,
    by default :meth:`datetime.datetime.now`.

    """
    def __init__(self, text='', settings=None, alert=None, renderer=None, clock=None):
        #: The :class:`~.settings.Settings`.
        self.settings = settings or Settings()
        #: The :class:`parce.Document` holding the text.
        self.buffer = parce.Document(None, text)
        #: The main :class:`parce.Cursor`.
        self.cursor = parce.Cursor(self.buffer)
        #: The :class:`~.indent.Indenter` for changed lines.
        self.indenter = self.settings.indenter()
        #: The :class:`~.ids.IdGenerator`.
        self.ids = IdGenerator(self.settings.xml_id_style)
        #: The DOM :class:`~.dom.element.Document`, None until loaded.
        self.document = None
        #: The list of selected ids.
        self.selection = []
        #: The facsimile zone index, see :func:`.facsimile.load_facsimile`.
        self.facsimile = {}
        #: False while an edit is in progress.
        self.update_notation = True
        #: True when the document changed since it was last written out in full.
        self.xml_doc_outdated = False
        #: True when the notation needs to be rendered again.
        self.notation_outdated = False
        #: The id of the note most recently edited.
        self.last_note_id = None
        self.clock = clock or datetime.datetime.now
        self._alert = alert
        self._renderer = renderer
        self._source = None     # text the document was read from
        self._depth = 0         # nesting level of edit scopes

    def __repr__(self):
        return '<{} {!r} selection={}>'.format(type(self).__name__, self.buffer, self.selection)

    def alert(self, message, severity='info'):
        """Log the message and send it to the alert function, if any."""
        level = logging.WARNING if severity in ('warning', 'error') else logging.INFO
        logger.log(level, message)
        if self._alert:
            self._alert(message, severity)

    def load_xml(self, force=False):
        """Parse the text into the DOM document, if needed, and return it.

        The text is parsed when it changed since it was last parsed, or when
        ``force`` is True. Inside a nested edit scope the current document
        is kept. Raises :exc:`~.edit.NotApplicable` (with severity
        ``"error"``) when the text is not well-formed XML.

        """
        if self.document is not None and self._depth > 1:
            return self.document
        text = self.buffer.text()
        if force or self.document is None or self._source != text:
            try:
                self.document = read.document(text)
            except etree.XMLSyntaxError as e:
                raise NotApplicable("The text is not well-formed XML: {}".format(e), 'error') from e
            self._source = text
            self.ids.refresh(self.document)
            self.xml_doc_outdated = False
        return self.document

    def reload_facsimile(self):
        """Rebuild the facsimile zone index from the document."""
        self.facsimile = facsimile.load_facsimile(self.document) if self.document else {}
        return self.facsimile

    def element(self, xml_id):
        """Return the element with the id, or None."""
        if self.document is not None:
            return self.document.find_id(xml_id)

    def filter_ids(self, ids):
        """Return the ids that exist in the document, in the same order."""
        result = []
        for xml_id in ids:
            if self.element(xml_id) is None:
                logger.warning("no element with xml:id %r in the document", xml_id)
            else:
                result.append(xml_id)
        return result

    def normalized_selection(self):
        """Return the selected ids that exist in the document, in document order."""
        nodes = [self.element(xml_id) for xml_id in self.filter_ids(self.selection)]
        return [n.xml_id for n in util.document_order(nodes)]

    def new_element(self, tag, *children, attrib=None):
        """Return a new Element with a freshly generated ``xml:id``."""
        attributes = {'xml:id': self.ids.generate(tag)}
        if attrib:
            attributes.update(attrib)
        return Element(tag, *children, attrib=attributes)

    def replace(self, node, select=False, new_node=None):
        """Replace the text of the node, see :func:`.sync.replace`."""
        return sync.replace(self.cursor, node, select, new_node, self.indenter)

    def remove(self, node):
        """Remove the text of the node, see :func:`.sync.remove`."""
        return sync.remove(self.buffer, node)

    def insert(self, text):
        """Insert text at the cursor, see :func:`.sync.insert`."""
        return sync.insert(self.cursor, text, self.indenter)

    @contextlib.contextmanager
    def edit(self, stamp=True):
        """Return a context manager for a scope in which edits are made.

        During the scope :attr:`update_notation` is False. When the outermost
        scope is left and the text changed, the edit is stamped in the header
        (if ``stamp`` is True and the preferences want it), the document is
        marked outdated and the renderer is called, once. This happens on
        every exit path; :attr:`update_notation` is always restored.

        A :exc:`~.edit.NotApplicable` exception raised in the scope is caught
        by the outermost scope, logged, and sent to the alert function if it
        has a severity. Other exceptions propagate.

        Scopes can be nested; only the outermost scope finishes the edit.

        """
        outermost = not self._depth
        if outermost:
            start = self.buffer.text()
            self.update_notation = False
        self._depth += 1
        try:
            yield self
        except NotApplicable as e:
            if not outermost:
                raise
            logger.info("not applicable: %s", e)
            if e.severity:
                self.alert(str(e), e.severity)
            self._finish(start, stamp)
        except Exception:
            if outermost:
                self._finish(start, False)
            raise
        else:
            if outermost:
                self._finish(start, stamp)
        finally:
            self._depth -= 1
            if outermost:
                self.update_notation = True

    def _finish(self, start, stamp):
        """Called when the outermost edit scope ends."""
        if self.buffer.text() == start:
            return
        in_sync = self.document is not None and self._source == start
        if stamp and in_sync:
            appinfo.add_application_info(self)
        if in_sync:
            # the document was changed along with the text
            self._source = self.buffer.text()
        self.xml_doc_outdated = True
        self.notation_outdated = True
        if self._renderer:
            self._renderer(self)
