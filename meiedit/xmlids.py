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
Add missing ``xml:id`` attributes to the music, or remove the ones that are
not referred to.
"""

import collections
import logging
import time

from . import edit
from .attributes import URI_ATTRIBUTES
from .dom import util
from .dom.element import XML_ID


logger = logging.getLogger(__name__)


#: The result of :func:`manipulate_xml_ids`.
IdReport = collections.namedtuple("IdReport", "added removed kept seconds")


def referenced_ids(document):
    """Return the set of ids referred to by a URI attribute anywhere in the document."""
    refs = set()
    for element in document.iter():
        for name in URI_ATTRIBUTES:
            value = element.get(name)
            if value:
                refs.update(util.id_refs(value))
    return refs


def music_roots(document):
    """Yield the ``mdiv`` elements that are a child of a ``body``."""
    for body in document.iter('body'):
        yield from body.elements('mdiv')


class ManipulateXmlIds(edit.Edit):
    """Add ids to all elements in the music that lack one, or remove ids.

    When removing, ids that are referred to by an attribute like
    ``startid`` or ``facs`` are kept. Only the elements in ``body/mdiv`` are
    handled. The text is rewritten from the document.

    """
    reload = True

    def __init__(self, remove=False):
        self.remove = remove

    def edit_selection(self, session, ids):
        start = time.perf_counter()
        document = session.document
        keep = referenced_ids(document) if self.remove else set()
        added = removed = kept = 0
        for root in music_roots(document):
            for element in [root] + list(root.iter()):
                xml_id = element.xml_id
                if not self.remove:
                    if xml_id is None:
                        element.set(XML_ID, session.ids.generate(element.tag))
                        added += 1
                elif xml_id is not None:
                    if xml_id in keep:
                        kept += 1
                    else:
                        element.unset(XML_ID)
                        removed += 1
        document.invalidate()
        session.buffer.set_text(document.write())
        report = IdReport(added, removed, kept, time.perf_counter() - start)
        if self.remove:
            message = ("{} xml:ids removed from encoding, {} xml:ids kept, "
                       "because they are pointed to.".format(removed, kept))
        else:
            message = "{} new xml:ids added to encoding".format(added)
            if added:
                message += " (xml:id style: {})".format(session.ids.style)
            message += "."
        message += " (Processing time: {:.3f} s)".format(report.seconds)
        session.alert(message, 'success')
        return report


def manipulate_xml_ids(session, remove=False):
    """Add missing xml:ids (or remove unreferenced ones), and return an :class:`IdReport`."""
    return ManipulateXmlIds(remove).edit(session)
