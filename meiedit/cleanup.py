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
Tidying operations on the whole music: removing superfluous gestural
accidentals and numbering the measures.

These operations don't use the selection. Only the opening tags of the
changed elements are rewritten in the text.

"""

import collections
import logging

from . import edit, sync
from .dom import util


logger = logging.getLogger(__name__)


#: One measure in the result of :func:`renumber_measures`.
MeasureNumber = collections.namedtuple("MeasureNumber", "measure old new")
MeasureNumber.measure.__doc__ = "The measure element."
MeasureNumber.old.__doc__ = "The ``n`` the measure had (None if it had none)."
MeasureNumber.new.__doc__ = "The ``n`` the measure gets."


def write_heads(session, elements):
    """Bring the text of the elements whose attributes changed in sync.

    Elements with an ``xml:id`` get their opening tag rewritten; for others
    the closest ancestor with an id is written out in full, or the whole
    root element if there is none.

    """
    others = []
    for element in elements:
        if element.xml_id is not None:
            sync.replace_head(session.buffer, element)
        else:
            others.append(element)
    if any(util.identified(e) is None for e in others):
        sync.replace_single(session.cursor, session.document.root_element, indenter=session.indenter)
        return
    for node in util.outermost_identified(others):
        session.replace(node)


def superfluous_accid_ges(element):
    """Return True if the ``accid.ges`` of the element says nothing new.

    That is the case when the element has an ``accid`` with the same value,
    or, for a note, an ``accid`` child element with that value.

    """
    value = element.get('accid.ges')
    if value is None:
        return False
    if element.get('accid') == value:
        return True
    if element.tag == 'note':
        return any(child.get('accid') == value and not child.has('accid.ges')
                   for child in element.elements('accid'))
    return False


class CleanAccid(edit.Edit):
    """Remove the ``accid.ges`` attributes that repeat the written accidental."""
    reload = True

    def edit_selection(self, session, ids):
        changed = []
        for element in session.document.iter('note', 'accid'):
            if superfluous_accid_ges(element):
                element.unset('accid.ges')
                changed.append(element)
        write_heads(session, changed)
        session.alert("{} superfluous accid.ges attributes removed.".format(len(changed)),
                      'success' if changed else 'info')
        return changed


class RenumberMeasures(edit.Edit):
    """Number all measures consecutively, starting with ``start``.

    * A first measure with ``metcon="false"`` is a pickup and gets number
      ``start - 1``.
    * An incomplete measure that directly follows an incomplete measure
      completes it, and gets the same number.
    * A measure containing a ``multiRest`` counts for the number of measures
      in its ``num`` attribute.

    If ``change`` is False, nothing is changed, but the result tells which
    measures would get another number.

    """
    reload = True

    def __init__(self, change=False, start=1):
        self.change = change
        self.start = start

    def numbers(self, document):
        """Yield a :class:`MeasureNumber` for every measure in the document."""
        number = self.start
        previous = None     # the last incomplete measure's number, if any
        for i, measure in enumerate(document.iter('measure')):
            incomplete = measure.get('metcon') == 'false'
            if incomplete and i == 0:
                n = self.start - 1
                previous = None
            elif incomplete and previous is not None:
                n = previous
                previous = None
            else:
                n = number
                rest = measure.find('multiRest')
                try:
                    count = int(rest.get('num', '1')) if rest is not None else 1
                except ValueError:
                    logger.warning("renumber measures: invalid multiRest num in %s", measure.xml_id)
                    count = 1
                number += max(count, 1)
                previous = n if incomplete else None
            yield MeasureNumber(measure, measure.get('n'), str(n))

    def edit_selection(self, session, ids):
        result = [m for m in self.numbers(session.document) if m.old != m.new]
        if self.change:
            for m in result:
                m.measure.set('n', m.new)
            write_heads(session, [m.measure for m in result])
            session.reload_facsimile()
            message = "{} measures renumbered.".format(len(result))
        else:
            message = "{} measures would be renumbered.".format(len(result))
        session.alert(message, 'success' if self.change and result else 'info')
        return result


def clean_accid(session):
    """Convenience function to remove superfluous ``accid.ges`` attributes.

    Returns the list of changed elements.

    """
    return CleanAccid().edit(session)


def renumber_measures(session, change=False, start=1):
    """Convenience function to renumber the measures.

    Returns the list of :class:`MeasureNumber` tuples for the measures whose
    number differs (or differed) from the new one.

    """
    return RenumberMeasures(change, start).edit(session)
