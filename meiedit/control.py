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
Operations that add control events: elements like slurs, dynamics, octave
lines and beam spans that are placed at the end of a measure and refer to
the notes they apply to via ``startid``, ``endid`` or ``plist``.

Also the insertion of clef changes.
"""

import logging

from . import edit, sync
from .attributes import (
    CONTROL_END, CONTROL_START, OPTIONAL_END, SPANNING, START_ONLY, WITH_FORM,
    WITH_TEXT)
from .dom import util
from .dom.element import Text
from .locate import locate_element


logger = logging.getLogger(__name__)


def staff_number(element):
    """Return the ``n`` of the staff the element is in, or None."""
    staff = element.closest('staff')
    if staff is not None:
        return staff.get('n')


def insert_in_measure(session, element, start):
    """Append the element to the measure of ``start``, in the tree and the text.

    In the text the element is put on a new line before the closing tag of
    the measure. Raises NotApplicable if ``start`` is not in a measure.

    """
    measure = start.closest('measure')
    if measure is None:
        raise edit.NotApplicable("{} is not inside a measure".format(start.tag))
    measure.append(element)
    r = locate_element(session.buffer, start)
    if r is None or sync.cursor_to_end_of_measure(session.cursor, r[0]) is None:
        logger.info("no text location found for new <%s> %s", element.tag, element.xml_id)
        return
    session.insert(sync.to_string(element) + '\n')


def octave_delta(dis, dis_place, add=True):
    """Return the octave change for notes under an octave line.

    The ``dis`` is the displacement in steps (``8``, ``15``, ``22``), the
    ``dis_place`` is ``"above"`` or ``"below"``. When an octave line is
    added, the written octave of the notes moves in the opposite direction
    of the displacement, when it is removed, in the same direction.

    """
    delta = (int(dis) - 1) // 7
    if dis_place == 'below':
        delta = -delta
    if add:
        delta = -delta
    return delta


def modify_octave_range(session, id1, id2, dis_place, dis, add=True):
    """Change the octave of the notes from ``id1`` to ``id2`` for an octave line.

    All notes in the staves with the same number as the staff of the start
    element, from the start element upto and including the end element, are
    changed. When adding, the original octave is kept in ``oct.ges`` and
    ``oct`` is changed; when removing, ``oct.ges`` is removed and ``oct`` is
    changed back. Returns the list of changed notes.

    """
    document = session.document
    start, end = document.find_id(id1), document.find_id(id2)
    if start is None or end is None:
        logger.warning("octave range: %s or %s not found", id1, id2)
        return []
    number = staff_number(start)
    if number is None:
        return []
    delta = octave_delta(dis, dis_place, add)
    start_trail, end_trail = start.trail(), end.trail()
    changed = []
    for staff in document.iter('staff'):
        if staff.get('n') != number:
            continue
        for note in staff.iter('note'):
            trail = note.trail()
            if trail < start_trail:
                continue
            if trail > end_trail and end not in note.ancestors():
                return changed
            written = note.get('oct')
            if written is None:
                logger.info("octave range: note %s has no octave", note.xml_id)
                continue
            if add:
                note.set('oct.ges', written)
            else:
                note.unset('oct.ges')
            note.set('oct', int(written) + delta)
            session.replace(note)
            changed.append(note)
    return changed


class AddControlElement(edit.Edit):
    """Add a control event referring to the selected notes.

    The ``name`` is the tag name of the new element, e.g. ``slur`` or
    ``dynam``. The ``placement`` becomes the ``curvedir`` of curves, the
    ``order`` of an ``arpeg``, and the ``place`` of other elements. The
    ``form`` becomes the ``form`` attribute of e.g. a hairpin, or the text
    of a ``dir``, ``dynam`` or ``tempo``.

    A slur (or other spanning element) added to a single note ends at the
    next note.

    """
    def __init__(self, name, placement=None, form=None):
        self.name = name
        self.placement = placement
        self.form = form

    def edit_selection(self, session, ids):
        if not ids:
            raise edit.NotApplicable("add {}: nothing selected".format(self.name))
        name = self.name
        buffer = session.buffer
        start = session.element(ids[0])
        if start.tag not in CONTROL_START:
            raise edit.NotApplicable("add {}: cannot start at {}".format(name, start.tag))
        staves = []
        n = staff_number(start)
        if n:
            staves.append(n)

        end_id = None
        if len(ids) == 1 and name in SPANNING:
            r = locate_element(buffer, start)
            if r:
                end_id = sync.id_of_next_element(buffer, r[0], ['note'])[0]
            if not end_id:
                raise edit.NotApplicable("add {}: no end note found".format(name))
        elif len(ids) >= 2:
            end_id = ids[-1]
        if end_id:
            end = session.element(end_id)
            if end is None or end.tag not in CONTROL_END:
                raise edit.NotApplicable("add {}: cannot end at {}".format(
                    name, end.tag if end is not None else end_id))
            n = staff_number(end)
            if n and n not in staves:
                staves.append(n)
        for xml_id in ids[1:-1]:
            n = staff_number(session.element(xml_id))
            if n and n not in staves:
                staves.append(n)

        element = session.new_element(name)
        if name in SPANNING:
            element.set('startid', '#' + start.xml_id)
            element.set('endid', '#' + end_id)
        elif name in START_ONLY:
            element.set('startid', '#' + start.xml_id)
        if end_id and name in OPTIONAL_END:
            element.set('endid', '#' + end_id)
            if name == 'trill':
                element.set('extender', 'true')
        if staves:
            element.set('staff', ' '.join(sorted(staves, key=util.numeric_key)))
        if self.form and name in WITH_FORM:
            element.set('form', self.form)
        if self.placement:
            if name == 'pedal':
                element.set('dir', self.placement)
                element.set('vgrp', '100')
            if name in ('slur', 'tie', 'phrase'):
                element.set('curvedir', self.placement)
            elif name == 'arpeg':
                element.set('order', self.placement)
            else:
                element.set('place', self.placement)
        if name == 'arpeg':
            element.set('plist', ' '.join('#' + i for i in ids))
        if self.form and name in WITH_TEXT:
            element.append(Text(self.form))

        insert_in_measure(session, element, start)
        session.last_note_id = start.xml_id
        session.selection = [element.xml_id]
        return element


class AddClefChange(edit.Edit):
    """Insert a clef before (or after) the first selected element.

    A note in a chord is replaced by its chord.

    """
    def __init__(self, shape='G', line='2', before=True):
        self.shape = shape
        self.line = line
        self.before = before

    def edit_selection(self, session, ids):
        if not ids:
            raise edit.NotApplicable("add clef: nothing selected")
        element = util.chord_or_self(session.element(ids[0]))
        parent = element.parent
        clef = session.new_element('clef', attrib={'shape': self.shape, 'line': self.line})
        index = parent.index(element)
        if self.before:
            parent.insert(index, clef)
            found = sync.cursor_to_id(session.cursor, element.xml_id) is not None
            text = sync.to_string(clef) + '\n'
        else:
            parent.insert(index + 1, clef)
            found = sync.cursor_after_element(session.cursor, element.tag, element.xml_id) is not None
            text = '\n' + sync.to_string(clef)
        if found:
            session.insert(text)
        else:
            logger.info("add clef: no text found for %s", element.xml_id)
        session.selection = [clef.xml_id]
        session.last_note_id = clef.xml_id
        return clef


class AddBeamSpan(edit.Edit):
    """Add a beamSpan from the first to the last selected element.

    Notes in chords are replaced by their chords.

    """
    def edit_selection(self, session, ids):
        elements = []
        for element in self.elements(session, ids):
            element = util.chord_or_self(element)
            if not any(element is e for e in elements):
                elements.append(element)
        if not elements:
            raise edit.NotApplicable("add beamSpan: nothing selected")
        elements = util.document_order(elements)
        id1, id2 = elements[0].xml_id, elements[-1].xml_id
        beam_span = session.new_element('beamSpan', attrib={
            'startid': '#' + id1,
            'endid': '#' + id2,
            'plist': ' '.join('#' + e.xml_id for e in elements),
        })
        insert_in_measure(session, beam_span, elements[0])
        session.selection = [beam_span.xml_id]
        session.last_note_id = id2
        return beam_span


class AddOctave(edit.Edit):
    """Add an octave line from the first to the last selected element.

    The notes in range get their original octave in ``oct.ges`` and their
    written ``oct`` changed.

    """
    def __init__(self, dis_place='above', dis='8'):
        self.dis_place = dis_place
        self.dis = dis

    def edit_selection(self, session, ids):
        if not ids:
            raise edit.NotApplicable("add octave: nothing selected")
        id1, id2 = ids[0], ids[-1]
        start = session.element(id1)
        octave = session.new_element('octave', attrib={
            'startid': '#' + id1,
            'endid': '#' + id2,
            'dis': self.dis,
            'dis.place': self.dis_place,
        })
        insert_in_measure(session, octave, start)
        modify_octave_range(session, id1, id2, self.dis_place, self.dis)
        session.selection = [octave.xml_id]
        session.last_note_id = id2
        return octave


def add_control_element(session, name, placement=None, form=None):
    """Convenience function to add a control event to the selection."""
    return AddControlElement(name, placement, form).edit(session)


def add_clef_change(session, shape='G', line='2', before=True):
    """Convenience function to insert a clef change at the selection."""
    return AddClefChange(shape, line, before).edit(session)


def add_beam_span(session):
    """Convenience function to add a beamSpan to the selection."""
    return AddBeamSpan().edit(session)


def add_octave(session, dis_place='above', dis='8'):
    """Convenience function to add an octave line to the selection."""
    return AddOctave(dis_place, dis).edit(session)
