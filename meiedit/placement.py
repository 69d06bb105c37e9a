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
Operations that change where things are drawn: the placement of
directions and articulations, curve and stem directions, the staff notes
are drawn on, and vertical alignment groups.
"""

import logging

from . import edit
from .attributes import (
    CURVATURE, DATA_PLACEMENT, PLACEMENT, STAFF_MOVABLE, STEMS, VERTICAL_GROUP)
from .dom import util


logger = logging.getLogger(__name__)


def staff_numbers_for_group(document, element):
    """Return the staff numbers of the staff group the element is in.

    The staff of the element is the staff of its start element (if it has
    a ``startid``), or the first staff in its ``staff`` attribute. The staff
    numbers of all the staff definitions in the closest ``staffGrp`` of that
    staff's definition are returned, sorted numerically. An empty list is
    returned if the staff or group can't be determined.

    """
    number = None
    if element.has('startid'):
        start = document.find_id(util.rm_hash(element.get('startid')))
        if start is not None:
            staff = start.closest('staff')
            if staff is not None:
                number = staff.get('n')
    elif element.has('staff'):
        number = element.get('staff').split()[0]
    if number is None:
        return []
    score_def = document.find('scoreDef')
    if score_def is None:
        return []
    for staff_def in score_def.iter('staffDef'):
        if staff_def.get('n') == number:
            group = staff_def.closest('staffGrp')
            if group is not None:
                numbers = [s.get('n') for s in group.iter('staffDef') if s.has('n')]
                return sorted(numbers, key=util.numeric_key)
            break
    return []


def _toggle(element, name, first, second):
    """Set the attribute to ``second`` if it is ``first``, otherwise to ``first``."""
    element.set(name, second if element.get(name) == first else first)


class InvertPlacement(edit.Edit):
    """Invert the placement of the selected elements.

    * Elements with a ``place`` attribute go from above to below and back.
      With the ``modifier``, elements in a staff group with two staves go
      from above or below to between the staves (and back to above).
      A fermata below gets ``form="inv"``.
    * Slurs, ties, phrases etc. get their ``curvedir`` inverted.
    * Notes and chords get their ``stem.dir`` inverted; a selected note in
      a chord inverts the chord.
    * Tuplets get their ``num.place`` inverted.
    * The notes in the ``plist`` of a beamSpan get their stems inverted.
    * Otherwise all the notes and chords in the element get their stems
      inverted.

    """
    def __init__(self, modifier=False):
        self.modifier = modifier

    def edit_selection(self, session, ids):
        document = session.document
        span = None
        for element in self.elements(session, ids):
            if element.tag == 'note':
                element = util.chord_or_self(element)
            if element.tag in PLACEMENT:
                self.invert_place(session, element)
                span = session.replace(element, True)
            elif element.tag in CURVATURE:
                _toggle(element, 'curvedir', 'above', 'below')
                span = session.replace(element, True)
            elif element.tag in STEMS:
                _toggle(element, 'stem.dir', 'up', 'down')
                span = session.replace(element, True)
            elif element.tag == 'tuplet':
                _toggle(element, 'num.place', 'above', 'below')
                span = session.replace(element, True)
            elif element.tag == 'beamSpan':
                for ref in util.id_refs(element.get('plist', '')):
                    note = document.find_id(ref)
                    if note is None:
                        logger.warning("invert placement: plist reference %r not found", ref)
                        continue
                    note = util.chord_or_self(note)
                    _toggle(note, 'stem.dir', 'up', 'down')
                    span = session.replace(note, True)
            else:
                notes = util.unique(util.chord_or_self(n) for n in element.iter('note'))
                if not notes:
                    logger.info("invert placement: %s contains no elements to invert", element.tag)
                for note in notes:
                    _toggle(note, 'stem.dir', 'up', 'down')
                for node in util.outermost_identified(notes):
                    span = session.replace(node, True)
        if span:
            session.cursor.select(session.cursor.end)
        session.selection = ids
        return span

    def invert_place(self, session, element):
        """Compute and set the new ``place`` attribute of the element."""
        place = element.get('place')
        if place == 'between' and element.has('staff'):
            element.set('staff', element.get('staff').split()[0])
        value = 'below' if place in DATA_PLACEMENT and place != 'below' else 'above'
        if self.modifier:
            staves = staff_numbers_for_group(session.document, element)
            if len(staves) == 2:
                if place in ('above', 'below'):
                    value = 'between'
                    element.set('staff', ' '.join(staves))
                elif place is not None:
                    value = 'above'
                    element.set('staff', staves[0])
            else:
                session.alert('Cannot change placement to "between", as the selected '
                    'element does not sit in a staff group with two staves.', 'warning')
        if element.tag == 'fermata':
            if value == 'below':
                element.set('form', 'inv')
            else:
                element.unset('form')
        element.set('place', value)


class MoveToStaff(edit.Edit):
    """Move notes, chords and rests to the staff above or below.

    The ``staff`` attribute is set to the adjacent staff number, or removed
    if the element returns to its own staff.

    """
    def __init__(self, upwards=True):
        self.upwards = upwards

    def edit_selection(self, session, ids):
        targets = []
        for element in self.elements(session, ids):
            if element.tag in STAFF_MOVABLE:
                targets.append(element)
            else:
                targets.extend(n for n in element.iter(*STAFF_MOVABLE)
                               if util.chord_or_self(n) is n)
        if not targets:
            raise edit.NotApplicable("move to staff: no notes, chords or rests selected")
        for element in targets:
            self.move(element)
            session.replace(element)
        session.selection = ids
        return targets

    def move(self, element):
        """Set or remove the ``staff`` attribute of the element."""
        staff = element.closest('staff')
        number = int(staff.get('n', -1)) if staff is not None else -1
        current = int(element.get('staff', -1))
        base = current if current > 0 else number
        new = base - 1 if self.upwards else base + 1
        if new == number:
            element.unset('staff')
        else:
            element.set('staff', new)


class AddVerticalGroup(edit.Edit):
    """Put the selected elements in a new vertical alignment group.

    The ``vgrp`` value is the lowest positive number not yet used in the
    document, and not in ``taken`` (e.g. the groups currently displayed).

    """
    def __init__(self, taken=()):
        self.taken = taken

    def edit_selection(self, session, ids):
        elements = []
        for element in self.elements(session, ids):
            if element.tag in VERTICAL_GROUP:
                elements.append(element)
            else:
                logger.warning("vertical group not supported for %s", element.tag)
        if not elements:
            raise edit.NotApplicable("vertical group: no suitable elements selected")
        used = set(int(v) for v in self.taken)
        for n in session.document.iter():
            value = n.get('vgrp')
            if value and value.isdigit():
                used.add(int(value))
        value = 1
        while value in used:
            value += 1
        for element in elements:
            element.set('vgrp', value)
            session.replace(element, True)
        session.selection = ids
        return value


def invert_placement(session, modifier=False):
    """Convenience function to invert the placement of the selected elements."""
    InvertPlacement(modifier).edit(session)


def move_to_staff(session, upwards=True):
    """Convenience function to move the selected notes to an adjacent staff."""
    MoveToStaff(upwards).edit(session)


def add_vertical_group(session, taken=()):
    """Convenience function to add the selected elements to a new vertical group.

    Returns the ``vgrp`` value, or None if no element could be grouped.

    """
    return AddVerticalGroup(taken).edit(session)
