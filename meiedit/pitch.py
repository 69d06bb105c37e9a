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
Pitches of notes and rests, and shifting them by diatonic steps.
"""

import logging

from . import edit
from .dom import util
from .attributes import PITCHED, PNAMES


logger = logging.getLogger(__name__)


def pitch_attributes(tag):
    """Return the names of the (pitch name, octave) attributes for the tag.

    A note uses ``pname`` and ``oct``, the rests use ``ploc`` and ``oloc``.
    Returns None for other elements.

    """
    if tag == 'note':
        return 'pname', 'oct'
    elif tag in PITCHED:
        return 'ploc', 'oloc'


class Pitch:
    """A pitch with ``octave`` and ``note`` attributes.

    The ``octave`` is the MEI octave number (4 is the octave starting with
    middle C), the ``note`` an integer in the 0..6 range, where 0 stands for
    C.

    """
    def __init__(self, octave=4, note=0):
        self.octave = octave
        self.note = note

    def __repr__(self):
        return "<{} {}{}>".format(type(self).__name__, PNAMES[self.note], self.octave)

    def __eq__(self, other):
        return isinstance(other, Pitch) and (self.octave, self.note) == (other.octave, other.note)

    def __ne__(self, other):
        return not self == other

    def copy(self):
        """Return a new Pitch with our attributes."""
        return type(self)(self.octave, self.note)

    def shift(self, steps):
        """Move the pitch by a number of diatonic steps, adjusting the octave."""
        doct, self.note = divmod(self.note + steps, 7)
        self.octave += doct

    @classmethod
    def from_element(cls, element):
        """Read the pitch of a note or rest element.

        A missing pitch name defaults to C, a missing octave to 4. Raises
        ValueError if the element can't have a pitch or has an invalid one.

        """
        names = pitch_attributes(element.tag)
        if not names:
            raise ValueError("element {} has no pitch".format(element.tag))
        pname, oname = names
        name = element.get(pname, 'c')
        if name not in PNAMES:
            raise ValueError("invalid pitch name: {!r}".format(name))
        return cls(int(element.get(oname, 4)), PNAMES.index(name))

    def to_element(self, element):
        """Write the pitch to a note or rest element."""
        pname, oname = pitch_attributes(element.tag)
        element.set(oname, self.octave)
        element.set(pname, PNAMES[self.note])


class ShiftPitch(edit.Edit):
    """Shift the pitch of notes and rests by a number of diatonic steps.

    A selected note or rest is shifted itself; of other selected elements
    (chords, beams, measures, ...) all the contained notes and rests are
    shifted.

    """
    def __init__(self, steps):
        #: The number of steps, positive is upwards.
        self.steps = steps

    def edit_selection(self, session, ids):
        nodes = []
        for element in self.elements(session, ids):
            if element.tag in PITCHED:
                nodes.append(element)
            nodes.extend(element.iter(*PITCHED))
        targets = util.unique(nodes)
        if not targets:
            raise edit.NotApplicable("shift pitch: no notes or rests selected")
        changed = []
        for n in targets:
            try:
                pitch = Pitch.from_element(n)
            except ValueError as e:
                logger.warning("shift pitch: skipping %s: %s", n.xml_id, e)
                continue
            pitch.shift(self.steps)
            pitch.to_element(n)
            changed.append(n)
        # notes without id are written out with their closest ancestor that has one
        for node in util.outermost_identified(changed):
            session.replace(node)
        session.selection = ids
        return targets


def shift_pitch(session, steps):
    """Convenience function to shift the selected notes and rests by ``steps``."""
    ShiftPitch(steps).edit(session)
