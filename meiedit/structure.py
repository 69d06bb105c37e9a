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
Operations that change the structure of the music: grouping notes in a beam,
deleting elements, and re-indenting the text.
"""

import logging

from . import control, edit, facsimile, locate, sync
from .attributes import DELETABLE
from .dom import util
from .dom.element import Element, Text


logger = logging.getLogger(__name__)


class AddBeam(edit.Edit):
    """Group the selected notes in a beam (or another element, like ``tuplet``).

    The first and the last selected element (a note in a chord counts as its
    chord) must have the same parent. Those elements and all the elements
    between them are moved into the new element, which takes the place of
    the first one. Comments between them stay in the parent, after the new
    element.

    The text from the start of the first element upto the end of the last
    one is replaced at once, so elements without ``xml:id`` between them are
    moved along.

    """
    def __init__(self, name='beam'):
        self.name = name

    def edit_selection(self, session, ids):
        if len(ids) < 2:
            raise edit.NotApplicable("add {}: select at least two elements".format(self.name))
        n1 = util.chord_or_self(session.element(ids[0]))
        n2 = util.chord_or_self(session.element(ids[-1]))
        parent = n1.parent
        if n2.parent is not parent:
            raise edit.NotApplicable(
                "add {}: the selected elements have different parents".format(self.name), 'warning')
        if n1 is n2:
            raise edit.NotApplicable("add {}: select elements outside one chord".format(self.name))

        r1 = locate.locate_element(session.buffer, n1)
        r2 = locate.locate_element(session.buffer, n2)
        if r1 is None or r2 is None or r2[1] < r1[0]:
            raise edit.NotApplicable(
                "add {}: the text of the selected elements was not found".format(self.name), 'warning')

        beam = session.new_element(self.name)
        start, end = parent.index(n1), parent.index(n2)
        moved = []
        kept = []
        for node in parent[start:end + 1]:
            if isinstance(node, Element) or (isinstance(node, Text) and util.is_blank(node.text)):
                moved.append(node)
            else:
                kept.append(node)
        parent.insert(start, beam)
        for node in moved:
            parent.remove(node)
            beam.append(node)

        text = sync.to_string(beam) + ''.join('\n' + n.write() for n in kept)
        sync.replace_range(session.cursor, r1[0], r2[1], text, True, session.indenter)
        session.selection = [beam.xml_id]
        return beam


class DeleteElement(edit.Edit):
    """Delete the first selected element.

    Control events, accidentals, articulations, clefs and beam spans are
    deleted. Deleting an octave line also restores the octave of the notes
    under it. Deleting a beam keeps its contents. Zones are only deleted if
    zone editing is enabled in the settings; with ``modifier`` the elements
    pointing to the zone are deleted as well.

    """
    reload = True

    def __init__(self, modifier=False):
        self.modifier = modifier

    def edit_selection(self, session, ids):
        if not ids:
            raise edit.NotApplicable("delete: nothing selected")
        element = session.element(ids[0])
        selection = []
        if element.tag == 'octave':
            id1 = util.rm_hash(element.get('startid', ''))
            id2 = util.rm_hash(element.get('endid', ''))
            control.modify_octave_range(session, id1, id2,
                element.get('dis.place'), element.get('dis', '8'), False)
            session.remove(element)
            element.detach()
            selection.append(id2)
        elif element.tag in DELETABLE:
            next_id = sync.id_of_next_element(session.buffer, session.cursor.pos)[0]
            session.remove(element)
            element.detach()
            if next_id:
                selection.append(next_id)
        elif element.tag == 'beam':
            text = ''.join(sync.to_string(n) for n in element).strip()
            sync.replace_text(session.cursor, element, text, indenter=session.indenter)
            children = list(element)
            parent = element.parent
            index = element.detach()
            parent[index:index] = children
            selection.extend(n.xml_id for n in children if isinstance(n, Element) and n.xml_id)
        elif element.tag == 'zone' and session.settings.edit_facsimile_zones:
            facsimile.delete_zone(session, element, self.modifier)
        else:
            raise edit.NotApplicable("delete: {} elements can't be deleted".format(element.tag))
        session.reload_facsimile()
        session.selection = selection
        if selection:
            session.last_note_id = selection[-1]
        return selection


class IndentSelection(edit.Edit):
    """Indent the selected lines, or all lines if there is no selection."""
    needs_document = False
    stamp = False

    def edit_selection(self, session, ids):
        document = session.buffer
        pos, end = session.cursor.selection()
        if document.find_block(pos).end >= end:
            pos, end = 0, None
        return session.indenter.indent_lines(document, pos, end)


def add_beam(session, name='beam'):
    """Convenience function to group the selection in a beam."""
    return AddBeam(name).edit(session)


def delete_element(session, modifier=False):
    """Convenience function to delete the first selected element."""
    return DeleteElement(modifier).edit(session)


def indent_selection(session):
    """Convenience function to indent the selected lines, or all lines."""
    return IndentSelection().edit(session)
