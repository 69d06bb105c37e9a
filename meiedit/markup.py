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
Operations that add or remove markup on notes: articulations and editorial
``supplied`` wrappers.
"""

import re

from . import edit
from .dom import util
from .dom.element import Element


def attributes_as_elements(session, element, name='artic'):
    """Convert the attribute ``name`` of the element into child elements.

    ``<note artic="stacc acc"/>`` becomes a note with two ``artic`` children.
    Returns the list of new child elements.

    """
    value = element.unset(name)
    new = []
    if value:
        for v in value.split():
            child = session.new_element(name, attrib={name: v})
            element.append(child)
            new.append(child)
    return new


def toggle_artic_for(session, element, artic):
    """Toggle the articulation on a note or chord element.

    If the element has ``artic`` children with the value, they are removed
    and None is returned. Otherwise a new ``artic`` child is added (also when
    other articulations are present), and its id is returned.

    """
    attributes_as_elements(session, element, 'artic')
    matching = [c for c in element.elements('artic') if c.get('artic') == artic]
    if matching:
        for child in matching:
            element.remove(child)
        return None
    child = session.new_element('artic', attrib={'artic': artic})
    element.append(child)
    return child.xml_id


class ToggleArtic(edit.Edit):
    """Switch an articulation on or off on the selected notes and chords.

    A selected articulation toggles its note; a note in a chord toggles the
    chord; other elements toggle all the notes and chords they contain.

    """
    def __init__(self, artic='stacc'):
        self.artic = artic

    def edit_selection(self, session, ids):
        ids = list(ids)
        span = None
        for i, element in enumerate(self.elements(session, ids)):
            if element.tag == 'artic' and element.parent is not None:
                element = element.parent
            element = util.chord_or_self(element)
            if element.tag in ('note', 'chord'):
                new_id = toggle_artic_for(session, element, self.artic)
                ids[i] = new_id or element.xml_id or ids[i]
                for node in util.outermost_identified([element]):
                    span = session.replace(node, True)
            else:
                notes = util.unique(util.chord_or_self(n) for n in element.iter('note'))
                for note in notes:
                    toggle_artic_for(session, note, self.artic)
                for node in util.outermost_identified(notes):
                    span = session.replace(node, True)
        if span:
            session.cursor.select(session.cursor.end)
        session.selection = ids
        return span


class AddSupplied(edit.Edit):
    """Wrap the selected elements in a ``supplied`` element.

    If ``attribute`` is ``"artic"`` or ``"accid"``, that attribute of the
    element is first turned into a child element, which is then wrapped.

    Ids ending with an underscore and a number pass that suffix on to the
    new elements: a note ``note_12`` gets wrapped in ``supplied_12``.

    """
    def __init__(self, attribute=None):
        self.attribute = attribute

    def mint_id(self, session, xml_id, tag):
        """Return an id for a new element with the tag, derived from ``xml_id``."""
        m = re.search(r'_\d+$', xml_id)
        if m:
            candidate = tag + m.group()
            if not session.ids.is_taken(candidate) and session.element(candidate) is None:
                session.ids.reserve(candidate)
                return candidate
        return session.ids.generate(tag)

    def edit_selection(self, session, ids):
        if not ids:
            raise edit.NotApplicable("add supplied: nothing selected")
        new_ids = []
        for xml_id in ids:
            element = session.element(xml_id)
            parent = element.parent
            if self.attribute in ('artic', 'accid'):
                name = self.attribute
                if not element.has(name):
                    session.alert("No {} attribute in element {}.".format(name, element.tag), 'warning')
                    continue
                child = Element(name, attrib={
                    'xml:id': self.mint_id(session, xml_id, name),
                    name: element.unset(name),
                })
                element.append(child)
                session.replace(element, True)
                parent, element = element, child

            attrib = {'xml:id': self.mint_id(session, xml_id, 'supplied')}
            if session.settings.resp_id:
                attrib['resp'] = '#' + session.settings.resp_id
            supplied = Element('supplied', attrib=attrib)
            parent[parent.index(element)] = supplied
            supplied.append(element)
            session.replace(element, True, supplied)
            new_ids.append(supplied.xml_id)
        if new_ids:
            session.selection = new_ids
        return new_ids


def toggle_artic(session, artic='stacc'):
    """Convenience function to toggle an articulation on the selected notes."""
    ToggleArtic(artic).edit(session)


def add_supplied(session, attribute=None):
    """Convenience function to wrap the selected elements in ``supplied``.

    Returns the ids of the new ``supplied`` elements.

    """
    return AddSupplied(attribute).edit(session)
