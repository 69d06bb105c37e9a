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
The facsimile: zones on the page images of a source, and the elements
pointing to them via ``facs``.

:func:`load_facsimile` builds the zone index a source-image display needs.
The other functions edit zones and surfaces, keeping the text in sync and
rebuilding the index of the session.

A box is a tuple ``(x, y, width, height)`` in image pixels.

"""

import logging
import math
import re

from . import edit, locate, sync
from .attributes import FACSIMILE
from .dom import util


logger = logging.getLogger(__name__)

_body_re = re.compile(r'<body(?=[\s/>])')


def _pointers(document):
    """Return a dict mapping zone id to the first element pointing to it."""
    pointers = {}
    for element in document.iter():
        facs = element.get('facs')
        if facs:
            for ref in util.id_refs(facs):
                pointers.setdefault(ref, element)
    return pointers


def load_facsimile(document):
    """Return a dict mapping zone id to a dict with the zone geometry.

    Each value can have the keys ``target``, ``width`` and ``height`` (from
    the ``graphic`` of the surface), ``ulx``, ``uly``, ``lrx`` and ``lry``
    (from the zone), and ``measureId`` and ``measureN`` (from the element
    pointing to the zone). Only keys that have a value in the document are
    present, and all values are strings. Zones without id or without a
    graphic in their surface are skipped.

    """
    facs = {}
    facsimile = document.find('facsimile')
    if facsimile is None:
        return facs
    pointers = _pointers(document)
    for zone in facsimile.iter('zone'):
        xml_id = zone.xml_id
        surface = zone.parent
        graphic = surface.find('graphic') if surface is not None else None
        if not xml_id or graphic is None:
            continue
        d = facs[xml_id] = {}
        for name in ('target', 'width', 'height'):
            if graphic.get(name):
                d[name] = graphic.get(name)
        for name in ('ulx', 'uly', 'lrx', 'lry'):
            if zone.get(name):
                d[name] = zone.get(name)
        element = pointers.get(xml_id)
        if element is not None:
            if element.xml_id:
                d['measureId'] = element.xml_id
            if element.get('n'):
                d['measureN'] = element.get('n')
    return facs


def zone_envelope(facs, zone_ids, line_width=6):
    """Return the box ``(ulx, uly, lrx, lry)`` enclosing the zones.

    ``facs`` is the zone index returned by :func:`load_facsimile`; zone ids
    not in the index are ignored. The box is widened by half the
    ``line_width`` of the drawn rectangles. Returns None if none of the zones
    is known.

    """
    ulx = uly = math.inf
    lrx = lry = 0
    half = line_width / 2
    for xml_id in zone_ids:
        zone = facs.get(xml_id)
        if not zone or not all(k in zone for k in ('ulx', 'uly', 'lrx', 'lry')):
            continue
        ulx = min(ulx, float(zone['ulx']) - half)
        uly = min(uly, float(zone['uly']) - half)
        lrx = max(lrx, float(zone['lrx']) + half)
        lry = max(lry, float(zone['lry']) + half)
    if ulx == math.inf:
        return None
    return ulx, uly, lrx, lry


def zone_attributes(box):
    """Return a dict with the ``ulx``, ``uly``, ``lrx`` and ``lry`` for the box.

    The values are rounded to whole pixels.

    """
    x, y, width, height = (int(round(v)) for v in box)
    return {
        'ulx': str(x),
        'uly': str(y),
        'lrx': str(x + width),
        'lry': str(y + height),
    }


class AddZone(edit.Edit):
    """Add a zone for the element at the cursor.

    With ``add_measure`` and the cursor on a zone in a surface, the new zone
    is added after that zone, and a new measure pointing to the new zone is
    added after the measure pointing to the zone at the cursor.

    Without ``add_measure``, and the cursor on an element that can have a
    ``facs`` attribute, the new zone is added next to the zone of the element
    pointing to a zone before it (or after it), and the element gets a
    ``facs`` pointing to the new zone.

    """
    def __init__(self, box, add_measure=True):
        self.box = box
        self.add_measure = add_measure

    def edit_selection(self, session, ids):
        selected = session.element(sync.element_id_at_cursor(session.cursor) or '')
        if selected is None:
            raise edit.NotApplicable("add zone: no element at the cursor")
        attrib = {'type': 'measure' if self.add_measure else selected.tag}
        attrib.update(zone_attributes(self.box))
        zone = session.new_element('zone', attrib=attrib)
        surface = selected.parent
        if self.add_measure and selected.tag == 'zone' and surface.tag == 'surface':
            self.add_with_measure(session, selected, zone)
        elif not self.add_measure and selected.tag in FACSIMILE:
            self.add_for_element(session, selected, zone)
        else:
            raise edit.NotApplicable("add zone: not possible for {}".format(selected.tag))
        sync.cursor_to_id(session.cursor, zone.xml_id)
        session.reload_facsimile()
        session.selection = [zone.xml_id]
        logger.info("new zone %s added", zone.xml_id)
        return zone

    def add_with_measure(self, session, selected, zone):
        """Add the zone after the selected zone, with a new measure."""
        measure = _pointers(session.document).get(selected.xml_id)
        if measure is not None and measure.tag != 'measure':
            measure = measure.closest('measure')
        if measure is None:
            raise edit.NotApplicable("add zone: no measure refers to {}".format(selected.xml_id))
        surface = selected.parent
        surface.insert(surface.index(selected) + 1, zone)
        if sync.cursor_after_element(session.cursor, 'zone', selected.xml_id) is not None:
            session.insert('\n' + sync.to_string(zone))
        new_measure = session.new_element('measure', attrib={
            'n': (measure.get('n') or '') + '-new',
            'facs': '#' + zone.xml_id,
        })
        parent = measure.parent
        parent.insert(parent.index(measure) + 1, new_measure)
        if sync.cursor_after_element(session.cursor, 'measure', measure.xml_id) is not None:
            session.insert('\n' + sync.to_string(new_measure))

    def add_for_element(self, session, selected, zone):
        """Add the zone near the zone of a neighbouring element, and point to it."""
        candidates = [e for e in session.document.iter() if e.has('facs') or e is selected]
        if len(candidates) < 2:
            raise edit.NotApplicable("add zone: no other element refers to a zone")
        i = next(i for i, e in enumerate(candidates) if e is selected)
        refs = util.id_refs(candidates[1 if i == 0 else i - 1].get('facs'))
        reference = session.element(refs[0]) if refs else None
        if reference is None:
            raise edit.NotApplicable("add zone: no reference zone found")
        if reference.tag == 'surface':
            reference.append(zone)
            if sync.cursor_before_closing_tag(session.cursor, 'surface', reference.xml_id) is not None:
                session.insert(sync.to_string(zone) + '\n')
        else:
            parent = reference.parent
            parent.insert(parent.index(reference) + 1, zone)
            if sync.cursor_after_element(session.cursor, reference.tag, reference.xml_id) is not None:
                session.insert('\n' + sync.to_string(zone))
        selected.set('facs', '#' + zone.xml_id)
        session.replace(selected)


def delete_zone(session, zone, remove_pointing=False):
    """Delete the zone from the tree and the text.

    The elements pointing to the zone are also deleted if ``remove_pointing``
    is True, otherwise their ``facs`` attribute is removed. Must be called
    inside an edit scope of the session.

    """
    xml_id = zone.xml_id
    session.remove(zone)
    zone.detach()
    pointing = [e for e in session.document.iter() if e.get('facs') == '#' + xml_id]
    changed = []
    for element in pointing:
        if remove_pointing and element.xml_id is not None:
            session.remove(element)
            element.detach()
        elif remove_pointing:
            changed.append(element.parent)
            element.detach()
        else:
            element.unset('facs')
            changed.append(element)
    for node in util.outermost_identified(changed):
        session.replace(node)
    session.reload_facsimile()
    return pointing


class RemoveZone(edit.Edit):
    """Remove a zone, and the elements pointing to it if ``remove_measure`` is True."""
    reload = True

    def __init__(self, zone_id, remove_measure=False):
        self.zone_id = zone_id
        self.remove_measure = remove_measure

    def edit_selection(self, session, ids):
        zone = session.element(self.zone_id)
        if zone is None or zone.tag != 'zone':
            raise edit.NotApplicable("remove zone: no zone {}".format(self.zone_id))
        return delete_zone(session, zone, self.remove_measure)


class AddFacsimile(edit.Edit):
    """Add a facsimile with a surface for every page.

    Each ``pb`` gets a ``facs`` pointing to its surface, and every surface
    gets a ``graphic`` (with placeholder values). An existing facsimile is
    completed and rewritten.

    """
    def edit_selection(self, session, ids):
        document = session.document
        facsimile = document.find('facsimile')
        if facsimile is not None:
            # occurs once, found by its tag name if it has no id
            r = locate.locate_range(session.buffer, 'facsimile', facsimile.xml_id)
            if r:
                sync.remove_range(session.buffer, *r)
        else:
            body = document.find('body')
            if body is None:
                raise edit.NotApplicable("add facsimile: no body element")
            facsimile = session.new_element('facsimile')
            parent = body.parent
            parent.insert(parent.index(body), facsimile)
        changed = []
        for page, pb in enumerate(list(document.iter('pb')), 1):
            surface = session.element(util.rm_hash(pb.get('facs', '')))
            if surface is None or surface.tag != 'surface':
                surface = session.new_element('surface')
                facsimile.append(surface)
                pb.set('facs', '#' + surface.xml_id)
                changed.append(pb)
            if surface.find('graphic') is None:
                surface.append(session.new_element('graphic', attrib={
                    'target': 'Page-{}'.format(page),
                    'width': '0',
                    'height': '0',
                }))
        for node in util.outermost_identified(changed):
            session.replace(node)
        m = _body_re.search(session.buffer.text())
        if m is None:
            logger.info("add facsimile: no body in the text")
        else:
            session.cursor.select(m.start())
            session.insert(sync.to_string(facsimile) + '\n')
            sync.cursor_to_id(session.cursor, facsimile.xml_id)
        session.reload_facsimile()
        return facsimile


class UpdateZone(edit.Edit):
    """Set the geometry of a zone to the box."""
    stamp = False

    def __init__(self, zone_id, box):
        self.zone_id = zone_id
        self.box = box

    def edit_selection(self, session, ids):
        zone = session.element(self.zone_id)
        if zone is None or zone.tag != 'zone':
            raise edit.NotApplicable("update zone: no zone {}".format(self.zone_id))
        for name, value in zone_attributes(self.box).items():
            zone.set(name, value)
        session.replace(zone, True)
        session.reload_facsimile()
        return zone


def add_zone(session, box, add_measure=True):
    """Convenience function to add a zone for the element at the cursor."""
    return AddZone(box, add_measure).edit(session)


def remove_zone(session, zone, remove_measure=False):
    """Convenience function to remove a zone (an element or an id)."""
    zone_id = zone if isinstance(zone, str) else zone.xml_id
    return RemoveZone(zone_id, remove_measure).edit(session)


def add_facsimile(session):
    """Convenience function to add or complete the facsimile."""
    return AddFacsimile().edit(session)


def update_zone(session, zone_id, box):
    """Convenience function to set the geometry of a zone."""
    return UpdateZone(zone_id, box).edit(session)
