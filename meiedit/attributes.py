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
Tables of MEI element names grouped by the attribute classes (or model
classes) they belong to, and some attribute value lists.

The edit operations use these tables to decide whether they apply to a
selected element.

"""

#: The pitch names in scale order.
PNAMES = ('c', 'd', 'e', 'f', 'g', 'a', 'b')

#: Elements with a ``place`` attribute (att.placementRelStaff).
PLACEMENT = (
    'accid', 'artic', 'attacca', 'breath', 'caesura', 'dir', 'dynam', 'f',
    'fermata', 'fing', 'hairpin', 'harm', 'mordent', 'ornam', 'pedal', 'reh',
    'tempo', 'trill', 'turn',
)

#: The values of data.STAFFREL.
DATA_PLACEMENT = ('above', 'below', 'between', 'within')

#: Elements with a ``curvedir`` attribute (att.curvature).
CURVATURE = ('bend', 'curve', 'lv', 'phrase', 'slur', 'tie')

#: Elements with a ``stem.dir`` attribute (att.stems).
STEMS = ('note', 'chord')

#: Elements with a ``vgrp`` attribute (att.verticalGroup).
VERTICAL_GROUP = (
    'attacca', 'dir', 'dynam', 'hairpin', 'pedal', 'reh', 'tempo',
)

#: Control events (model.controlEventLike and friends).
CONTROL_EVENTS = (
    'anchoredText', 'arpeg', 'attacca', 'bend', 'bracketSpan', 'breath',
    'caesura', 'cpMark', 'curve', 'dir', 'dynam', 'fermata', 'fing',
    'fingGrp', 'gliss', 'hairpin', 'harm', 'line', 'lv', 'metaMark', 'midi',
    'mnum', 'mordent', 'ornam', 'pedal', 'phrase', 'pitchInflection', 'reh',
    'repeatMark', 'slur', 'tempo', 'tie', 'trill', 'tupletSpan', 'turn',
)

#: Elements a facsimile zone can be attached to (att.facsimile).
FACSIMILE = (
    'accid', 'artic', 'barLine', 'beam', 'beamSpan', 'chord', 'clef',
    'custos', 'dir', 'dot', 'dynam', 'fermata', 'hairpin', 'harm', 'keySig',
    'layer', 'measure', 'meterSig', 'mRest', 'multiRest', 'note', 'pb',
    'pedal', 'rest', 'sb', 'slur', 'staff', 'syl', 'tempo', 'tie', 'trill',
    'tuplet', 'turn', 'verse',
)

#: Attributes that point to other elements (data.URI / data.URIS).
URI_ATTRIBUTES = (
    'startid', 'endid', 'plist', 'facs', 'corresp', 'sameas', 'copyof',
    'next', 'prev', 'synch', 'target', 'resp', 'data', 'follows',
    'precedes', 'decls', 'source', 'when', 'ref', 'classcode', 'altsym',
    'head.altsym', 'edition', 'hand', 'instr', 'layout', 'origin',
)

#: Elements the pitch can be shifted of (note uses pname/oct, the rests ploc/oloc).
PITCHED = ('note', 'rest', 'mRest', 'multiRest')

#: Elements that can start a control event.
CONTROL_START = ('note', 'chord', 'rest', 'mRest', 'multiRest')

#: Elements that can end a control event.
CONTROL_END = ('note', 'chord', 'mRest', 'multiRest')

#: Control events with a start and an end.
SPANNING = ('slur', 'tie', 'phrase', 'hairpin', 'gliss')

#: Control events with just a start.
START_ONLY = ('fermata', 'dir', 'dynam', 'tempo', 'pedal', 'mordent', 'trill', 'turn')

#: Control events that can have an optional end.
OPTIONAL_END = ('dir', 'dynam', 'mordent', 'trill', 'turn')

#: Control events that can have a ``form`` attribute.
WITH_FORM = ('hairpin', 'fermata', 'mordent', 'trill', 'turn')

#: Control events that get the ``form`` value as text content.
WITH_TEXT = ('dir', 'dynam', 'tempo')

#: Elements that can be deleted besides the control events.
DELETABLE = CONTROL_EVENTS + ('accid', 'artic', 'clef', 'octave', 'beamSpan')

#: Elements that can be moved to another staff.
STAFF_MOVABLE = ('note', 'chord', 'rest', 'mRest', 'multiRest')
