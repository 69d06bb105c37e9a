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
Test pitches and shifting them.
"""

import pytest

### find meiedit
import sys
sys.path.insert(0, '.')

from meiedit.dom import read, util
from meiedit.dom.element import Element
from meiedit.pitch import Pitch, ShiftPitch, shift_pitch
from meiedit.session import Session


TEXT = """\
<mei xmlns="http://www.music-encoding.org/ns/mei">
   <measure xml:id="m1">
      <staff n="1">
         <layer n="1">
            <note xml:id="n1" pname="b" oct="4"/>
            <chord xml:id="c1">
               <note xml:id="n2" pname="c" oct="4"/>
               <note xml:id="n3" pname="e" oct="4"/>
            </chord>
            <rest xml:id="r1" ploc="g" oloc="4"/>
            <note xml:id="n4" pname="h" oct="4"/>
         </layer>
      </staff>
   </measure>
</mei>
"""


def pitches(s, *ids):
    return [(s.element(i).get('pname') or s.element(i).get('ploc'),
             s.element(i).get('oct') or s.element(i).get('oloc')) for i in ids]


def check_pitch():
    """Test the Pitch class."""
    p = Pitch(4, 6)
    p.shift(1)
    assert p == Pitch(5, 0)
    p.shift(-8)
    assert p == Pitch(3, 6)
    p.shift(14)
    assert p == Pitch(5, 6)
    assert p != Pitch(5, 5)

    e = Element('note', attrib={'pname': 'a', 'oct': '3'})
    assert Pitch.from_element(e) == Pitch(3, 5)
    Pitch(2, 1).to_element(e)
    assert e.attrib == {'pname': 'd', 'oct': '2'}
    e = Element('rest')
    assert Pitch.from_element(e) == Pitch(4, 0)
    Pitch(5, 4).to_element(e)
    assert e.attrib == {'oloc': '5', 'ploc': 'g'}
    with pytest.raises(ValueError):
        Pitch.from_element(Element('note', attrib={'pname': 'h'}))
    with pytest.raises(ValueError):
        Pitch.from_element(Element('chord'))


def check_shift():
    """Test shifting the selected notes."""
    s = Session(TEXT)
    s.selection = ['n1']
    shift_pitch(s, 1)
    assert pitches(s, 'n1') == [('c', '5')]
    assert '<note xml:id="n1" pname="c" oct="5"/>' in s.buffer.text()
    shift_pitch(s, -1)
    assert pitches(s, 'n1') == [('b', '4')]
    assert s.buffer.text() == TEXT

    # a chord shifts all its notes, rests shift too
    s.selection = ['c1', 'r1']
    shift_pitch(s, -2)
    assert pitches(s, 'n2', 'n3', 'r1') == [('a', '3'), ('c', '4'), ('e', '4')]
    assert '<rest xml:id="r1" ploc="e" oloc="4"/>' in s.buffer.text()
    shift_pitch(s, 2)
    assert s.buffer.text() == TEXT

    # a measure shifts all, an invalid pitch name is skipped
    s.selection = ['m1']
    ShiftPitch(7).edit(s)
    assert pitches(s, 'n1', 'n2', 'n4') == [('b', '5'), ('c', '5'), ('h', '4')]
    assert s.selection == ['m1']

    # nothing to shift: nothing happens
    s = Session('<mei><dir xml:id="d1">text</dir></mei>')
    s.selection = ['d1']
    text = s.buffer.text()
    shift_pitch(s, 1)
    assert s.buffer.text() == text


def check_shift_without_ids():
    """Test that notes without id are written out with their chord."""
    text = TEXT.replace('<note xml:id="n3" ', '<note ')
    s = Session(text)
    s.selection = ['c1']
    shift_pitch(s, 1)
    c1 = s.element('c1')
    assert [(n.get('pname'), n.get('oct')) for n in c1.iter('note')] == [('d', '4'), ('f', '4')]
    assert '<note xml:id="n1" pname="b" oct="4"/>' in s.buffer.text()
    assert '<note pname="f" oct="4"/>' in s.buffer.text()
    d = read.document(s.buffer.text())
    assert util.strip_whitespace(d.root_element).equals(util.strip_whitespace(s.document.root_element))

    # and back
    shift_pitch(s, -1)
    assert s.buffer.text() == text


def test_main():
    check_pitch()
    check_shift()
    check_shift_without_ids()


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
