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
Test grouping in beams, deleting elements and indenting.
"""

### find meiedit
import sys
sys.path.insert(0, '.')

from meiedit import sync
from meiedit.dom import read, util
from meiedit.dom.element import Comment
from meiedit.session import Session
from meiedit.structure import add_beam, delete_element, indent_selection


TEXT = """\
<mei xmlns="http://www.music-encoding.org/ns/mei">
   <measure xml:id="m1" n="1">
      <staff n="1">
         <layer n="1">
            <note xml:id="n1" pname="c" oct="4" dur="8"/>
            <!-- lower voice -->
            <chord xml:id="c1" dur="8">
               <note xml:id="n2" pname="e" oct="4"/>
               <note xml:id="n3" pname="g" oct="4"/>
            </chord>
            <note xml:id="n4" pname="d" oct="4" dur="8"/>
            <beam xml:id="b1">
               <note xml:id="n5" pname="f" oct="4" dur="8"/>
               <note xml:id="n6" pname="a" oct="4" dur="8"/>
            </beam>
         </layer>
      </staff>
      <dir xml:id="d1" staff="1" tstamp="1">dolce</dir>
      <slur xml:id="s1" staff="1" startid="#n1" endid="#n4"/>
   </measure>
</mei>
"""


def check_sync(s):
    """Assert that the text of the session reads back as its document."""
    d = read.document(s.buffer.text())
    assert util.strip_whitespace(d.root_element).equals(util.strip_whitespace(s.document.root_element))


def ids(element):
    return [e.xml_id for e in element.elements()]


def check_beam():
    """Test grouping notes in a beam."""
    s = Session(TEXT)
    s.selection = ['n4', 'n1']
    beam = add_beam(s)
    layer = s.element('m1').find('layer')
    assert beam.parent is layer
    assert ids(layer) == [beam.xml_id, 'b1']
    assert ids(beam) == ['n1', 'c1', 'n4']
    assert s.element('n2').parent is s.element('c1')
    comments = [n for n in layer if isinstance(n, Comment)]
    assert len(comments) == 1 and layer.index(comments[0]) > layer.index(beam)
    assert s.selection == [beam.xml_id]
    check_sync(s)

    # different parents: nothing happens
    alerts = []
    s = Session(TEXT, alert=lambda message, severity: alerts.append(severity))
    s.selection = ['n1', 'n5']
    assert add_beam(s) is None
    assert alerts == ['warning']
    assert s.buffer.text() == TEXT

    # both notes in the same chord
    s.selection = ['n2', 'n3']
    assert add_beam(s) is None
    assert s.buffer.text() == TEXT


TEXT_WITHOUT_IDS = """\
<mei xmlns="http://www.music-encoding.org/ns/mei">
   <scoreDef>
      <staffDef n="1" lines="5">
         <clef shape="G" line="2"/>
      </staffDef>
   </scoreDef>
   <measure xml:id="m1" n="1">
      <staff n="1">
         <layer n="1">
            <note xml:id="n1" pname="c" oct="4" dur="8"/>
            <clef shape="F" line="4"/>
            <note pname="e" oct="3" dur="8"/>
            <chord dur="8">
               <note xml:id="x1" pname="e" oct="4"/>
               <note xml:id="x2" pname="g" oct="4"/>
            </chord>
            <note xml:id="n4" pname="d" oct="4" dur="8"/>
         </layer>
      </staff>
   </measure>
</mei>
"""


def check_beam_without_ids():
    """Test that elements without id between the grouped notes move along."""
    s = Session(TEXT_WITHOUT_IDS)
    s.selection = ['n1', 'n4']
    beam = add_beam(s)
    assert [e.tag for e in beam.elements()] == ['note', 'clef', 'note', 'chord', 'note']
    text = s.buffer.text()
    assert '<clef shape="G" line="2"/>' in text
    assert text.count('<clef ') == 2
    assert text.index('<beam') < text.index('<clef shape="F"') < text.index('</beam>')
    check_sync(s)

    # a note in a chord without id does not stand for the chord
    alerts = []
    s = Session(TEXT_WITHOUT_IDS, alert=lambda message, severity: alerts.append(severity))
    s.selection = ['x1', 'n4']
    assert add_beam(s) is None
    assert alerts == ['warning']
    assert s.buffer.text() == TEXT_WITHOUT_IDS


def check_delete():
    """Test deleting elements."""
    s = Session(TEXT)
    sync.cursor_to_id(s.cursor, 'd1')
    s.selection = ['d1']
    assert delete_element(s) == ['s1']
    assert s.element('d1') is None
    assert 'dolce' not in s.buffer.text()
    assert s.selection == ['s1']
    assert s.last_note_id == 's1'
    check_sync(s)

    sync.cursor_to_id(s.cursor, 's1')
    assert delete_element(s) == []
    assert s.element('s1') is None
    assert s.selection == []
    check_sync(s)

    # a beam is unwrapped
    s.selection = ['b1']
    assert delete_element(s) == ['n5', 'n6']
    assert s.element('b1') is None
    layer = s.element('m1').find('layer')
    assert ids(layer) == ['n1', 'c1', 'n4', 'n5', 'n6']
    assert '<beam' not in s.buffer.text()
    check_sync(s)

    # notes are not deleted
    text = s.buffer.text()
    s.selection = ['n1']
    assert delete_element(s) is None
    assert s.buffer.text() == text
    assert s.element('n1') is not None


def check_indent():
    """Test re-indenting the text."""
    text = '<mei>\n<measure>\n<staff/>\n</measure>\n</mei>\n'
    s = Session(text)
    s.cursor.select(6, 19)
    assert indent_selection(s) == 2
    assert s.buffer.text() == '<mei>\n   <measure>\n      <staff/>\n</measure>\n</mei>\n'

    # without selection all lines
    s.cursor.select(0)
    assert indent_selection(s) == 1
    assert s.buffer.text() == '<mei>\n   <measure>\n      <staff/>\n   </measure>\n</mei>\n'
    assert s.document is None


def test_main():
    check_beam()
    check_beam_without_ids()
    check_delete()
    check_indent()


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
