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
Test cleaning up accidentals and renumbering measures.
"""

### find meiedit
import sys
sys.path.insert(0, '.')

from meiedit.cleanup import MeasureNumber, clean_accid, renumber_measures, superfluous_accid_ges
from meiedit.dom import read, util
from meiedit.dom.element import Element
from meiedit.session import Session


TEXT = """\
<mei xmlns="http://www.music-encoding.org/ns/mei">
   <section>
      <measure xml:id="m1" n="1" metcon="false">
         <staff n="1">
            <layer n="1">
               <note xml:id="n1" pname="f" oct="4" accid="s" accid.ges="s"/>
               <note xml:id="n2" pname="b" oct="4" accid.ges="f">
                  <accid xml:id="a2" accid="f"/>
               </note>
               <note xml:id="n3" pname="e" oct="4" accid.ges="f"/>
            </layer>
         </staff>
      </measure>
      <measure xml:id="m2" n="2">
         <staff n="1">
            <layer n="1">
               <multiRest xml:id="r1" num="3"/>
            </layer>
         </staff>
      </measure>
      <measure xml:id="m3" n="3" metcon="false"/>
      <measure xml:id="m4" n="4" metcon="false"/>
      <measure n="5"/>
   </section>
</mei>
"""


def session(text=TEXT):
    s = Session(text, alert=lambda message, severity: s.alerts.append((message, severity)))
    s.alerts = []
    return s


def check_sync(s):
    """Assert that the text of the session reads back as its document."""
    d = read.document(s.buffer.text())
    assert util.strip_whitespace(d.root_element).equals(util.strip_whitespace(s.document.root_element))


def check_superfluous():
    """Test when an accid.ges is superfluous."""
    assert superfluous_accid_ges(Element('note', attrib={'accid': 'f', 'accid.ges': 'f'}))
    assert not superfluous_accid_ges(Element('note', attrib={'accid': 'f', 'accid.ges': 's'}))
    assert not superfluous_accid_ges(Element('note', attrib={'accid.ges': 's'}))
    assert not superfluous_accid_ges(Element('note', attrib={'accid': 's'}))
    assert superfluous_accid_ges(Element('note',
        Element('accid', attrib={'accid': 's'}), attrib={'accid.ges': 's'}))
    assert superfluous_accid_ges(Element('accid', attrib={'accid': 'n', 'accid.ges': 'n'}))


def check_clean_accid():
    """Test removing superfluous accid.ges attributes."""
    s = session()
    changed = clean_accid(s)
    assert [e.xml_id for e in changed] == ['n1', 'n2']
    text = s.buffer.text()
    assert '<note xml:id="n1" pname="f" oct="4" accid="s"/>' in text
    assert '<note xml:id="n2" pname="b" oct="4">\n' in text
    assert '<note xml:id="n3" pname="e" oct="4" accid.ges="f"/>' in text
    assert text == TEXT.replace(' accid.ges="s"', '').replace(' accid.ges="f">', '>')
    assert s.alerts == [("2 superfluous accid.ges attributes removed.", 'success')]
    check_sync(s)

    # nothing more to clean
    assert clean_accid(s) == []
    assert s.buffer.text() == text


def check_clean_accid_without_ids():
    """Test that a note without id is written out with its measure."""
    s = session(TEXT.replace('<note xml:id="n1" ', '<note '))
    changed = clean_accid(s)
    assert [e.xml_id for e in changed] == [None, 'n2']
    assert 'accid.ges="s"' not in s.buffer.text()
    assert s.buffer.text().count('<note ') == 3
    check_sync(s)


def check_renumber():
    """Test numbering the measures."""
    s = session()
    result = renumber_measures(s)
    assert [(m.measure.xml_id, m.old, m.new) for m in result] == [
        ('m1', '1', '0'),       # pickup
        ('m2', '2', '1'),       # counts for three measures
        ('m3', '3', '4'),       # incomplete, completed by m4
    ]
    assert isinstance(result[0], MeasureNumber)
    # only reported
    assert s.buffer.text() == TEXT
    assert s.element('m1').get('n') == '1'
    assert s.alerts[-1] == ("3 measures would be renumbered.", 'info')

    result = renumber_measures(s, True)
    assert len(result) == 3
    text = s.buffer.text()
    assert '<measure xml:id="m1" n="0" metcon="false">' in text
    assert '<measure xml:id="m2" n="1">' in text
    assert '<measure xml:id="m3" n="4" metcon="false"/>' in text
    assert s.alerts[-1] == ("3 measures renumbered.", 'success')
    check_sync(s)
    assert renumber_measures(s) == []

    # another start; the measure without id is written out with the root element
    result = renumber_measures(s, True, 2)
    assert [m.new for m in result] == ['1', '2', '5', '5', '6']
    d = read.document(s.buffer.text())
    assert [m.get('n') for m in d.iter('measure')] == ['1', '2', '5', '5', '6']
    check_sync(s)


def test_main():
    check_superfluous()
    check_clean_accid()
    check_clean_accid_without_ids()
    check_renumber()


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
