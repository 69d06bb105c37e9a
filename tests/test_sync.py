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
Test keeping the text in sync with changes to the DOM tree.
"""

### find meiedit
import sys
sys.path.insert(0, '.')

import parce

from meiedit import buffer, sync
from meiedit.buffer import INVALID_SPAN
from meiedit.dom import read
from meiedit.dom.element import Element
from meiedit.indent import Indenter
from meiedit.locate import locate_range


TEXT = """\
<mei xmlns="http://www.music-encoding.org/ns/mei">
   <measure xml:id="m1" n="1">
      <staff n="1">
         <layer n="1">
            <note xml:id="n1" pname="c" oct="4"/>
            <note xml:id="n2" pname="d" oct="4"/>
         </layer>
      </staff>
   </measure>
</mei>
"""


def load():
    d = parce.Document(None, TEXT)
    return d, parce.Cursor(d), read.document(TEXT)


def line(d, n):
    return d.text().split('\n')[n]


def line_start(d, n):
    return sum(len(l) + 1 for l in d.text().split('\n')[:n])


def check_to_string():
    """Test the text for new elements."""
    d, c, dom = load()
    e = Element('beam', Element('note', attrib={'xml:id': 'x'}), Element('note'))
    assert sync.to_string(e) == '<beam>\n<note xml:id="x"/>\n<note/>\n</beam>'
    assert sync.to_string(dom.root_element).startswith('<mei xmlns="http://www.music-encoding.org/ns/mei">')
    assert sync.to_string(dom.root_element.copy()).startswith('<mei>')


def check_replace():
    """Test replacing the text of an element."""
    d, c, dom = load()
    n1 = dom.find_id('n1')
    n1.set('oct', 5)
    span = sync.replace(c, n1)
    assert span.start.line == 4
    assert line(d, 4) == '            <note xml:id="n1" pname="c" oct="5"/>'

    # the new text reads back as the element
    r = locate_range(d, 'note', 'n1')
    assert read.fragment(d.text()[r[0]:r[1]]).equals(n1)

    # nothing else changed
    assert d.text() == TEXT.replace('oct="4"/>', 'oct="5"/>', 1)

    # an element that is not in the text
    other = Element('note', attrib={'xml:id': 'n9'})
    text = d.text()
    assert sync.replace(c, other) == INVALID_SPAN
    assert d.text() == text

    # an element without id is never guessed by its tag name
    staff = dom.find('staff')
    staff.set('n', '2')
    assert sync.replace(c, staff) == INVALID_SPAN
    assert not sync.remove(d, staff)
    assert d.text() == text

    # unless it occurs once
    assert sync.replace_single(c, staff)
    assert '<staff n="2">' in d.text()
    assert read.document(d.text()).find('staff').get('n') == '2'


def check_replace_new_node():
    """Test replacing the text of an element with a wrapping element."""
    d, c, dom = load()
    n2 = dom.find_id('n2')
    beam = Element('beam', n2.copy(), attrib={'xml:id': 'b1'})
    span = sync.replace(c, n2, True, beam, Indenter())
    assert d.text().split('\n')[5:8] == [
        '            <beam xml:id="b1">',
        '               <note xml:id="n2" pname="d" oct="4"/>',
        '            </beam>',
    ]
    pos, end = c.selection()
    assert d.text()[pos:end] == '<beam xml:id="b1">\n               <note xml:id="n2" pname="d" oct="4"/>\n            </beam>'
    assert buffer.span(d, pos, end) == span

    # replace_text writes the text given
    sync.replace_text(c, beam, '<rest xml:id="r1"/>')
    assert line(d, 5) == '            <rest xml:id="r1"/>'


def check_blank_lines():
    """Test that blank lines disappear from selected new text."""
    d, c, dom = load()
    sync.replace_text(c, dom.find_id('n1'), '<note xml:id="n1"/>\n\n   \n<!-- x -->', True)
    assert line(d, 4) == '            <note xml:id="n1"/>'
    assert line(d, 5) == '<!-- x -->'
    assert line(d, 6) == '            <note xml:id="n2" pname="d" oct="4"/>'
    pos, end = c.selection()
    assert d.text()[pos:end] == '<note xml:id="n1"/>\n<!-- x -->'


def check_replace_head():
    """Test replacing only the opening tag of an element."""
    d, c, dom = load()
    m1 = dom.find_id('m1')
    m1.set('n', '5')
    span = sync.replace_head(d, m1)
    assert line(d, 1) == '   <measure xml:id="m1" n="5">'
    assert span.start == buffer.Position(1, 3)
    n1 = dom.find_id('n1')
    n1.set('oct', '6')
    sync.replace_head(d, n1)
    assert line(d, 4) == '            <note xml:id="n1" pname="c" oct="6"/>'
    assert d.text() == TEXT.replace('n="1">', 'n="5">', 1).replace('oct="4"', 'oct="6"', 1)
    assert sync.replace_head(d, Element('measure')) == INVALID_SPAN


def check_remove_insert():
    """Test removing and inserting text."""
    d, c, dom = load()
    assert sync.remove(d, dom.find_id('n1'))
    assert d.text().count('\n') == TEXT.count('\n') - 1
    assert 'n1' not in d.text()
    assert line(d, 4) == '            <note xml:id="n2" pname="d" oct="4"/>'
    assert not sync.remove(d, dom.find_id('n1'))

    pos = sync.cursor_to_end_of_measure(c, 0)
    assert pos == line_start(d, 7)
    span = sync.insert(c, '<dir xml:id="d1">dolce</dir>\n', Indenter())
    assert line(d, 7) == '      <dir xml:id="d1">dolce</dir>'
    assert line(d, 8) == '   </measure>'
    assert span.start.line == 7
    assert c.pos == line_start(d, 8)

    # the result is still well-formed
    dom2 = read.document(d.text())
    assert dom2.find_id('d1').text_content() == 'dolce'

    # removing a range removes the line if it became blank
    sync.remove_range(d, *locate_range(d, 'note', 'n2'))
    assert 'n2' not in d.text()
    assert line(d, 4) == '         </layer>'

    # inserting a line before an element keeps the element indented
    d, c, dom = load()
    sync.cursor_to_id(c, 'n2')
    sync.insert(c, '<clef shape="F" line="4"/>\n', Indenter())
    assert line(d, 5) == '            <clef shape="F" line="4"/>'
    assert line(d, 6) == '            <note xml:id="n2" pname="d" oct="4"/>'
    assert c.pos == line_start(d, 6)


def check_cursor_functions():
    """Test cursor navigation."""
    d, c, dom = load()
    pos = sync.cursor_to_id(c, 'n2')
    assert pos == line_start(d, 5) + 12
    assert c.pos == pos
    assert sync.cursor_to_id(c, 'nope') is None
    assert sync.cursor_to_id(c, None) is None
    assert c.pos == pos

    assert sync.element_id_at_cursor(c) == 'n2'
    c.select(line_start(d, 3))
    assert sync.element_id_at_cursor(c) == 'm1'
    c.select(0)
    assert sync.element_id_at_cursor(c) is None

    assert sync.id_of_next_element(d, line_start(d, 1)) == ('n1', 'note')
    assert sync.id_of_next_element(d, 0, ['note']) == ('n1', 'note')
    assert sync.id_of_next_element(d, 0) == ('m1', 'measure')
    assert sync.id_of_next_element(d, line_start(d, 4) + 3) == ('n2', 'note')
    assert sync.id_of_next_element(d, line_start(d, 5)) == (None, None)

    pos = sync.cursor_after_element(c, 'note', 'n1')
    assert pos == line_start(d, 5) - 1
    pos = sync.cursor_before_closing_tag(c, 'measure', 'm1')
    assert pos == line_start(d, 8)
    assert c.pos == pos
    assert sync.cursor_before_closing_tag(c, 'note', 'n1') is None


def test_main():
    check_to_string()
    check_replace()
    check_replace_new_node()
    check_blank_lines()
    check_replace_head()
    check_remove_insert()
    check_cursor_functions()


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
