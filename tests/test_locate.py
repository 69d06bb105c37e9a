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
Test finding the text of elements.
"""

### find meiedit
import sys
sys.path.insert(0, '.')

import parce

from meiedit.buffer import Position
from meiedit.dom import read
from meiedit.locate import locate, locate_element, locate_range


TEXT = """\
<section>
   <measure xml:id="m1">
      <note xml:id="n10" pname="c"/>
      <note pname='d' xml:id='n1' />
   </measure>
   <measure n="2" xml:id="m2">
      <!-- </measure> -->
      <measure xml:id="inner"><![CDATA[</measure>]]></measure>
      <note xml:id="n2"></note>
   </measure>
</section>"""


def text_of(document, tag, xml_id=None):
    r = locate_range(document, tag, xml_id)
    return document.text()[r[0]:r[1]] if r else None


def test_main():
    b = parce.Document(None, TEXT)

    # the id must match completely, attribute order and quotes don't matter
    assert text_of(b, 'note', 'n1') == "<note pname='d' xml:id='n1' />"
    assert text_of(b, 'note', 'n10') == '<note xml:id="n10" pname="c"/>'
    assert text_of(b, 'note', 'n') is None

    # a full element
    assert text_of(b, 'note', 'n2') == '<note xml:id="n2"></note>'
    assert text_of(b, 'measure', 'm1') == TEXT[TEXT.index('<measure'):TEXT.index('</measure>') + 10]

    # nested elements with the same name, comments and CDATA are skipped
    m2 = text_of(b, 'measure', 'm2')
    assert m2.startswith('<measure n="2" xml:id="m2">')
    assert m2.endswith('<note xml:id="n2"></note>\n   </measure>')

    # without id, the first occurrence
    assert text_of(b, 'section').startswith('<section>')
    assert text_of(b, 'section').endswith('</section>')
    assert text_of(b, 'chord') is None

    # unbalanced
    assert locate_range(parce.Document(None, '<measure xml:id="m1"><note/>'), 'measure', 'm1') is None

    span = locate(b, 'note', 'n10')
    assert span.start == Position(2, 6)
    assert span.end == Position(2, 36)
    assert locate(b, 'note', 'n3') is None

    d = read.document(TEXT)
    assert locate_element(b, d.find_id('n2')) == locate_range(b, 'note', 'n2')

    # an element without id is not taken for the first one with its tag
    assert locate_element(b, d.find('section')) is None
    assert locate_element(b, d.find_id('m2').find('measure')) == locate_range(b, 'measure', 'inner')


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
