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
Build a DOM document from XML text.

The text is parsed with :mod:`lxml`; the resulting tree is converted to
:mod:`.element` nodes, keeping the qualified names, attribute order,
comments, processing instructions and all whitespace text, so that writing
out an element gives text close to the source::

    >>> from meiedit.dom import read
    >>> d = read.document('<mei xmlns="http://www.music-encoding.org/ns/mei"><note xml:id="n1"/></mei>')
    >>> d.find_id('n1')
    <Element note #n1 (0 children)>

Parse errors raise :class:`lxml.etree.XMLSyntaxError`.

"""

import re

from lxml import etree

from . import element


#: The XML namespace (used for ``xml:id``).
XML_NS = "http://www.w3.org/XML/1998/namespace"

_declaration_re = re.compile(r'\s*(<\?xml\s[^>]*\?>)')


def _parser():
    return etree.XMLParser(
        remove_blank_text=False,
        remove_comments=False,
        remove_pis=False,
        strip_cdata=True,
        huge_tree=True,
    )


def _qualify(name, nsmap):
    """Return the source name for an lxml ``{namespace}local`` name."""
    if not name.startswith('{'):
        return name
    ns, local = name[1:].split('}', 1)
    if ns == XML_NS:
        return 'xml:' + local
    for prefix, uri in nsmap.items():
        if uri == ns and prefix:
            return prefix + ':' + local
    return local


def _convert(e, parent_nsmap):
    """Convert an lxml node (and its descendants) to a DOM node."""
    if e.tag is etree.Comment:
        return element.Comment(e.text or '')
    elif e.tag is etree.PI:
        return element.ProcessingInstruction(e.target, e.text or '')
    elif not isinstance(e.tag, str):
        # entity reference
        return element.Text(e.text or '')

    nsmap = e.nsmap
    attrib = {}
    for prefix, uri in nsmap.items():
        if parent_nsmap.get(prefix) != uri:
            attrib['xmlns:' + prefix if prefix else 'xmlns'] = uri
    for name, value in e.attrib.items():
        attrib[_qualify(name, nsmap)] = value

    # an element in the default namespace gets no prefix
    prefix = e.prefix
    tag = etree.QName(e).localname
    node = element.Element(prefix + ':' + tag if prefix else tag, attrib=attrib)
    if e.text:
        node.append(element.Text(e.text))
    for child in e:
        node.append(_convert(child, nsmap))
        if child.tail:
            node.append(element.Text(child.tail))
    return node


def document(text):
    """Return a :class:`~.element.Document` from the XML text."""
    root = etree.fromstring(text.encode('utf-8'), _parser())
    before = [_convert(e, {}) for e in reversed(list(root.itersiblings(preceding=True)))]
    after = [_convert(e, {}) for e in root.itersiblings()]
    m = _declaration_re.match(text)
    declaration = m.group(1) if m else None
    return element.Document(*before, _convert(root, {}), *after, declaration=declaration)


def fragment(text):
    """Return an :class:`~.element.Element` from a piece of XML text.

    Namespace prefixes used in the fragment must be declared in it.

    """
    return _convert(etree.fromstring(text.encode('utf-8'), _parser()), {})
