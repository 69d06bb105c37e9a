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
The preferences of an editing session.
"""

from . import pkginfo
from .ids import STYLES
from .indent import Indenter


class Settings:
    """Holds the preferences that influence the edit operations.

    Preferences can be given on instantiation or by setting the attributes
    of the same name:

    ``xml_id_style``
        the style of new ``xml:id`` values, one of ``"Original"``,
        ``"Verovio"`` or ``"UUID"`` (see :mod:`.ids`)

    ``indent_width``
        the number of spaces per indent level in the text

    ``add_application_note``
        whether edits are stamped in an ``application`` element in the
        ``meiHead`` of the document (see :mod:`.appinfo`)

    ``application_name``, ``application_version``, ``application_date``
        the name, version and version date used in that stamp

    ``resp_id``
        the ``xml:id`` of the person responsible for editorial additions,
        used in the ``resp`` attribute of ``supplied`` elements

    ``edit_facsimile_zones``
        whether facsimile zones can be edited (and deleted)

    """
    def __init__(self,
            xml_id_style = 'Original',
            indent_width = 3,
            add_application_note = True,
            application_name = pkginfo.name,
            application_version = pkginfo.version_string,
            application_date = pkginfo.version_date,
            resp_id = None,
            edit_facsimile_zones = False,
        ):
        if xml_id_style not in STYLES:
            raise ValueError("unknown xml:id style: {!r}".format(xml_id_style))
        self.xml_id_style = xml_id_style
        self.indent_width = indent_width
        self.add_application_note = add_application_note
        self.application_name = application_name
        self.application_version = application_version
        self.application_date = application_date
        self.resp_id = resp_id
        self.edit_facsimile_zones = edit_facsimile_zones

    def __repr__(self):
        return '<{} {}>'.format(type(self).__name__,
            ' '.join('{}={!r}'.format(k, v) for k, v in vars(self).items()))

    @classmethod
    def from_dict(cls, d):
        """Return a Settings instance from a dictionary; unknown keys are ignored."""
        known = vars(cls())
        return cls(**{k: v for k, v in d.items() if k in known})

    def indenter(self):
        """Return an :class:`~.indent.Indenter` using our ``indent_width``."""
        return Indenter(self.indent_width)
