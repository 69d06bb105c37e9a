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
Stamp edits in the header of the document.

An ``application`` element describing this program is kept in
``meiHead/encodingDesc/appInfo``. The first edit creates it (with a
``startdate``), later edits only update its ``enddate`` and ``version``.

"""

from . import sync
from .dom import util
from .dom.element import Text


def find_application(document, name):
    """Return the ``application`` element with a ``name`` child ``name``, or None."""
    for application in document.iter('application'):
        n = application.find('name')
        if n is not None and n.text_content().strip() == name:
            return application


def add_application_info(session):
    """Add or update the application record in the header of the document.

    Does nothing and returns False if the session's preferences don't want
    this, or when the document has no ``meiHead``. Otherwise returns True.

    """
    settings = session.settings
    document = session.document
    if not settings.add_application_note or document is None:
        return False
    head = document.find('meiHead')
    if head is None:
        return False
    now = session.clock().isoformat(timespec='seconds')

    application = find_application(document, settings.application_name)
    if application is not None:
        application.set('enddate', now)
        application.set('version', settings.application_version)
        if application.xml_id is not None:
            session.replace(application)
        else:
            sync.replace_single(session.cursor, head, indenter=session.indenter)
        return True

    encoding_desc = util.first_child_element(head, 'encodingDesc')
    if encoding_desc is None:
        encoding_desc = session.new_element('encodingDesc')
        file_desc = util.first_child_element(head, 'fileDesc')
        if file_desc is None:
            head.append(encoding_desc)
        else:
            head.insert(head.index(file_desc) + 1, encoding_desc)
    app_info = util.first_child_element(encoding_desc, 'appInfo')
    if app_info is None:
        app_info = session.new_element('appInfo')
        encoding_desc.insert(0, app_info)
    application = session.new_element('application', attrib={
        'startdate': now,
        'version': settings.application_version,
    })
    application.append(session.new_element('name', Text(settings.application_name)))
    application.append(session.new_element('p', Text("First edit by {} {}, {}.".format(
        settings.application_name, settings.application_version, settings.application_date))))
    app_info.append(application)
    sync.replace_single(session.cursor, head, indenter=session.indenter)
    return True
