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
The Edit base class, to perform operations on the selected elements of an
editing :class:`~.session.Session`.

An operation changes the DOM document of the session, and then brings the
text buffer in sync using the functions in :mod:`.sync`. All of this happens
inside a :meth:`Session.edit() <.session.Session.edit>` scope, which takes
care of stamping the document header and requesting a new rendering of the
notation once the operation finishes.

When an operation finds that it can't be applied to the selection, it raises
:exc:`NotApplicable`, before changing anything.

"""


class NotApplicable(Exception):
    """Raised when an operation can't be applied to the selected elements.

    The ``severity`` is None (the default) when the user need not be
    notified, otherwise a string like ``"warning"`` or ``"error"``, in which
    case the message is sent to the session's alert function.

    """
    def __init__(self, message, severity=None):
        super().__init__(message)
        self.severity = severity


class Edit:
    """Base class for an operation on the selected elements of a Session.

    You must implement at least :meth:`edit_selection` to make it work.
    Then you create an instance, and call :meth:`edit` with the session.

    """
    #: If True, the document is reparsed from the text even if the text
    #: didn't change.
    reload = False

    #: If True, the edit is stamped in the document header.
    stamp = True

    #: If True, the Edit needs the DOM document and the selection.
    needs_document = True

    def edit(self, session):
        """Perform the operation on the session's selection.

        Returns the value returned by :meth:`edit_selection`, or None if the
        operation was not applicable.

        """
        result = None
        with session.edit(stamp=self.stamp):
            ids = []
            if self.needs_document:
                session.load_xml(self.reload)
                ids = session.normalized_selection()
            result = self.edit_selection(session, ids)
        return result

    def edit_selection(self, session, ids):
        """Perform the operation on the elements with the ``ids``.

        The ``ids`` are the ids of the session's selection that exist in the
        document, in document order.

        At least this method needs to be implemented to actually perform the
        operation.

        """
        raise NotImplementedError

    def elements(self, session, ids):
        """Return the elements for the ids, skipping ids that don't resolve."""
        result = []
        for xml_id in ids:
            node = session.element(xml_id)
            if node is not None:
                result.append(node)
        return result
