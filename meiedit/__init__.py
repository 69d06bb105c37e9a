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
The meiedit module.

Edit an MEI document: a DOM tree and the text it was read from are kept in
sync, so that edits change only the part of the text that belongs to the
changed elements.

"""

import os.path

from .pkginfo import version, version_string


__all__ = ('load', 'version', 'version_string')


def load(filename, settings=None, encoding='utf-8', **kwargs):
    """Convenience function to read text from ``filename`` and return a
    :class:`~.session.Session`.

    The ``settings``, if given, are used for the session; other keyword
    arguments are passed to the :class:`~.session.Session` constructor. Raises
    :class:`OSError` if the file can't be read.

    """
    from .session import Session
    with open(os.path.abspath(filename), encoding=encoding) as f:
        text = f.read()
    return Session(text, settings, **kwargs)
