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
This module defines a DOM (Document Object Model) for MEI documents.

The MEI DOM is a simple tree structure of :class:`~.element.Element` nodes,
with :class:`~.element.Text`, :class:`~.element.Comment` and
:class:`~.element.ProcessingInstruction` leaves, under a
:class:`~.element.Document` root. Tag and attribute names are stored as they
appear in the source text (e.g. ``note``, ``xml:id`` or ``dis.place``), so
writing out an element yields text that can be searched for in the source.

Use :func:`.read.document` to build a DOM document from text.

"""
