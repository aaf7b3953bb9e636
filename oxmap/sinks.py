#    oxmap/sinks.py - the interface between the encoder and its XML output.
#    Copyright (C) 2009 Shawn Sulma <genosha@470th.org>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU General Public License as published by
#    the Free Software Foundation, either version 3 of the License, or
#    (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU General Public License for more details.
#
#    You should have received a copy of the GNU General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
r"""A sink accumulates the document written by :class:`oxmap.OxmapEncoder`.

The encoder only uses the methods of :class:`Sink`.  Handles are opaque to it: it passes
back whatever ``open`` returned.  One sink instance serves one ``map`` call.

Two implementations exist:

    :class:`oxmap.DOM.TreeSink`   - builds a :mod:`xml.dom.minidom` document; supports every role.
    :class:`oxmap.SAX.StreamSink` - forward-only output through :class:`xml.sax.saxutils.XMLGenerator`;
                                    cannot write CDATA sections.

Sinks do not check element or attribute names.  Illegal names are reported as
:class:`oxmap.errors.MalformedOutput` when the output is parsed back.
"""

__all__ = [ 'Sink' ]

class Sink ( object ) :
    supports_cdata = True

    def open ( self, parent, name ) :
        r"""Starts element ``name`` under the element ``parent`` (``None`` for the document
        root) and returns its handle."""
        raise NotImplementedError

    def attribute ( self, handle, name, value ) :
        raise NotImplementedError

    def text ( self, handle, value ) :
        raise NotImplementedError

    def cdata ( self, handle, value ) :
        raise NotImplementedError

    def close ( self, handle ) :
        raise NotImplementedError

    def finish ( self ) :
        r"""Returns the complete document as a string."""
        raise NotImplementedError
