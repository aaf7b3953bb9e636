#    oxmap/SAX.py - forward-only XML output for oxmap.
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
r"""oxmap/SAX.py writes the document front to back with :class:`xml.sax.saxutils.XMLGenerator`
instead of building a tree.  Nothing is kept apart from the names of the open elements and
the attributes of the element that was started last.

Like any streaming XML writer it only moves forward: attributes must be written right after
their element is started and before any content, and a closed element cannot be reopened.
It has no way of writing CDATA sections; an encoder bound to a :class:`StreamSink` refuses
classes with CDATA properties (:class:`oxmap.errors.UnsupportedRoleForSink`).

Everything written is also fed to an incremental expat parser, so illegal names or
characters fail the call as soon as they are written.  The output is not indented.
"""
import io
from xml.parsers import expat
from xml.sax.saxutils import XMLGenerator

import oxmap
from oxmap.errors import MalformedOutput, SerializationFailure, UnsupportedRoleForSink
from oxmap.sinks import Sink

__all__ = [ 'StreamSink', 'dumps', 'dump' ]

ENCODING = "utf-8"

class _CheckedBuffer ( io.StringIO ) :
    def __init__ ( self ) :
        io.StringIO.__init__( self )
        self.parser = expat.ParserCreate()

    def _parse ( self, data, final ) :
        try :
            self.parser.Parse( data, final )
        except expat.ExpatError as exc :
            raise MalformedOutput( "not well-formed XML: %s" % exc ) from exc

    def write ( self, data ) :
        self._parse( data, False )
        return io.StringIO.write( self, data )

    def check ( self ) :
        self._parse( "", True )

class StreamSink ( Sink ) :
    supports_cdata = False

    def __init__ ( self, encoding = None ) :
        self.out = _CheckedBuffer()
        self.writer = XMLGenerator( self.out, encoding = encoding or ENCODING, short_empty_elements = True )
        self.writer.startDocument()
        self.names = []
        self.pending = None
        self.started = False

    def _flush ( self ) :
        if self.pending is not None :
            name, attributes = self.pending
            self.pending = None
            self.writer.startElement( name, attributes )

    def start_element ( self, name ) :
        if self.started and not self.names :
            raise MalformedOutput( "cannot start <%s> after the root element was closed." % name )
        self._flush()
        self.pending = ( name, {} )
        self.names.append( name )
        self.started = True

    def write_attribute ( self, name, value ) :
        if self.pending is None :
            raise MalformedOutput( "attribute '%s' must be written before any element content." % name )
        self.pending[1][name] = value

    def write_text ( self, value ) :
        if not self.names :
            raise MalformedOutput( "text outside of the root element." )
        self._flush()
        self.writer.characters( value )

    def end_element ( self ) :
        if not self.names :
            raise MalformedOutput( "no element is open." )
        self._flush()
        self.writer.endElement( self.names.pop() )

    def finish ( self ) :
        if not self.started :
            raise SerializationFailure( "the document has no root element." )
        if self.names :
            raise SerializationFailure( "cannot finish while <%s> is still open." % self.names[-1] )
        self.writer.endDocument()
        self.out.check()
        return self.out.getvalue()

    # Sink interface: a handle is the depth of the element it refers to.
    def _current ( self, handle ) :
        if handle != len( self.names ) :
            raise MalformedOutput( "element at depth %s is no longer open for writing." % handle )

    def open ( self, parent, name ) :
        if parent is not None :
            self._current( parent )
        self.start_element( name )
        return len( self.names )

    def attribute ( self, handle, name, value ) :
        self._current( handle )
        self.write_attribute( name, value )

    def text ( self, handle, value ) :
        self._current( handle )
        self.write_text( value )

    def cdata ( self, handle, value ) :
        raise UnsupportedRoleForSink( "%s cannot write CDATA sections." % type( self ).__name__ )

    def close ( self, handle ) :
        self._current( handle )
        self.end_element()

def dumps ( instance, **kwargs ) :
    r"""Returns the XML document for ``instance`` as a string, written front to back.
    The keyword arguments are passed to :class:`oxmap.OxmapEncoder`."""
    return oxmap.OxmapEncoder( sink = StreamSink, **kwargs ).map( instance )

def dump ( instance, f, **kwargs ) :
    r"""Writes the XML document for ``instance`` to the file-like object ``f`` once it is
    complete."""
    f.write( dumps( instance, **kwargs ) )
