#    oxmap/DOM.py - buffered XML output for oxmap.
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
r"""oxmap/DOM.py builds the whole document in memory as a :mod:`xml.dom.minidom` tree
before serializing it.  This is the default output of :class:`oxmap.OxmapEncoder` and the
only one able to write CDATA sections.

The public interface mirrors :mod:`pickle` and :mod:`json` on the writing side
(``dumps``, ``dump``); ``marshal`` returns the document tree itself.

Output carries an XML declaration and, unless ``pretty = False`` is passed, is indented
with :data:`INDENT`.  Only elements holding nothing but elements are indented; an element
with text or CDATA content is written on one line, exactly as it was built::

    <?xml version="1.0" encoding="UTF-8"?>
    <Person id="42">
        <name>Ada</name>
        <active>1</active>
    </Person>
"""
import functools, io
from xml.dom import minidom
from xml.parsers.expat import ExpatError
from xml.sax.saxutils import escape

import oxmap
from oxmap.errors import MalformedOutput, SerializationFailure
from oxmap.sinks import Sink

__all__ = [ 'TreeSink', 'marshal', 'dumps', 'dump' ]

INDENT = "    "
ENCODING = "UTF-8"

_ATTRIBUTE_ENTITIES = { '"' : "&quot;", "\n" : "&#10;", "\r" : "&#13;", "\t" : "&#9;" }

class TreeSink ( Sink ) :
    supports_cdata = True

    def __init__ ( self, pretty = True, encoding = None, indent = None ) :
        self.document = minidom.Document()
        self.pretty = pretty
        self.encoding = encoding or ENCODING
        self.indent = INDENT if indent is None else indent
        self.unclosed = []

    def start_element ( self, name ) :
        if self.document.documentElement is not None :
            raise MalformedOutput( "document already has the root element <%s>." % self.document.documentElement.tagName )
        element = self.document.createElement( name )
        self.document.appendChild( element )
        self.unclosed.append( element )
        return element

    def append_child_element ( self, parent, name ) :
        element = self.document.createElement( name )
        parent.appendChild( element )
        self.unclosed.append( element )
        return element

    def end_element ( self, handle ) :
        try :
            self.unclosed.remove( handle )
        except ValueError :
            raise MalformedOutput( "element <%s> is not open." % getattr( handle, 'tagName', handle ) ) from None

    def set_attribute ( self, handle, name, value ) :
        handle.setAttribute( name, value )

    def append_text ( self, handle, value ) :
        handle.appendChild( self.document.createTextNode( value ) )

    def append_cdata ( self, handle, value ) :
        # "]]>" cannot occur inside a section; split it over two adjacent ones.
        parts = value.split( "]]>" )
        last = len( parts ) - 1
        for index, part in enumerate( parts ) :
            if index > 0 :
                part = ">" + part
            if index < last :
                part = part + "]]"
            handle.appendChild( self.document.createCDATASection( part ) )

    def serialize ( self ) :
        if self.document.documentElement is None :
            raise SerializationFailure( "the document has no root element." )
        if self.unclosed :
            raise SerializationFailure( "cannot serialize while <%s> is still open." % self.unclosed[-1].tagName )
        if self.pretty :
            out = io.StringIO()
            out.write( '<?xml version="1.0" encoding="%s"?>\n' % self.encoding )
            self.write_pretty( out, self.document.documentElement, 0 )
            data = out.getvalue().encode( self.encoding, "xmlcharrefreplace" )
        else :
            data = self.document.toxml( encoding = self.encoding )
        try :
            minidom.parseString( data )
        except ExpatError as exc :
            raise MalformedOutput( "not well-formed XML: %s" % exc ) from exc
        return data.decode( self.encoding )

    def write_pretty ( self, writer, element, depth ) :
        r"""Writes ``element`` indented by ``depth`` levels.  Unlike
        :meth:`minidom.Node.toprettyxml`, text and CDATA content is never padded."""
        pad = self.indent * depth
        children = element.childNodes
        if not children or any( child.nodeType != child.ELEMENT_NODE for child in children ) :
            # mixed and text-only content is written on one line, as built.
            writer.write( pad )
            element.writexml( writer )
            writer.write( "\n" )
            return
        writer.write( pad + "<" + element.tagName )
        for name, value in element.attributes.items() :
            writer.write( ' %s="%s"' % ( name, escape( value, _ATTRIBUTE_ENTITIES ) ) )
        writer.write( ">\n" )
        for child in children :
            self.write_pretty( writer, child, depth + 1 )
        writer.write( pad + "</" + element.tagName + ">\n" )

    # Sink interface
    def open ( self, parent, name ) :
        if parent is None :
            return self.start_element( name )
        return self.append_child_element( parent, name )

    close = end_element
    attribute = set_attribute
    text = append_text
    cdata = append_cdata
    finish = serialize

def marshal ( instance, **kwargs ) :
    r"""Encodes ``instance`` into a :class:`xml.dom.minidom.Document` which is returned.
    The keyword arguments are passed to :class:`oxmap.OxmapEncoder`."""
    sink = TreeSink()
    oxmap.OxmapEncoder( **kwargs ).encode( instance, sink )
    return sink.document

def dumps ( instance, pretty = True, **kwargs ) :
    r"""Returns the XML document for ``instance`` (and the objects it refers to) as a string.
    The keyword arguments are passed to :class:`oxmap.OxmapEncoder`."""
    return oxmap.OxmapEncoder( sink = functools.partial( TreeSink, pretty = pretty ), **kwargs ).map( instance )

def dump ( instance, f, pretty = True, **kwargs ) :
    r"""Writes the XML document for ``instance`` to the file-like object ``f`` (which has
    a .write method accepting strings)."""
    f.write( dumps( instance, pretty = pretty, **kwargs ) )
