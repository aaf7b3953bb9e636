#!/usr/bin/env python
#    oxmaptest/domtest.py - test cases for oxmap over the DOM tree sink
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
import functools, io, unittest
import xml.etree.ElementTree as ET
from xml.dom import minidom

from oxmap import OxmapEncoder
from oxmap.DOM import TreeSink, marshal, dumps, dump
from oxmap.errors import MalformedOutput, SerializationFailure
import oxmaptest
from oxmaptest import Note, Person, Employee, Address, Label, Order, Price

class OxmapDOMTests ( oxmaptest.OxmapTests ) :
    sink = functools.partial( TreeSink, pretty = False )

    def testCData ( self ) :
        """CDATA properties are written as CDATA sections"""
        data = Note( title = "t", body = "<b>bold & bright</b>" )
        result = self._perform( data )
        assert ( "<![CDATA[<b>bold & bright</b>]]>" in result )
        self.assertEqual( self._tree( data ).find( "title" ).tail, data.body )
        self.assertEqual( self._tree( Note( body = data.body ) ).text, data.body )

    def testCDataTerminator ( self ) :
        """A value holding the CDATA terminator is split over two sections"""
        data = Note( body = "a]]>b" )
        self.assertEqual( self._body( data ), "<Note><![CDATA[a]]]]><![CDATA[>b]]></Note>" )
        self.assertEqual( self._tree( data ).text, "a]]>b" )

    def testEmptyCData ( self ) :
        self.assertEqual( self._body( Note( body = "" ) ), "<Note><![CDATA[]]></Note>" )

    def testPretty ( self ) :
        """Default output is indented by four spaces"""
        result = dumps( Employee( id = 1, name = "Ada", address = Address( city = "X" ) ) )
        self.assertEqual( result, '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<Employee id="1">\n'
            '    <name>Ada</name>\n'
            '    <address>\n'
            '        <city>X</city>\n'
            '    </address>\n'
            '</Employee>\n' )

    def testPrettyMixedContent ( self ) :
        """Indentation never enters text or CDATA content"""
        data = Label( text = "hello", note = "n" )
        result = dumps( data )
        self.assertEqual( result, '<?xml version="1.0" encoding="UTF-8"?>\n<Label>hello<note>n</note></Label>\n' )
        self.assertEqual( ET.fromstring( result.encode( "utf-8" ) ).text, "hello" )
        note = Note( title = "t", body = "b" )
        self.assertEqual( dumps( note ), '<?xml version="1.0" encoding="UTF-8"?>\n<Note><title>t</title><![CDATA[b]]></Note>\n' )
        self.assertEqual( ET.fromstring( dumps( note ).encode( "utf-8" ) ).find( "title" ).tail, "b" )

    def testPrettyNestedMixedContent ( self ) :
        data = Order( number = "N\"1", total = Price( currency = "USD", amount = 3 ) )
        self.assertEqual( dumps( data ), '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<Order number="N&quot;1">\n'
            '    <total currency="USD">3</total>\n'
            '</Order>\n' )

    def testPrettyEmpty ( self ) :
        self.assertEqual( dumps( Person() ), '<?xml version="1.0" encoding="UTF-8"?>\n<Person/>\n' )

    def testDumps ( self ) :
        self.assertEqual( dumps( Person( name = "Ada" ), pretty = False ), '<?xml version="1.0" encoding="UTF-8"?><Person><name>Ada</name></Person>' )

    def testDump ( self ) :
        out = io.StringIO()
        dump( Person( name = "Ada" ), out )
        self.assertEqual( out.getvalue(), dumps( Person( name = "Ada" ) ) )

    def testMarshal ( self ) :
        """marshal returns the document tree"""
        document = marshal( Employee( id = 5, name = "Ada" ) )
        self.assertEqual( document.documentElement.tagName, "Employee" )
        self.assertEqual( document.documentElement.getAttribute( "id" ), "5" )

    def testTreeSink ( self ) :
        sink = TreeSink( pretty = False )
        root = sink.start_element( "root" )
        child = sink.append_child_element( root, "child" )
        sink.set_attribute( root, "a", "1" )
        sink.append_text( child, "t" )
        sink.append_cdata( root, "<c>" )
        sink.end_element( child )
        sink.end_element( root )
        self.assertEqual( sink.serialize(), '<?xml version="1.0" encoding="UTF-8"?><root a="1"><child>t</child><![CDATA[<c>]]></root>' )

    def testSerializeOpenRoot ( self ) :
        """serialize is only valid once the root is closed"""
        sink = TreeSink()
        sink.start_element( "root" )
        with self.assertRaises( SerializationFailure ) :
            sink.serialize()

    def testSerializeEmpty ( self ) :
        with self.assertRaises( SerializationFailure ) :
            TreeSink().serialize()

    def testSecondRoot ( self ) :
        sink = TreeSink()
        sink.end_element( sink.start_element( "root" ) )
        with self.assertRaises( MalformedOutput ) :
            sink.start_element( "other" )

    def testBadAttributeName ( self ) :
        """Names are only checked when the document is serialized"""
        sink = TreeSink()
        root = sink.start_element( "root" )
        sink.set_attribute( root, "a b", "1" )
        sink.end_element( root )
        with self.assertRaises( MalformedOutput ) :
            sink.serialize()

    def testEncoding ( self ) :
        encoder = OxmapEncoder( sink = functools.partial( TreeSink, encoding = "ISO-8859-1" ) )
        result = encoder.map( Person( name = "Ünal" ) )
        assert ( result.startswith( '<?xml version="1.0" encoding="ISO-8859-1"?>' ) )
        self.assertEqual( ET.fromstring( result.encode( "iso-8859-1" ) ).find( "name" ).text, "Ünal" )

def strip_indentation ( element ) :
    r"""Removes whitespace-only text from elements that hold other elements."""
    if any( child.nodeType == child.ELEMENT_NODE for child in element.childNodes ) :
        for child in list( element.childNodes ) :
            if child.nodeType == child.TEXT_NODE and not child.data.strip() :
                element.removeChild( child )
    for child in element.childNodes :
        if child.nodeType == child.ELEMENT_NODE :
            strip_indentation( child )

class OxmapPrettyDOMTests ( oxmaptest.OxmapTests ) :
    """The shared cases again, over the default indented output"""
    sink = TreeSink

    def _body ( self, data, encoder = None ) :
        result = self._perform( data, encoder )
        assert ( result.startswith( '<?xml version="1.0" encoding="UTF-8"?>\n' ) )
        document = minidom.parseString( result.encode( "utf-8" ) )
        strip_indentation( document.documentElement )
        return document.documentElement.toxml()

if __name__ == "__main__":
    unittest.main()
