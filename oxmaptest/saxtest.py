#!/usr/bin/env python
#    oxmaptest/saxtest.py - test cases for oxmap over the SAX stream sink
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
import io, unittest

from oxmap.SAX import StreamSink, dumps, dump
from oxmap.errors import MalformedOutput, SerializationFailure, UnsupportedRoleForSink
import oxmaptest
from oxmaptest import Note, Person

class OxmapSAXTests ( oxmaptest.OxmapTests ) :
    sink = StreamSink

    def testCDataRejected ( self ) :
        """A class with a CDATA property cannot be streamed, even when the value is None"""
        with self.assertRaises( UnsupportedRoleForSink ) :
            self._perform( Note( title = "t", body = "b" ) )
        with self.assertRaises( UnsupportedRoleForSink ) :
            self._perform( Note( title = "t" ) )

    def testDumps ( self ) :
        self.assertEqual( dumps( Person( name = "Ada", active = True ) ), '<?xml version="1.0" encoding="utf-8"?>\n<Person><name>Ada</name><active>1</active></Person>' )

    def testDump ( self ) :
        out = io.StringIO()
        dump( Person( tags = [ "x" ] ), out )
        self.assertEqual( out.getvalue(), '<?xml version="1.0" encoding="utf-8"?>\n<Person><tags>x</tags></Person>' )

    def testStreamSink ( self ) :
        sink = StreamSink()
        sink.start_element( "root" )
        sink.write_attribute( "a", "1" )
        sink.start_element( "child" )
        sink.write_text( "t & u" )
        sink.end_element()
        sink.start_element( "empty" )
        sink.end_element()
        sink.end_element()
        self.assertEqual( sink.finish(), '<?xml version="1.0" encoding="utf-8"?>\n<root a="1"><child>t &amp; u</child><empty/></root>' )

    def testAttributeAfterContent ( self ) :
        """Attributes cannot follow element content"""
        sink = StreamSink()
        sink.start_element( "root" )
        sink.write_text( "t" )
        with self.assertRaises( MalformedOutput ) :
            sink.write_attribute( "a", "1" )

    def testNoReopen ( self ) :
        """A closed element cannot receive more children"""
        sink = StreamSink()
        root = sink.open( None, "root" )
        child = sink.open( root, "child" )
        grandchild = sink.open( child, "grandchild" )
        sink.close( grandchild )
        sink.close( child )
        with self.assertRaises( MalformedOutput ) :
            sink.open( grandchild, "late" )

    def testIllegalNameMidStream ( self ) :
        """Illegal names fail as soon as the element is written out"""
        sink = StreamSink()
        sink.start_element( "bad name" )
        with self.assertRaises( MalformedOutput ) :
            sink.write_text( "x" )
            sink.end_element()
            sink.finish()

    def testFinishOpen ( self ) :
        sink = StreamSink()
        sink.start_element( "root" )
        with self.assertRaises( SerializationFailure ) :
            sink.finish()

    def testFinishEmpty ( self ) :
        with self.assertRaises( SerializationFailure ) :
            StreamSink().finish()

    def testSecondRoot ( self ) :
        sink = StreamSink()
        sink.start_element( "root" )
        sink.end_element()
        with self.assertRaises( MalformedOutput ) :
            sink.start_element( "other" )

if __name__ == "__main__":
    unittest.main()
