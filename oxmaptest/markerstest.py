#!/usr/bin/env python
#    oxmaptest/markerstest.py - test cases for property roles
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
import unittest
from dataclasses import dataclass
from typing import Annotated, Optional

from oxmap import OxmapEncoder
from oxmap.markers import ATTRIBUTE, CDATA, NODE_VALUE, PLAIN, MarkerReader, RoleResolver, xml_field

class FixedMarkers ( object ) :
    def __init__ ( self, markers ) :
        self.markers = markers
    def get_markers ( self, cls, name ) :
        return self.markers.get( name, set() )

class MarkerTests ( unittest.TestCase ) :
    def setUp ( self ) :
        self.reader = MarkerReader()

    def testAnnotated ( self ) :
        self.assertEqual( self.reader.get_markers( Marked, 'code' ), set( [ ATTRIBUTE ] ) )
        self.assertEqual( self.reader.get_markers( Marked, 'text' ), set( [ NODE_VALUE, CDATA ] ) )

    def testOptionalAnnotated ( self ) :
        """Markers are found through Optional"""
        self.assertEqual( self.reader.get_markers( Marked, 'maybe' ), set( [ CDATA ] ) )

    def testFieldMetadata ( self ) :
        self.assertEqual( self.reader.get_markers( Marked, 'via_field' ), set( [ ATTRIBUTE ] ) )
        self.assertEqual( self.reader.get_markers( Marked, 'both' ), set( [ NODE_VALUE, ATTRIBUTE ] ) )

    def testUnmarked ( self ) :
        self.assertEqual( self.reader.get_markers( Marked, 'plain' ), set() )
        self.assertEqual( self.reader.get_markers( Marked, 'unknown' ), set() )

    def testPriority ( self ) :
        """ATTRIBUTE, then CDATA, then NODE_VALUE; PLAIN when unmarked"""
        resolver = RoleResolver( FixedMarkers( {
            'a' : set( [ ATTRIBUTE, CDATA, NODE_VALUE ] ),
            'b' : set( [ NODE_VALUE, CDATA ] ),
            'c' : set( [ NODE_VALUE ] ),
            'd' : set( [ ATTRIBUTE, NODE_VALUE ] ) } ) )
        self.assertEqual( resolver.resolve( Marked, 'a' ), ATTRIBUTE )
        self.assertEqual( resolver.resolve( Marked, 'b' ), CDATA )
        self.assertEqual( resolver.resolve( Marked, 'c' ), NODE_VALUE )
        self.assertEqual( resolver.resolve( Marked, 'd' ), ATTRIBUTE )
        self.assertEqual( resolver.resolve( Marked, 'e' ), PLAIN )

    def testCustomMarkerService ( self ) :
        """The encoder takes its roles from the annotation service it is given"""
        encoder = OxmapEncoder( markers = FixedMarkers( { 'plain' : set( [ ATTRIBUTE ] ) } ) )
        result = encoder.map( Marked( plain = "p" ) )
        assert ( '<Marked plain="p"/>' in result )

@dataclass
class Marked :
    code : Annotated[str, ATTRIBUTE] = None
    text : Annotated[str, NODE_VALUE, CDATA] = None
    maybe : Optional[Annotated[str, CDATA]] = None
    via_field : str = xml_field( ATTRIBUTE, default = None )
    both : Annotated[str, NODE_VALUE] = xml_field( ATTRIBUTE, default = None )
    plain : str = None

if __name__ == "__main__":
    unittest.main()
