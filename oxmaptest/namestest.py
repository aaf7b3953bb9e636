#!/usr/bin/env python
#    oxmaptest/namestest.py - test cases for name converters
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

from oxmap import OxmapEncoder
from oxmap.names import identity, camel_case, CamelCasePropertyNameConverter
from oxmaptest import Person

class NameTests ( unittest.TestCase ) :
    def testCamelCase ( self ) :
        for name in ( 'camelCaseProperty', 'camel_case_property', 'camel-case-property', 'camel case property', 'Camel Case Property' ) :
            self.assertEqual( camel_case( name ), 'camelCaseProperty' )

    def testCamelCaseShort ( self ) :
        self.assertEqual( camel_case( 'id' ), 'id' )
        self.assertEqual( camel_case( 'ID' ), 'iD' )
        self.assertEqual( camel_case( '_private' ), 'private' )
        self.assertEqual( camel_case( '' ), '' )

    def testIdentity ( self ) :
        """Names are kept as they are when no converter is given"""
        self.assertEqual( identity( 'some_name' ), 'some_name' )
        encoder = OxmapEncoder()
        assert ( encoder.name_converter is identity )
        self.assertEqual( encoder.convert_name( 'some_name' ), 'some_name' )

    def testConverterObject ( self ) :
        """Objects exposing convert() are accepted as well as plain callables"""
        converter = CamelCasePropertyNameConverter()
        self.assertEqual( converter.convert( 'a_b' ), 'aB' )
        self.assertEqual( converter( 'a_b' ), 'aB' )
        result = OxmapEncoder( name_converter = converter ).map( Person( name = "Ada" ) )
        assert ( "<person>" in result )

    def testConvertOnlyObject ( self ) :
        class Upper ( object ) :
            def convert ( self, name ) :
                return name.upper()
        result = OxmapEncoder( name_converter = Upper() ).map( Person( name = "Ada" ) )
        assert ( "<PERSON>" in result and "<NAME>Ada</NAME>" in result )

if __name__ == "__main__":
    unittest.main()
