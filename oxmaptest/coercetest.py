#!/usr/bin/env python
#    oxmaptest/coercetest.py - test cases for the type transform registry
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
from datetime import date, datetime
from enum import Enum

from oxmap import OxmapEncoder
from oxmap.coerce import TypeRegistry
from oxmap.meta import PropertyType, TypeTag
from oxmap.errors import CoercionFailure, RegistryFrozen

def upper ( name, value ) :
    return value.upper()

class CoerceTests ( unittest.TestCase ) :
    def setUp ( self ) :
        self.registry = TypeRegistry()

    def testRegister ( self ) :
        assert ( not self.registry.is_registered( TypeTag.STRING ) )
        assert ( self.registry.register( TypeTag.STRING, upper ) is self.registry )
        assert ( self.registry.is_registered( TypeTag.STRING ) )
        self.assertEqual( self.registry.apply( "name", "ada", TypeTag.STRING ), "ADA" )

    def testNotCallable ( self ) :
        with self.assertRaises( TypeError ) :
            self.registry.register( TypeTag.STRING, "upper" )

    def testKeyForTag ( self ) :
        self.registry.register( TypeTag.STRING, upper )
        self.assertEqual( self.registry.key_for( PropertyType( TypeTag.STRING, str ) ), TypeTag.STRING )
        assert ( self.registry.key_for( PropertyType( TypeTag.INTEGER, int ) ) is None )

    def testClassBeatsTag ( self ) :
        self.registry.register( TypeTag.MIXED, upper ).register( date, upper )
        self.assertEqual( self.registry.key_for( PropertyType( TypeTag.MIXED, date ) ), date )
        self.assertEqual( self.registry.key_for( PropertyType( TypeTag.MIXED ) ), TypeTag.MIXED )

    def testSubclass ( self ) :
        """A transform for a class also covers its subclasses; the nearest one wins"""
        self.registry.register( date, upper )
        self.assertEqual( self.registry.key_for( PropertyType( TypeTag.MIXED, datetime ) ), date )
        self.registry.register( datetime, upper )
        self.assertEqual( self.registry.key_for( PropertyType( TypeTag.MIXED, datetime ) ), datetime )

    def testFailure ( self ) :
        self.registry.register( TypeTag.STRING, upper )
        with self.assertRaises( CoercionFailure ) as ctx :
            self.registry.apply( "name", 42, TypeTag.STRING )
        assert ( isinstance( ctx.exception.__cause__, AttributeError ) )

    def testFreeze ( self ) :
        self.registry.register( TypeTag.STRING, upper ).freeze()
        with self.assertRaises( RegistryFrozen ) :
            self.registry.register( TypeTag.INTEGER, upper )
        self.assertEqual( self.registry.apply( "name", "x", TypeTag.STRING ), "X" )

    def testTagTransform ( self ) :
        """Tag transforms apply to every property of that kind, and see property names"""
        encoder = OxmapEncoder().add_type( TypeTag.INTEGER, lambda name, value : value * 100 if name == "cents" else value )
        result = encoder.map( Amounts( cents = 3, count = 3 ) )
        assert ( "<cents>300</cents>" in result )
        assert ( "<count>3</count>" in result )

    def testEnum ( self ) :
        encoder = OxmapEncoder().add_type( Enum, lambda name, value : value and value.name.lower() )
        assert ( "<level>high</level>" in encoder.map( Amounts( level = Level.HIGH ) ) )

class Level ( Enum ) :
    LOW = 1
    HIGH = 2

@dataclass
class Amounts :
    cents : int = None
    count : int = None
    level : Level = None

if __name__ == "__main__":
    unittest.main()
