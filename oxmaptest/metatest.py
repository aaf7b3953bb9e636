#!/usr/bin/env python
#    oxmaptest/metatest.py - test cases for the annotation metadata extractor
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
from collections import deque, OrderedDict
from dataclasses import dataclass, InitVar
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Union

from oxmap.meta import ABSENT, AnnotationExtractor, PropertyType, TypeTag
from oxmap.markers import ATTRIBUTE
from oxmap.errors import MetadataUnavailable
from oxmaptest import Address

class MetaTests ( unittest.TestCase ) :
    def setUp ( self ) :
        self.extractor = AnnotationExtractor()

    def testOrder ( self ) :
        """Properties come in declaration order, base classes first"""
        self.assertEqual( self.extractor.list_properties( Derived ), [ 'zeta', 'alpha', 'mid', 'omega' ] )

    def testNotProperties ( self ) :
        """Private names, ClassVar and InitVar annotations are left out"""
        self.assertEqual( self.extractor.list_properties( Hidden ), [ 'shown' ] )

    def testScalars ( self ) :
        for name, tag in ( ( 's', TypeTag.STRING ), ( 'i', TypeTag.INTEGER ), ( 'f', TypeTag.FLOAT ), ( 'b', TypeTag.BOOLEAN ) ) :
            self.assertEqual( self.extractor.get_declared_type( Kinds, name ).tag, tag )
            assert ( not self.extractor.get_declared_type( Kinds, name ).collection )

    def testOptionalAndAnnotated ( self ) :
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'maybe' ), PropertyType( TypeTag.INTEGER, int ) )
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'marked' ), PropertyType( TypeTag.BOOLEAN, bool ) )
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'piped' ), PropertyType( TypeTag.STRING, str ) )

    def testCollections ( self ) :
        kind = self.extractor.get_declared_type( Kinds, 'names' )
        assert ( kind.collection )
        self.assertEqual( kind.cls, list )
        self.assertEqual( kind.value_type, PropertyType( TypeTag.STRING, str ) )
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'places' ).value_type, PropertyType( TypeTag.OBJECT, Address ) )
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'queue' ).value_type.tag, TypeTag.FLOAT )
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'pair' ).value_type.tag, TypeTag.MIXED )
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'row' ).value_type.tag, TypeTag.INTEGER )

    def testMappings ( self ) :
        """Mappings are collections of their values"""
        kind = self.extractor.get_declared_type( Kinds, 'scores' )
        assert ( kind.collection )
        self.assertEqual( kind.cls, dict )
        self.assertEqual( kind.value_type, PropertyType( TypeTag.INTEGER, int ) )
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'index' ).value_type, PropertyType( TypeTag.OBJECT, Address ) )
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'ordered' ).value_type.tag, TypeTag.FLOAT )
        bare = self.extractor.get_declared_type( Kinds, 'table' )
        assert ( bare.collection )
        self.assertEqual( bare.value_type.tag, TypeTag.STRING )

    def testBareCollectionDefaultsToString ( self ) :
        kind = self.extractor.get_declared_type( Kinds, 'bare' )
        assert ( kind.collection )
        self.assertEqual( kind.value_type.tag, TypeTag.STRING )

    def testObjects ( self ) :
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'address' ), PropertyType( TypeTag.OBJECT, Address ) )

    def testMixed ( self ) :
        """Classes without properties, Any and unions are mixed"""
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'day' ), PropertyType( TypeTag.MIXED, date ) )
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'amount' ), PropertyType( TypeTag.MIXED, Decimal ) )
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'colour' ), PropertyType( TypeTag.MIXED, Colour ) )
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'anything' ), PropertyType( TypeTag.MIXED ) )
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'either' ), PropertyType( TypeTag.MIXED ) )

    def testUndeclaredDefaultsToString ( self ) :
        self.assertEqual( self.extractor.get_declared_type( Kinds, 'nothing' ), PropertyType( TypeTag.STRING, str ) )

    def testIsObject ( self ) :
        assert ( self.extractor.is_object( Address ) )
        assert ( self.extractor.is_object( Derived ) )
        assert ( not self.extractor.is_object( date ) )
        assert ( not self.extractor.is_object( Colour ) )
        assert ( not self.extractor.is_object( dict ) )

    def testGetValue ( self ) :
        data = Address( city = "X" )
        self.assertEqual( self.extractor.get_value( data, 'city' ), "X" )
        assert ( self.extractor.get_value( data, 'zip' ) is None )
        assert ( self.extractor.get_value( data, 'street' ) is ABSENT )

    def testShortName ( self ) :
        self.assertEqual( self.extractor.short_name( Outer.Inner ), "Inner" )

    def testUnresolvable ( self ) :
        """Annotations naming unknown types cannot be described"""
        with self.assertRaises( MetadataUnavailable ) :
            self.extractor.list_properties( Dangling )

    def testBuiltins ( self ) :
        for kind in ( int, str, list, dict ) :
            with self.assertRaises( MetadataUnavailable ) :
                self.extractor.list_properties( kind )

class Colour ( Enum ) :
    RED = 1

class Base ( object ) :
    zeta : str
    alpha : int

class Derived ( Base ) :
    mid : float
    omega : str

@dataclass
class Hidden :
    shown : str = None
    _private : str = None
    counter : ClassVar[int] = 0
    seed : InitVar[int] = None

class Kinds ( object ) :
    s : str
    i : int
    f : float
    b : bool
    maybe : Optional[int]
    marked : Annotated[bool, ATTRIBUTE]
    piped : str | None
    names : List[str]
    places : list[Address]
    queue : deque[float]
    pair : tuple[int, str]
    row : Sequence[int]
    bare : list
    scores : Dict[str, int]
    index : Mapping[str, Address]
    ordered : OrderedDict[str, float]
    table : dict
    address : Address
    day : date
    amount : Decimal
    colour : Colour
    anything : Any
    either : Union[int, str]

class Dangling ( object ) :
    ghost : "NoSuchType"

class Outer ( object ) :
    class Inner ( object ) :
        pass

if __name__ == "__main__":
    unittest.main()
