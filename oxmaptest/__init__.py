import unittest
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import date
from typing import Annotated, Any, ClassVar, Dict, List, Optional

from oxmap import OxmapEncoder, stringify, ATTRIBUTE, CDATA, NODE_VALUE, camel_case
from oxmap.errors import ( SerializationFailure, MetadataUnavailable, CoercionFailure
    , InvalidPropertyRole, MalformedOutput, RegistryFrozen )

class DefaultTestCase ( unittest.TestCase ) :
    sink = None

    def encoder ( self, **kwargs ) :
        return OxmapEncoder( sink = self.sink, **kwargs )

    def _perform ( self, data, encoder = None ) :
        return ( encoder or self.encoder() ).map( data )

    def _body ( self, data, encoder = None ) :
        r"""The document without its XML declaration."""
        result = self._perform( data, encoder )
        assert ( result.startswith( "<?xml " ) )
        return result.split( "?>", 1 )[1].strip()

    def _tree ( self, data, encoder = None ) :
        return ET.fromstring( self._perform( data, encoder ).encode( 'utf-8' ) )

    def runTest( self ) :
        pass

class OxmapTests ( DefaultTestCase ) :
    def testEmpty ( self ) :
        """An object with no values set is a single empty root element"""
        self.assertEqual( self._body( Person() ), "<Person/>" )

    def testStringify ( self ) :
        """Booleans are written as 1 and 0"""
        assert ( stringify( True ) == "1" )
        assert ( stringify( False ) == "0" )
        self.assertEqual( stringify( 42 ), "42" )
        self.assertEqual( stringify( "true" ), "true" )

    def testPerson ( self ) :
        """Scalars, a boolean and a collection without any markers"""
        data = Person( name = "Ada", active = True, tags = [ "x", "y" ] )
        self.assertEqual( self._body( data ), "<Person><name>Ada</name><active>1</active><tags>x</tags><tags>y</tags></Person>" )

    def testFalse ( self ) :
        """False is a value, not an absence"""
        self.assertEqual( self._body( Person( active = False ) ), "<Person><active>0</active></Person>" )

    def testAbsentLeavesNoTrace ( self ) :
        """None values produce neither elements nor attributes"""
        result = self._perform( Employee( name = "Grace" ) )
        for name in ( 'id', 'address', 'previous' ) :
            assert ( name not in result )
        self.assertEqual( self._body( Employee( name = "Grace" ) ), "<Employee><name>Grace</name></Employee>" )

    def testAttribute ( self ) :
        """ATTRIBUTE properties go on the element, not in a child"""
        self.assertEqual( self._body( Employee( id = 42 ) ), '<Employee id="42"/>' )

    def testCollection ( self ) :
        """A collection of N entries gives N siblings, in order, without a wrapper"""
        tags = [ "c", "a", "b", "a" ]
        root = self._tree( Person( tags = tags ) )
        self.assertEqual( [ child.tag for child in root ], [ "tags" ] * len( tags ) )
        self.assertEqual( [ child.text for child in root ], tags )

    def testEmptyCollection ( self ) :
        self.assertEqual( self._body( Person( tags = [] ) ), "<Person/>" )

    def testNoneInCollection ( self ) :
        """None entries of a collection are skipped"""
        self.assertEqual( self._body( Person( tags = [ "x", None, "y" ] ) ), "<Person><tags>x</tags><tags>y</tags></Person>" )

    def testTupleAndSet ( self ) :
        data = Bag( numbers = ( 1, 2, 3 ), flags = frozenset( [ True ] ) )
        self.assertEqual( self._body( data ), "<Bag><numbers>1</numbers><numbers>2</numbers><numbers>3</numbers><flags>1</flags></Bag>" )

    def testPropertyOrder ( self ) :
        """Elements follow declaration order; attributes keep their own order"""
        data = Ordering( first = "a", code = "c", last = 3, kind = "k" )
        self.assertEqual( self._body( data ), '<Ordering code="c" kind="k"><first>a</first><last>3</last></Ordering>' )

    def testRolePriority ( self ) :
        """ATTRIBUTE wins over NODE_VALUE when both are present"""
        self.assertEqual( self._body( Conflicted( value = "v" ) ), '<Conflicted value="v"/>' )

    def testNodeValue ( self ) :
        """NODE_VALUE properties are the text of the enclosing element"""
        self.assertEqual( self._body( Price( currency = "EUR", amount = 9.5 ) ), '<Price currency="EUR">9.5</Price>' )

    def testNested ( self ) :
        """Object properties become nested elements"""
        data = Employee( address = Address( city = "X" ) )
        self.assertEqual( self._body( data ), "<Employee><address><city>X</city></address></Employee>" )

    def testNestedCollection ( self ) :
        data = Employee( id = 7, previous = [ Address( city = "A" ), Address( city = "B", zip = "01" ) ] )
        self.assertEqual( self._body( data ), '<Employee id="7"><previous><city>A</city></previous><previous><city>B</city><zip>01</zip></previous></Employee>' )

    def testNodeValueWithChildren ( self ) :
        """Text content sits next to child elements untouched"""
        root = self._tree( Label( text = "hello", note = "n" ) )
        self.assertEqual( root.text, "hello" )
        self.assertEqual( root.find( "note" ).text, "n" )
        self.assertEqual( root.find( "note" ).tail, None )

    def testMapping ( self ) :
        """Mappings are written as one element per value, in iteration order"""
        data = Scores( scores = { "b" : 2, "a" : 1 }, by_name = { "x" : Address( city = "X" ) } )
        self.assertEqual( self._body( data ), "<Scores><scores>2</scores><scores>1</scores><by_name><city>X</city></by_name></Scores>" )

    def testNestedAttributes ( self ) :
        data = Order( number = "N1", total = Price( currency = "USD", amount = 3 ) )
        self.assertEqual( self._body( data ), '<Order number="N1"><total currency="USD">3</total></Order>' )

    def testMixedObject ( self ) :
        """Untyped values are nested when they are objects, text otherwise"""
        self.assertEqual( self._body( Holder( content = Address( city = "Y" ) ) ), "<Holder><content><city>Y</city></content></Holder>" )
        self.assertEqual( self._body( Holder( content = 12 ) ), "<Holder><content>12</content></Holder>" )

    def testPlainClass ( self ) :
        """Annotated classes that are not dataclasses; unset properties are skipped"""
        self.assertEqual( self._body( Titled( "t" ) ), "<Titled><title>t</title></Titled>" )

    def testEscaping ( self ) :
        data = Person( name = '<a href="x">&amp;</a>' )
        root = self._tree( data )
        self.assertEqual( root.find( 'name' ).text, data.name )

    def testCoercion ( self ) :
        """A transform registered for a class is applied to properties of that class"""
        encoder = self.encoder().add_type( date, lambda name, value : value.isoformat() )
        data = Event( name = "launch", createdAt = date( 2024, 1, 1 ) )
        self.assertEqual( self._body( data, encoder ), "<Event><name>launch</name><createdAt>2024-01-01</createdAt></Event>" )

    def testCoercionSeesNone ( self ) :
        """Transforms run before None values are dropped and may supply a value"""
        seen = []
        def transform ( name, value ) :
            seen.append( ( name, value ) )
            return "never" if value is None else None
        encoder = self.encoder().add_type( date, transform )
        self.assertEqual( self._body( Event( createdAt = None ), encoder ), "<Event><createdAt>never</createdAt></Event>" )
        self.assertEqual( self._body( Event( createdAt = date( 2000, 1, 1 ) ), encoder ), "<Event/>" )
        self.assertEqual( seen, [ ( "createdAt", None ), ( "createdAt", date( 2000, 1, 1 ) ) ] )

    def testCoercionFailure ( self ) :
        """A failing transform fails the whole call"""
        def transform ( name, value ) :
            raise KeyError( name )
        encoder = self.encoder().add_type( date, transform )
        with self.assertRaises( CoercionFailure ) as ctx :
            self._perform( Event( name = "x", createdAt = date.today() ), encoder )
        assert ( isinstance( ctx.exception.__cause__, KeyError ) )

    def testRegistrationWhileMapping ( self ) :
        encoder = self.encoder()
        encoder.add_type( date, lambda name, value : encoder.add_type( str, lambda n, v : v ) )
        with self.assertRaises( CoercionFailure ) as ctx :
            self._perform( Event( createdAt = date.today() ), encoder )
        assert ( isinstance( ctx.exception.__cause__, RegistryFrozen ) )

    def testNameConverter ( self ) :
        """The converter renames the root element, children and attributes"""
        encoder = self.encoder( name_converter = camel_case )
        data = User_Profile( user_id = 3, first_name = "Ada", is_admin = False )
        self.assertEqual( self._body( data, encoder ), '<userProfile userId="3"><firstName>Ada</firstName><isAdmin>0</isAdmin></userProfile>' )

    def testReusable ( self ) :
        encoder = self.encoder()
        data = Person( name = "Ada", tags = [ "x" ] )
        self.assertEqual( self._perform( data, encoder ), self._perform( data, encoder ) )

    def testInputUntouched ( self ) :
        data = Employee( id = 1, previous = [ Address( city = "A" ) ] )
        self._perform( data )
        self.assertEqual( data, Employee( id = 1, previous = [ Address( city = "A" ) ] ) )

    def testCycle ( self ) :
        """Objects that contain themselves cannot be written"""
        data = Chain( name = "a" )
        data.next = Chain( name = "b", next = data )
        with self.assertRaises( SerializationFailure ) :
            self._perform( data )

    def testSharedObject ( self ) :
        """The same object may appear more than once when it is not a cycle"""
        shared = Address( city = "S" )
        data = Employee( address = shared, previous = [ shared ] )
        self.assertEqual( self._body( data ), "<Employee><address><city>S</city></address><previous><city>S</city></previous></Employee>" )

    def testInvalidRole ( self ) :
        """Only scalar properties can carry a role marker"""
        with self.assertRaises( InvalidPropertyRole ) :
            self._perform( BadRole() )

    def testUnintrospectable ( self ) :
        with self.assertRaises( MetadataUnavailable ) :
            self._perform( 42 )

    def testMalformedName ( self ) :
        """Names that are not legal XML fail the call"""
        encoder = self.encoder( name_converter = lambda name : "bad name" if name == "city" else name )
        with self.assertRaises( MalformedOutput ) :
            self._perform( Employee( address = Address( city = "X" ) ), encoder )

    def testIllegalCharacter ( self ) :
        with self.assertRaises( MalformedOutput ) :
            self._perform( Person( name = "bell\x07" ) )

@dataclass
class Address :
    city : str = None
    zip : Optional[str] = None

@dataclass
class Person :
    name : str = None
    active : bool = None
    tags : List[str] = None

@dataclass
class Employee :
    id : Annotated[int, ATTRIBUTE] = None
    name : str = None
    address : Address = None
    previous : List[Address] = None

@dataclass
class Price :
    currency : Annotated[str, ATTRIBUTE] = None
    amount : Annotated[float, NODE_VALUE] = None

@dataclass
class Label :
    text : Annotated[str, NODE_VALUE] = None
    note : str = None

@dataclass
class Scores :
    scores : Dict[str, int] = None
    by_name : dict[str, Address] = None

@dataclass
class Order :
    number : Annotated[str, ATTRIBUTE] = None
    total : Price = None

@dataclass
class Conflicted :
    value : Annotated[str, NODE_VALUE, ATTRIBUTE] = None

@dataclass
class Note :
    title : str = None
    body : Annotated[Optional[str], CDATA] = None

@dataclass
class Event :
    name : str = None
    createdAt : date = None

@dataclass
class Ordering :
    first : str = None
    code : Annotated[str, ATTRIBUTE] = None
    last : int = None
    kind : Annotated[str, ATTRIBUTE] = None

@dataclass
class Bag :
    numbers : tuple[int, ...] = None
    flags : frozenset[bool] = None

@dataclass
class Holder :
    content : Any = None

@dataclass
class User_Profile :
    user_id : Annotated[int, ATTRIBUTE] = None
    first_name : str = None
    is_admin : bool = None

@dataclass
class Chain :
    name : str = None
    next : Optional['Chain'] = None

@dataclass
class BadRole :
    items : Annotated[List[str], ATTRIBUTE] = None

class Titled ( object ) :
    kind : ClassVar[str] = "titled"
    title : str
    pages : int
    def __init__ ( self, title ) :
        self.title = title
