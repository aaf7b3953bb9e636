#    oxmap/__init__.py - Object-to-XML MAPper
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
r"""OXMAP (Object-to-XML MAPper) writes annotated Python objects as XML documents without
any hand-written marshalling code.  Classes are described once, with type hints and a few
role markers, and every instance is then written the same way.

Each property of an object becomes one of

 - an attribute of the object's element (``ATTRIBUTE`` marker);
 - a CDATA section inside the element (``CDATA`` marker);
 - the text content of the element (``NODE_VALUE`` marker);
 - one child element per entry, for collections and the values of mappings (no wrapping
   element);
 - a nested element, for objects (recursively);
 - a child element holding the value as text, for everything else.

Properties whose value is ``None`` are never written.  Booleans are written as ``1`` and
``0``.  The root element is named after the class of the object.  For example::

    @dataclass
    class Person :
        id : Annotated[int, ATTRIBUTE] = None
        name : str = None
        active : bool = None
        tags : list[str] = None

    OxmapEncoder().map( Person( 42, "Ada", True, [ "x", "y" ] ) )

produces::

    <?xml version="1.0" encoding="UTF-8"?>
    <Person id="42">
        <name>Ada</name>
        <active>1</active>
        <tags>x</tags>
        <tags>y</tags>
    </Person>

By default the document is built as a tree (:mod:`oxmap.DOM`).  :mod:`oxmap.SAX` writes it
front to back instead, at the price of CDATA support.  Both modules provide
:mod:`pickle`-like ``dumps`` and ``dump`` functions.

Values of a given declared type can be transformed before they are written
(:meth:`OxmapEncoder.add_type`), and tag/attribute names can be converted with any
``str -> str`` callable (:mod:`oxmap.names`).

A ``map`` call either returns a complete document or raises a
:class:`oxmap.errors.SerializationFailure`.  The input objects are never modified.
"""
import logging
from collections.abc import Mapping

from oxmap.errors import *
from oxmap.errors import __all__ as _errors
from oxmap.meta import ABSENT, DEFAULT_TYPE, AnnotationExtractor, PropertyType, TypeTag
from oxmap.markers import ATTRIBUTE, CDATA, NODE_VALUE, PLAIN, RoleResolver, XmlRole, xml_field
from oxmap.coerce import TypeRegistry
from oxmap.names import identity, camel_case, CamelCasePropertyNameConverter
from oxmap.DOM import TreeSink

__version__ = "0.1"
__all__ = [ 'OxmapEncoder', 'OxmapProperty', 'stringify', 'TypeTag', 'PropertyType', 'XmlRole'
    , 'ATTRIBUTE', 'CDATA', 'NODE_VALUE', 'PLAIN', 'xml_field', 'camel_case'
    , 'CamelCasePropertyNameConverter' ] + _errors

log = logging.getLogger( __name__ )

class OxmapProperty ( object ) :
    r"""What the encoder knows about one property of a class: its ``name``, declared
    ``type``, ``role`` and the ``tag`` (converted name) it is written under."""
    __slots__ = ( 'name', 'type', 'role', 'tag' )
    def __init__ ( self, name, type, role, tag ) :
        self.name = name
        self.type = type
        self.role = role
        self.tag = tag
    def __repr__ ( self ) :
        return "<OxmapProperty:" + ",".join( slot + "=" + str( getattr( self, slot ) ) for slot in self.__slots__ ) + ">"

def stringify ( value ) :
    if isinstance( value, bool ) :
        return "1" if value else "0"
    return str( value )

class OxmapEncoder ( object ) :
    r"""Encodes object graphs into XML documents.

    ``extractor`` lists properties, their declared types and their values
    (:class:`oxmap.meta.AnnotationExtractor` by default).  ``name_converter`` is applied to
    every tag and attribute name, including the root's.  ``sink`` is called without
    arguments once per ``map`` call to obtain the output (:class:`oxmap.DOM.TreeSink` by
    default).  ``markers`` is the annotation service handed to the
    :class:`oxmap.markers.RoleResolver`.

    Class descriptions are computed once per class and kept for the life of the encoder.
    """
    def __init__ ( self, extractor = None, name_converter = None, sink = None, markers = None ) :
        self.extractor = extractor or AnnotationExtractor()
        if name_converter is None :
            name_converter = identity
        elif not hasattr( name_converter, '__call__' ) :
            name_converter = name_converter.convert
        self.name_converter = name_converter
        self.sink_factory = sink or TreeSink
        self.roles = RoleResolver( markers )
        self.types = TypeRegistry()
        self.plans = {}
        self.active = None

    def add_type ( self, key, transform ) :
        r"""Registers ``transform( name, value )`` for properties declared with ``key``
        (a :class:`oxmap.meta.TypeTag` or a class).  Returns the encoder."""
        if self.active is not None :
            raise RegistryFrozen( "types cannot be registered while a document is being mapped." )
        self.types.register( key, transform )
        return self

    def map ( self, instance ) :
        r"""Returns the XML document for ``instance`` as a string."""
        return self.encode( instance, self.sink_factory() ).finish()

    def encode ( self, instance, sink ) :
        r"""Writes ``instance`` as the root element of ``sink`` and returns the sink,
        which still has to be finished."""
        tag = self.convert_name( self.extractor.short_name( type( instance ) ) )
        log.debug( "mapping %s to <%s> using %s", type( instance ).__name__, tag, type( sink ).__name__ )
        outer, self.active = self.active, []
        try :
            self.encode_object( sink, None, tag, instance )
        finally :
            self.active = outer
        return sink

    def convert_name ( self, name ) :
        return self.name_converter( name )

    def describe ( self, cls ) :
        r"""Returns the list of :class:`OxmapProperty` for ``cls``, in property order."""
        try :
            return self.plans[cls]
        except KeyError :
            pass
        plan = []
        for name in self.extractor.list_properties( cls ) :
            kind = self.extractor.get_declared_type( cls, name ) or DEFAULT_TYPE
            role = self.roles.resolve( cls, name )
            if role is not PLAIN and ( kind.collection or kind.tag is TypeTag.OBJECT ) :
                raise InvalidPropertyRole( "%s.%s: the %s role is only valid on scalar properties." % ( cls.__name__, name, role.value ) )
            plan.append( OxmapProperty( name, kind, role, self.convert_name( name ) ) )
        log.debug( "described %s: %r", cls.__name__, plan )
        self.plans[cls] = plan
        return plan

    def encode_object ( self, sink, parent, tag, instance ) :
        if id( instance ) in self.active :
            raise SerializationFailure( "%s instance refers back to itself through <%s>; cycles cannot be written as XML." % ( type( instance ).__name__, tag ) )
        self.active.append( id( instance ) )
        handle = sink.open( parent, tag )
        self.encode_properties( sink, handle, instance )
        sink.close( handle )
        self.active.pop()

    def encode_properties ( self, sink, handle, instance ) :
        cls = type( instance )
        plan = self.describe( cls )
        if not sink.supports_cdata :
            for prop in plan :
                if prop.role is CDATA :
                    raise UnsupportedRoleForSink( "%s.%s is a CDATA section, which %s cannot write." % ( cls.__name__, prop.name, type( sink ).__name__ ) )
        # all attributes of an element precede its content.
        content = []
        for prop in plan :
            value = self.extractor.get_value( instance, prop.name )
            if value is ABSENT :
                log.debug( "%s instance has no '%s'", cls.__name__, prop.name )
                continue
            key = self.types.key_for( prop.type )
            if key is not None :
                value = self.types.apply( prop.name, value, key )
            if value is None or value is ABSENT :
                continue
            if prop.role is ATTRIBUTE :
                sink.attribute( handle, prop.tag, stringify( value ) )
            else :
                content.append( ( prop, value ) )
        for prop, value in content :
            if prop.role is CDATA :
                sink.cdata( handle, stringify( value ) )
            elif prop.role is NODE_VALUE :
                self._text( sink, handle, value )
            elif prop.type.collection :
                self.encode_collection( sink, handle, prop.type.value_type, prop.tag, value )
            else :
                self.encode_object_or_scalar( sink, handle, prop.type, prop.tag, value )

    def encode_collection ( self, sink, handle, kind, tag, values ) :
        if isinstance( values, Mapping ) :
            values = values.values()
        try :
            entries = iter( values )
        except TypeError as exc :
            raise SerializationFailure( "<%s> is declared as a collection but holds a %s." % ( tag, type( values ).__name__ ) ) from exc
        for value in entries :
            if value is not None :
                self.encode_object_or_scalar( sink, handle, kind, tag, value )

    def encode_object_or_scalar ( self, sink, handle, kind, tag, value ) :
        if kind.tag is TypeTag.OBJECT or ( kind.tag is TypeTag.MIXED and self._is_object( value ) ) :
            self.encode_object( sink, handle, tag, value )
        else :
            child = sink.open( handle, tag )
            self._text( sink, child, value )
            sink.close( child )

    def _is_object ( self, value ) :
        is_object = getattr( self.extractor, 'is_object', None )
        return is_object is not None and is_object( type( value ) )

    def _text ( self, sink, handle, value ) :
        text = stringify( value )
        if text :
            sink.text( handle, text )
