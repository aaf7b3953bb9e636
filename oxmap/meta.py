#    oxmap/meta.py - property metadata for annotated classes.
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
r"""oxmap/meta.py describes the properties of a class for the encoder.

The encoder never looks at a class directly; it asks an extractor for

 - the ordered list of property names of a class (``list_properties``);
 - the declared type of each property (``get_declared_type``);
 - the current value of a property on an instance (``get_value``).

:class:`AnnotationExtractor` answers these from the class type hints, which makes plain
annotated classes and :mod:`dataclasses` work without further declarations::

    @dataclass
    class Person :
        name : str = None
        active : bool = None
        tags : list[str] = None

Properties are listed in declaration order, base classes first.  Names starting with
an underscore and ``ClassVar`` annotations are not properties.
"""
import collections.abc
import dataclasses
import inspect
import types
import typing
from collections import defaultdict, deque, OrderedDict
from enum import Enum

from oxmap.errors import MetadataUnavailable

__all__ = [ 'TypeTag', 'PropertyType', 'ABSENT', 'AnnotationExtractor', 'type_hints', 'unwrap'
    , 'COLLECTION_ORIGINS', 'MAPPING_ORIGINS' ]

class TypeTag ( Enum ) :
    STRING = 'string'
    INTEGER = 'int'
    FLOAT = 'float'
    BOOLEAN = 'bool'
    OBJECT = 'object'
    MIXED = 'mixed'

class _Absent ( object ) :
    __slots__ = ()
    def __repr__ ( self ) :
        return "<ABSENT>"
    def __bool__ ( self ) :
        return False

# returned by get_value for properties the instance does not carry at all.
ABSENT = _Absent()

class PropertyType ( object ) :
    r"""Declared type of a property.  ``tag`` is a :class:`TypeTag`, ``cls`` the annotated
    class (if any), ``collection`` whether values are iterated into repeated elements and
    ``value_type`` the :class:`PropertyType` of the collection entries."""
    __slots__ = ( 'tag', 'cls', 'collection', 'value_type' )
    def __init__ ( self, tag, cls = None, collection = False, value_type = None ) :
        self.tag = tag
        self.cls = cls
        self.collection = collection
        self.value_type = value_type
        if collection and value_type is None :
            self.value_type = PropertyType( TypeTag.STRING, str )
    def __eq__ ( self, other ) :
        return isinstance( other, PropertyType ) and all( getattr( self, slot ) == getattr( other, slot ) for slot in self.__slots__ )
    def __hash__ ( self ) :
        return hash( ( self.tag, self.cls, self.collection, self.value_type ) )
    def __repr__ ( self ) :
        return "<PropertyType:" + ",".join( slot + "=" + str( getattr( self, slot ) ) for slot in self.__slots__ if getattr( self, slot ) is not None ) + ">"

DEFAULT_TYPE = PropertyType( TypeTag.STRING, str )

SCALARS = { str : TypeTag.STRING, int : TypeTag.INTEGER, float : TypeTag.FLOAT, bool : TypeTag.BOOLEAN }

COLLECTION_ORIGINS = set( [ list, tuple, set, frozenset, deque
    , collections.abc.Sequence, collections.abc.MutableSequence, collections.abc.Set
    , collections.abc.MutableSet, collections.abc.Iterable, collections.abc.Collection ] )

# mappings are collections over their values.
MAPPING_ORIGINS = set( [ dict, OrderedDict, defaultdict, collections.abc.Mapping, collections.abc.MutableMapping ] )

_UNION_TYPES = set( [ typing.Union ] )
if hasattr( types, 'UnionType' ) :
    _UNION_TYPES.add( types.UnionType )

def _is_property ( name, hint ) :
    if name.startswith( '_' ) :
        return False
    if hint is typing.ClassVar or typing.get_origin( hint ) is typing.ClassVar :
        return False
    return not isinstance( hint, dataclasses.InitVar ) and hint is not dataclasses.InitVar

def type_hints ( cls ) :
    r"""Returns the resolved type hints (``Annotated`` extras included) of the
    properties of ``cls``, in declaration order."""
    if not isinstance( cls, type ) or cls.__module__ == 'builtins' :
        raise MetadataUnavailable( "'%s' cannot be introspected for properties." % getattr( cls, '__name__', type( cls ).__name__ ) )
    try :
        hints = typing.get_type_hints( cls, include_extras = True )
    except ( NameError, TypeError, AttributeError ) as exc :
        raise MetadataUnavailable( "type hints of %s.%s cannot be resolved: %s" % ( cls.__module__, cls.__qualname__, exc ) ) from exc
    return dict( ( name, hint ) for name, hint in hints.items() if _is_property( name, hint ) )

def unwrap ( hint ) :
    r"""Strips ``Annotated`` and ``Optional`` layers.  Returns ``( hint, extras )``."""
    extras = []
    while True :
        origin = typing.get_origin( hint )
        if origin is typing.Annotated :
            extras.extend( hint.__metadata__ )
            hint = hint.__origin__
        elif origin in _UNION_TYPES :
            members = [ arg for arg in typing.get_args( hint ) if arg is not type( None ) ]
            if len( members ) != 1 :
                return hint, extras
            hint = members[0]
        else :
            return hint, extras

class AnnotationExtractor ( object ) :
    r"""Metadata extractor and value accessor driven by class annotations."""

    def list_properties ( self, cls ) :
        return list( type_hints( cls ) )

    def get_declared_type ( self, cls, name ) :
        hint = type_hints( cls ).get( name )
        if hint is None :
            return DEFAULT_TYPE
        return self.describe_hint( hint )

    def get_value ( self, instance, name ) :
        return getattr( instance, name, ABSENT )

    def short_name ( self, cls ) :
        return cls.__name__

    def is_object ( self, cls ) :
        r"""True when ``cls`` is a class whose instances encode as nested elements: a
        dataclass, or a non-builtin class that declares annotated properties."""
        if not isinstance( cls, type ) or cls.__module__ == 'builtins' or issubclass( cls, Enum ) :
            return False
        if dataclasses.is_dataclass( cls ) :
            return True
        return any( inspect.get_annotations( klass ) for klass in cls.__mro__ if klass is not object )

    def describe_hint ( self, hint ) :
        hint, _ = unwrap( hint )
        if hint is typing.Any :
            return PropertyType( TypeTag.MIXED )
        if hint in SCALARS :
            return PropertyType( SCALARS[hint], hint )
        origin = typing.get_origin( hint )
        if hint in MAPPING_ORIGINS or origin in MAPPING_ORIGINS :
            args = typing.get_args( hint )
            return PropertyType( TypeTag.MIXED, origin or hint, collection = True, value_type = self.describe_hint( args[1] ) if len( args ) == 2 else DEFAULT_TYPE )
        if hint in COLLECTION_ORIGINS or origin in COLLECTION_ORIGINS :
            return PropertyType( TypeTag.MIXED, origin or hint, collection = True, value_type = self._value_type( origin or hint, typing.get_args( hint ) ) )
        if isinstance( hint, type ) and origin is None and self.is_object( hint ) :
            return PropertyType( TypeTag.OBJECT, hint )
        return PropertyType( TypeTag.MIXED, hint if isinstance( hint, type ) else None )

    def _value_type ( self, origin, args ) :
        if not args :
            return DEFAULT_TYPE
        if origin is tuple :
            if len( args ) == 2 and args[1] is Ellipsis :
                args = args[:1]
            elif len( set( args ) ) > 1 :
                return PropertyType( TypeTag.MIXED )
        return self.describe_hint( args[0] )
