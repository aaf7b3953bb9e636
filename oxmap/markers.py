#    oxmap/markers.py - XML roles attached to properties.
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
r"""oxmap/markers.py decides how a property is represented in XML.

A property is an ordinary child element unless it carries one of the markers

    ``ATTRIBUTE``  - written as an attribute of the enclosing element;
    ``CDATA``      - written as a CDATA section inside the enclosing element;
    ``NODE_VALUE`` - written as the text content of the enclosing element.

Markers are attached with :data:`typing.Annotated` or through dataclass field metadata::

    @dataclass
    class Price :
        currency : Annotated[str, ATTRIBUTE] = None
        amount : float = xml_field( NODE_VALUE, default = None )

When several markers are present the first one in :data:`PRIORITY` wins.
"""
import dataclasses
from enum import Enum

from oxmap.meta import type_hints, unwrap

__all__ = [ 'XmlRole', 'ATTRIBUTE', 'CDATA', 'NODE_VALUE', 'PLAIN', 'PRIORITY'
    , 'MarkerReader', 'RoleResolver', 'xml_field' ]

# key used in dataclasses.field( metadata = ... )
METADATA_KEY = 'xml'

class XmlRole ( Enum ) :
    ATTRIBUTE = 'attribute'
    CDATA = 'cdata'
    NODE_VALUE = 'node-value'
    PLAIN = 'plain'

ATTRIBUTE = XmlRole.ATTRIBUTE
CDATA = XmlRole.CDATA
NODE_VALUE = XmlRole.NODE_VALUE
PLAIN = XmlRole.PLAIN

PRIORITY = ( ATTRIBUTE, CDATA, NODE_VALUE )

def xml_field ( *roles, **kwargs ) :
    r"""``dataclasses.field`` carrying the given role markers."""
    metadata = dict( kwargs.pop( 'metadata', None ) or {} )
    metadata[METADATA_KEY] = roles
    return dataclasses.field( metadata = metadata, **kwargs )

def _as_markers ( value ) :
    if isinstance( value, XmlRole ) :
        return [ value ]
    if isinstance( value, ( list, tuple, set, frozenset ) ) :
        return [ item for item in value if isinstance( item, XmlRole ) ]
    return []

class MarkerReader ( object ) :
    r"""Annotation service: the set of role markers present on a property."""

    def get_markers ( self, cls, name ) :
        markers = set()
        hint = type_hints( cls ).get( name )
        if hint is not None :
            for extra in unwrap( hint )[1] :
                markers.update( _as_markers( extra ) )
        if dataclasses.is_dataclass( cls ) :
            for field in dataclasses.fields( cls ) :
                if field.name == name :
                    markers.update( _as_markers( field.metadata.get( METADATA_KEY ) ) )
        markers.discard( PLAIN )
        return markers

class RoleResolver ( object ) :
    def __init__ ( self, reader = None ) :
        self.reader = reader or MarkerReader()

    def resolve ( self, cls, name ) :
        markers = self.reader.get_markers( cls, name )
        for role in PRIORITY :
            if role in markers :
                return role
        return PLAIN
