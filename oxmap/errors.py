#    oxmap/errors.py - failure types raised while mapping objects to XML.
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
r"""Every failure raised on purpose by :meth:`oxmap.OxmapEncoder.map` derives from
:class:`SerializationFailure`.  A ``map`` call either returns a complete document or
raises one of these; there is never a partially written document.
"""

__all__ = [ 'SerializationFailure', 'MetadataUnavailable', 'CoercionFailure'
    , 'UnsupportedRoleForSink', 'InvalidPropertyRole', 'MalformedOutput', 'RegistryFrozen' ]

class SerializationFailure ( ValueError ) :
    r"""The object graph could not be expressed as an XML document."""

class MetadataUnavailable ( SerializationFailure, TypeError ) :
    r"""The metadata extractor cannot describe a class or one of its properties."""

class CoercionFailure ( SerializationFailure ) :
    r"""A registered type transform raised.  The original exception is chained."""

class UnsupportedRoleForSink ( SerializationFailure ) :
    r"""A property role cannot be expressed by the output sink (CDATA on a stream)."""

class InvalidPropertyRole ( SerializationFailure, TypeError ) :
    r"""A role other than plain was put on a collection or object property."""

class MalformedOutput ( SerializationFailure ) :
    r"""The sink produced (or was asked to produce) text that is not well-formed XML."""

class RegistryFrozen ( RuntimeError ) :
    pass
