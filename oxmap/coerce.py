#    oxmap/coerce.py - user transforms for declared property types.
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
r"""A :class:`TypeRegistry` maps a declared type to a transform ``( name, value ) -> value``.

Keys are either a :class:`oxmap.meta.TypeTag` (every property of that kind) or a class
(every property annotated with that class or a subclass of it).  A class key is preferred
over a tag key; among class keys the nearest in the method resolution order wins::

    registry.register( datetime.date, lambda name, value : value and value.isoformat() )

The transform also receives ``None`` values and may return ``None`` to drop the property.
"""
import inspect
import logging

from oxmap.errors import CoercionFailure, RegistryFrozen

__all__ = [ 'TypeRegistry' ]

log = logging.getLogger( __name__ )

class TypeRegistry ( object ) :
    def __init__ ( self ) :
        self.transforms = {}
        self.frozen = False

    def register ( self, key, transform ) :
        if self.frozen :
            raise RegistryFrozen( "cannot register a transform for %r: the registry is frozen." % ( key, ) )
        if not hasattr( transform, '__call__' ) :
            raise TypeError( "transform for %r is not callable." % ( key, ) )
        log.debug( "registered transform %r for %r", transform, key )
        self.transforms[key] = transform
        return self

    def freeze ( self ) :
        self.frozen = True
        return self

    def is_registered ( self, key ) :
        return key in self.transforms

    def key_for ( self, kind ) :
        r"""The registered key matching the :class:`oxmap.meta.PropertyType` ``kind``,
        or ``None``."""
        if not self.transforms :
            return None
        if isinstance( kind.cls, type ) :
            for klass in inspect.getmro( kind.cls ) :
                if klass in self.transforms :
                    return klass
        if kind.tag in self.transforms :
            return kind.tag
        return None

    def apply ( self, name, value, key ) :
        try :
            return self.transforms[key]( name, value )
        except Exception as exc :
            raise CoercionFailure( "transform for %r failed on property '%s': %s" % ( key, name, exc ) ) from exc
