#    oxmap/names.py - property name converters.
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
r"""Name converters turn a property (or class) name into an XML tag or attribute name.
Any callable taking and returning a string will do."""
import re

__all__ = [ 'identity', 'camel_case', 'CamelCasePropertyNameConverter' ]

_separators = re.compile( r"[ _\-]+" )

def identity ( name ) :
    return name

def camel_case ( name ) :
    r"""``camel_case_property``, ``camel-case-property`` and ``Camel Case Property`` all
    become ``camelCaseProperty``.  Letters inside a word are left alone."""
    words = [ word for word in _separators.split( name ) if word ]
    if not words :
        return name
    joined = words[0] + "".join( word[0].upper() + word[1:] for word in words[1:] )
    return joined[0].lower() + joined[1:]

class CamelCasePropertyNameConverter ( object ) :
    def convert ( self, name ) :
        return camel_case( name )
    __call__ = convert
