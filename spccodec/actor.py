# Copyright 2019 Open End AB
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from decimal import Decimal

from .fields import validate_line

ACTOR_CR = 0    # Creditor
ACTOR_UCR = 1   # Ultimate creditor
ACTOR_UDR = 2   # Ultimate debtor

roles = (ACTOR_CR, ACTOR_UCR, ACTOR_UDR)

ADDTYPE_STRUCTURED = 'S'
ADDTYPE_COMBINED = 'K'

VERSION_ADDTYPE = Decimal('2.00')  # address type exists from this version

name_length = 70
address_line_1_length = 70
address_line_2_length = 16
combined_address_line_2_length = 70
postcode_length = 16
location_length = 35
country_length = 2

# Address type is left out; it doesn't make an actor populated on its own
entry_fields = ('name', 'address_line_1', 'address_line_2', 'postcode',
                'location', 'country')

fields = ('address_type',) + entry_fields


class ActorRecord(object):

    def __init__(self, role):
        self.role = role
        self.name = ''
        self.address_type = ''
        self.address_line_1 = ''
        self.address_line_2 = ''
        self.postcode = ''
        self.location = ''
        self.country = ''

    def __repr__(self):
        return '<ActorRecord %d %r>' % (self.role, self.name)

    def __eq__(self, other):
        if not isinstance(other, ActorRecord):
            return NotImplemented
        return (self.role, self.as_tuple()) == (other.role, other.as_tuple())

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def as_tuple(self):
        return tuple(getattr(self, field) for field in fields)

    def is_blank(self):
        return not any((getattr(self, field) or '').strip()
                       for field in entry_fields)

    def normalize(self):
        # Fields rejected as mandatory are None, make them blank
        for field in fields:
            if getattr(self, field) is None:
                setattr(self, field, '')

    def address_line_2_length(self):
        if self.address_type == ADDTYPE_COMBINED:
            return combined_address_line_2_length
        return address_line_2_length

    def set_name(self, value):
        self.name = validate_line(value, True, name_length)

    def set_address_type(self, value, version):
        if version < VERSION_ADDTYPE:
            # Not part of the code before 2.0, so it must not change
            # the length of address line 2 either
            self.address_type = ''
            return
        if value is not None:
            value = value.upper()
        self.address_type = validate_line(value, True, 1)

    def set_address_line_1(self, value):
        self.address_line_1 = validate_line(value, False,
                                            address_line_1_length)

    def set_address_line_2(self, value):
        self.address_line_2 = validate_line(value, False,
                                           self.address_line_2_length())

    def set_postcode(self, value):
        self.postcode = validate_line(value, True, postcode_length)

    def set_location(self, value):
        self.location = validate_line(value, True, location_length)

    def set_country(self, value):
        if value is not None:
            value = value.upper()
        self.country = validate_line(value, True, country_length)


def validate_actor(actor, version, required=False):
    """Return the names of the fields actor is missing or has wrong.

    An actor with nothing in it is fine, unless it is required (the
    creditor). As soon as anything is filled in, which fields are
    mandatory depends on version and, from 2.0, the address type."""
    def missing(*names):
        return [name for name in names if not getattr(actor, name)]

    if actor.is_blank():
        if required:
            return list(entry_fields)
        return []

    problems = missing('name')
    if version >= VERSION_ADDTYPE:
        if actor.address_type == ADDTYPE_STRUCTURED:
            problems += missing('address_line_1', 'postcode', 'location',
                                'country')
        elif actor.address_type == ADDTYPE_COMBINED:
            problems += missing('address_line_1', 'address_line_2')
        else:
            problems.append('address_type')
    else:
        problems += missing('postcode', 'location', 'country')
        if len(actor.address_line_2 or '') > address_line_2_length:
            problems.append('address_line_2')
    return problems
