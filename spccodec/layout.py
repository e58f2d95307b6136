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

# The order of the lines in the Swiss Payments Code, per version.
# Both rendering and parsing walk these, so they always agree on
# which line holds which field.

import collections
from decimal import Decimal

from .actor import ACTOR_CR, ACTOR_UCR, ACTOR_UDR

QRTYPE = 'QRTYPE'
VERSION = 'VERSION'
CODING = 'CODING'
ACCOUNT = 'ACCOUNT'
AMOUNT = 'AMOUNT'
CURRENCY = 'CURRENCY'
DUEDATE = 'DUEDATE'
REF_TYPE = 'REF_TYPE'
REF = 'REF'
UNSTR_MSG = 'UNSTR_MSG'
TRAILER = 'TRAILER'
BILLINFO = 'BILLINFO'
ALTSCHEMA1 = 'ALTSCHEMA1'
ALTSCHEMA2 = 'ALTSCHEMA2'

CR_ADDTYPE = 'CR_ADDTYPE'
CR_NAME = 'CR_NAME'
CR_ADDRESS1 = 'CR_ADDRESS1'
CR_ADDRESS2 = 'CR_ADDRESS2'
CR_POSTCODE = 'CR_POSTCODE'
CR_LOCATION = 'CR_LOCATION'
CR_COUNTRY = 'CR_COUNTRY'

UCR_ADDTYPE = 'UCR_ADDTYPE'
UCR_NAME = 'UCR_NAME'
UCR_ADDRESS1 = 'UCR_ADDRESS1'
UCR_ADDRESS2 = 'UCR_ADDRESS2'
UCR_POSTCODE = 'UCR_POSTCODE'
UCR_LOCATION = 'UCR_LOCATION'
UCR_COUNTRY = 'UCR_COUNTRY'

UDR_ADDTYPE = 'UDR_ADDTYPE'
UDR_NAME = 'UDR_NAME'
UDR_ADDRESS1 = 'UDR_ADDRESS1'
UDR_ADDRESS2 = 'UDR_ADDRESS2'
UDR_POSTCODE = 'UDR_POSTCODE'
UDR_LOCATION = 'UDR_LOCATION'
UDR_COUNTRY = 'UDR_COUNTRY'

LAYOUT_V1 = (
    QRTYPE, VERSION, CODING, ACCOUNT,
    CR_NAME, CR_ADDRESS1, CR_ADDRESS2, CR_POSTCODE, CR_LOCATION, CR_COUNTRY,
    UCR_NAME, UCR_ADDRESS1, UCR_ADDRESS2, UCR_POSTCODE, UCR_LOCATION,
    UCR_COUNTRY,
    AMOUNT, CURRENCY, DUEDATE,
    UDR_NAME, UDR_ADDRESS1, UDR_ADDRESS2, UDR_POSTCODE, UDR_LOCATION,
    UDR_COUNTRY,
    REF_TYPE, REF, UNSTR_MSG,
    ALTSCHEMA1, ALTSCHEMA2,
)

LAYOUT_V2 = (
    QRTYPE, VERSION, CODING, ACCOUNT,
    CR_ADDTYPE, CR_NAME, CR_ADDRESS1, CR_ADDRESS2, CR_POSTCODE, CR_LOCATION,
    CR_COUNTRY,
    UCR_ADDTYPE, UCR_NAME, UCR_ADDRESS1, UCR_ADDRESS2, UCR_POSTCODE,
    UCR_LOCATION, UCR_COUNTRY,
    AMOUNT, CURRENCY,
    UDR_ADDTYPE, UDR_NAME, UDR_ADDRESS1, UDR_ADDRESS2, UDR_POSTCODE,
    UDR_LOCATION, UDR_COUNTRY,
    REF_TYPE, REF, UNSTR_MSG, TRAILER, BILLINFO,
    ALTSCHEMA1, ALTSCHEMA2,
)

layouts = {
    Decimal('1.00'): LAYOUT_V1,
    Decimal('2.00'): LAYOUT_V2,
}

VERSION_SUPPORTED = max(layouts)


def get_layout(version):
    if version is None:
        return None
    return layouts.get(version)


# role: actor index, or None for fields of the payment record itself
# attr: attribute holding the text to render
# parse: name of the Parser method that reads the line
Record = collections.namedtuple('Record', 'role attr parse')

records = {
    QRTYPE:     Record(None, 'qr_type', 'qr_type'),
    VERSION:    Record(None, 'formatted_version', None),  # read up front
    CODING:     Record(None, 'coding_type', 'coding_type'),
    ACCOUNT:    Record(None, 'iban', 'iban'),
    AMOUNT:     Record(None, 'formatted_amount', 'amount'),
    CURRENCY:   Record(None, 'currency', 'currency'),
    DUEDATE:    Record(None, 'formatted_due_date', 'due_date'),
    REF_TYPE:   Record(None, 'reference_type', 'reference_type'),
    REF:        Record(None, 'reference', 'reference'),
    UNSTR_MSG:  Record(None, 'unstructured_message', 'unstructured_message'),
    TRAILER:    Record(None, 'trailer', 'trailer'),
    BILLINFO:   Record(None, 'bill_info', 'bill_info'),
    ALTSCHEMA1: Record(None, 'alternative_schema_1', 'alternative_schema_1'),
    ALTSCHEMA2: Record(None, 'alternative_schema_2', 'alternative_schema_2'),
}

actor_prefixes = (
    ('CR', ACTOR_CR),
    ('UCR', ACTOR_UCR),
    ('UDR', ACTOR_UDR),
)

actor_suffixes = (
    ('ADDTYPE', 'address_type'),
    ('NAME', 'name'),
    ('ADDRESS1', 'address_line_1'),
    ('ADDRESS2', 'address_line_2'),
    ('POSTCODE', 'postcode'),
    ('LOCATION', 'location'),
    ('COUNTRY', 'country'),
)

for _prefix, _role in actor_prefixes:
    for _suffix, _attr in actor_suffixes:
        records['%s_%s' % (_prefix, _suffix)] = Record(_role, _attr, _attr)
del _prefix, _role, _suffix, _attr
