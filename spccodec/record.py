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

"""The Swiss Payments Code payment record.

A PaymentRecord holds everything a QR-bill encodes. It is either built
with the set_* methods, each of which validates its input and returns
True or False, or parsed from the text of a QR code with from_text().
Rendering never fails; is_valid() tells if the rendering would parse
back without errors."""

import datetime
from decimal import Decimal, InvalidOperation

from . import config, modulo10, layout, serializer
from .actor import (ActorRecord, validate_actor, roles, ACTOR_CR,
                    VERSION_ADDTYPE)
from .errors import ValidationError
from .fields import (validate_str, validate_line, to_decimal, format_amount,
                     normalize_iban, valid_iban, make_date, format_date,
                     NO_AMOUNT, CENTS, amount_length)

log = config.getLogger('spccodec.record')

QRTYPE_SPC = 'SPC'
CODING_LATIN_1 = 1
CURRENCY_CHF = 'CHF'
CURRENCY_EUR = 'EUR'
REFTYPE_QRR = 'QRR'
REFTYPE_SCOR = 'SCOR'
REFTYPE_NON = 'NON'
TRAILER_EPD = 'EPD'

coding_types = (CODING_LATIN_1,)
currencies = (CURRENCY_CHF, CURRENCY_EUR)
reference_types = (REFTYPE_QRR, REFTYPE_SCOR, REFTYPE_NON)

qrr_length = 27
scor_length = 25
text_length = 140
alternative_schema_length = 100


def is_text(value):
    return value is None or isinstance(value, str)


class PaymentRecord(object):

    def __init__(self):
        self._qr_type = None
        self._version = None
        self._coding_type = None
        self._iban = None
        self._amount = NO_AMOUNT
        self._currency = None
        self._due_date = None
        self._reference_type = None
        self._reference = None
        self._unstructured_message = ''
        self._trailer = None
        self._bill_info = ''
        self._alternative_schemas = ['', '']
        self.actors = [ActorRecord(role) for role in roles]

        self.set_qr_type(QRTYPE_SPC)
        if not self.set_version(config.get_default_version()):
            self._version = layout.VERSION_SUPPORTED
        self.set_coding_type(CODING_LATIN_1)
        self.set_reference()
        if not self.set_currency(config.get_default_currency()):
            self._currency = CURRENCY_CHF
        self.set_trailer(TRAILER_EPD)

    @classmethod
    def from_text(cls, raw):
        "Parse raw QR code text, returns the record and a list of errors"
        from . import parser
        return parser.parse(raw)

    def __repr__(self):
        return '<PaymentRecord %s %s %s>' % (
            self.formatted_version, self._iban, self.formatted_amount)

    def __str__(self):
        return self.render()

    def __eq__(self, other):
        if not isinstance(other, PaymentRecord):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def as_dict(self):
        return {
            'qr_type': self._qr_type,
            'version': self._version,
            'coding_type': self._coding_type,
            'iban': self._iban,
            'amount': self._amount,
            'currency': self._currency,
            'due_date': self._due_date,
            'reference_type': self._reference_type,
            'reference': self._reference,
            'unstructured_message': self._unstructured_message,
            'trailer': self._trailer,
            'bill_info': self._bill_info,
            'alternative_schemas': tuple(self._alternative_schemas),
            'actors': [actor.as_tuple() for actor in self.actors],
        }

    def render(self):
        return serializer.render(self)

    def is_valid(self):
        from . import parser
        record, errors = parser.parse(self.render())
        return not errors

    def get_qr_code(self):
        "The rendered code, ValidationError if it doesn't validate"
        from . import parser
        code = self.render()
        record, errors = parser.parse(code)
        if errors:
            raise ValidationError(errors)
        return code

    # Getters

    @property
    def qr_type(self):
        return self._qr_type

    @property
    def version(self):
        return self._version

    @property
    def formatted_version(self):
        if self._version is None:
            return ''
        return '%04d' % int((self._version * 100).to_integral_value())

    @property
    def layout(self):
        return layout.get_layout(self._version)

    @property
    def coding_type(self):
        return self._coding_type

    @property
    def iban(self):
        return self._iban

    @property
    def amount(self):
        "The amount payable, NO_AMOUNT (-1) when there is none"
        return self._amount

    @property
    def formatted_amount(self):
        return format_amount(self._amount)

    @property
    def currency(self):
        return self._currency

    @property
    def due_date(self):
        return self._due_date

    @property
    def formatted_due_date(self):
        return format_date(self._due_date)

    @property
    def reference_type(self):
        return self._reference_type

    @property
    def reference(self):
        return self._reference

    @property
    def unstructured_message(self):
        return self._unstructured_message

    @property
    def trailer(self):
        return self._trailer

    @property
    def bill_info(self):
        return self._bill_info

    @property
    def alternative_schemas(self):
        return tuple(self._alternative_schemas)

    @property
    def alternative_schema_1(self):
        return self._alternative_schemas[0]

    @property
    def alternative_schema_2(self):
        return self._alternative_schemas[1]

    def get_alternative_schema(self, index):
        """Split alternative schema line index (0 or 1) into its parts.

        The first two characters of the line name the schema and the
        third is the delimiter between the data elements that follow:
        'S1/10/10201409' gives ['S1', '/', '10', '10201409']. Returns
        None if the line is too short to hold a schema."""
        if index not in (0, 1):
            return None
        data = self._alternative_schemas[index]
        if not data or len(data) < 3:
            return None
        token, delimiter = data[:2], data[2]
        return [token, delimiter] + data[3:].split(delimiter)

    def get_actor(self, role):
        return self.actors[role]

    # Setters

    def set_qr_type(self, qr_type):
        if not isinstance(qr_type, str) or qr_type.upper() != QRTYPE_SPC:
            log.debug('Rejected QR type %r', qr_type)
            return False
        self._qr_type = qr_type.upper()
        return True

    def set_version(self, version):
        """Set the version, either as on the wire ('0200') or as a
        number (2.0)."""
        try:
            if isinstance(version, str):
                if len(version) != 4 or not version.isdigit():
                    raise ValueError(version)
                version = Decimal(int(version)) / 100
            version = to_decimal(version).quantize(CENTS)
        except (InvalidOperation, ValueError, TypeError):
            log.debug('Rejected version %r', version)
            return False
        if (version > layout.VERSION_SUPPORTED
                or not layout.get_layout(version)):
            log.debug('Unsupported version %s', version)
            return False
        self._version = version
        if version < VERSION_ADDTYPE:
            # Address types are not in the code before 2.0
            for actor in self.actors:
                actor.address_type = ''
        return True

    def set_coding_type(self, coding_type):
        try:
            coding_type = int(coding_type)
        except (ValueError, TypeError):
            return False
        if coding_type not in coding_types:
            log.debug('Rejected coding type %r', coding_type)
            return False
        self._coding_type = coding_type
        return True

    def set_iban(self, iban):
        if not isinstance(iban, str) or not valid_iban(iban):
            log.debug('Rejected IBAN %r', iban)
            return False
        self._iban = normalize_iban(iban)
        return True

    def set_amount(self, amount=NO_AMOUNT):
        "Set the amount payable, None or a negative amount means none"
        if amount is None:
            self._amount = NO_AMOUNT
            return True
        try:
            amount = to_decimal(amount)
            if amount < 0:
                self._amount = NO_AMOUNT
                return True
        except (InvalidOperation, ValueError, TypeError):
            log.debug('Rejected amount %r', amount)
            return False
        text = format_amount(amount)
        if not text or len(text) > amount_length:
            log.debug('Rejected amount %r', amount)
            return False
        self._amount = Decimal(text)
        return True

    def set_currency(self, currency):
        if not isinstance(currency, str) or currency.upper() not in currencies:
            log.debug('Rejected currency %r', currency)
            return False
        self._currency = currency.upper()
        return True

    def set_due_date(self, year=None, month=None, day=None):
        """Set the due date from year, month and day, or from a date.

        Without arguments the due date is removed. An impossible date
        also removes it, and returns False."""
        if year is None:
            self._due_date = None
            return True
        try:
            if isinstance(year, datetime.date):
                date = make_date(year.year, year.month, year.day)
            else:
                date = make_date(int(year), int(month), int(day))
        except (ValueError, TypeError):
            log.debug('Rejected due date %r-%r-%r', year, month, day)
            self._due_date = None
            return False
        self._due_date = date
        return True

    def set_reference(self, reference_type=REFTYPE_NON, reference=None):
        """Set reference type and reference together.

        QRR references are 27 digits with a modulo 10 check digit at
        the end, SCOR (ISO 11649 creditor reference) at most 25
        characters. With NON the reference is always empty."""
        if not isinstance(reference_type, str):
            return False
        reference_type = reference_type.strip().upper()
        if reference_type not in reference_types:
            log.debug('Rejected reference type %r', reference_type)
            return False
        if reference is not None:
            if not isinstance(reference, str):
                return False
            reference = ''.join(reference.split())

        if reference_type == REFTYPE_QRR:
            reference = validate_str(reference, True, qrr_length)
            if reference is None or not modulo10.validate(reference):
                log.debug('Rejected QR reference %r', reference)
                return False
        elif reference_type == REFTYPE_SCOR:
            reference = validate_str(reference, True, scor_length)
            if reference is None:
                log.debug('Rejected creditor reference %r', reference)
                return False
        else:
            reference = ''

        self._reference_type = reference_type
        self._reference = reference
        return True

    # Free text that is too long or spans lines is stored as '' and
    # the setter returns False

    def set_unstructured_message(self, message):
        if not is_text(message):
            return False
        self._unstructured_message = validate_line(message, False,
                                                   text_length)
        return self._unstructured_message == (message or '')

    def set_trailer(self, trailer):
        if (not isinstance(trailer, str)
                or trailer.strip().upper() != TRAILER_EPD):
            log.debug('Rejected trailer %r', trailer)
            return False
        self._trailer = TRAILER_EPD
        return True

    def set_bill_info(self, bill_info):
        if not is_text(bill_info):
            return False
        self._bill_info = validate_line(bill_info, False, text_length)
        return self._bill_info == (bill_info or '')

    def set_alternative_schema(self, data, index):
        if not isinstance(data, str) or index not in (0, 1):
            return False
        self._alternative_schemas[index] = validate_line(
            data, False, alternative_schema_length)
        return self._alternative_schemas[index] == data

    def set_alternative_schemas(self, lines=None):
        "Set both alternative schema lines, None clears them"
        if lines is None:
            self._alternative_schemas = ['', '']
            return True
        if len(lines) > 2:
            return False
        for index, data in enumerate(lines):
            if not self.set_alternative_schema(data, index):
                return False
        return True

    def set_actor(self, role, name=None, address_type=None,
                  address_line_1=None, address_line_2=None, postcode=None,
                  location=None, country=None):
        """Set all fields of one actor.

        If address_type is not given the actor keeps its previous one.
        Returns False if any field is rejected or the mandatory fields
        for the actor's address type and the record's version are not
        all there."""
        values = (name, address_type, address_line_1, address_line_2,
                  postcode, location, country)
        if role not in roles or not all(is_text(v) for v in values):
            return False
        actor = ActorRecord(role)
        if address_type is None:
            address_type = self.actors[role].address_type
        actor.set_address_type(address_type, self._version)
        actor.set_name(name)
        actor.set_address_line_1(address_line_1)
        actor.set_address_line_2(address_line_2)
        actor.set_postcode(postcode)
        actor.set_location(location)
        actor.set_country(country)
        self.actors[role] = actor

        # Optional lines are blanked when rejected
        rejected = []
        for field, value in (('address_line_1', address_line_1),
                             ('address_line_2', address_line_2)):
            if value and not getattr(actor, field):
                rejected.append(field)
        problems = validate_actor(actor, self._version, role == ACTOR_CR)
        if rejected or problems:
            log.debug('Actor %d is missing %s', role,
                      ', '.join(rejected + problems))
            return False
        actor.normalize()
        return True

    def clear_actor(self, role):
        if role not in roles:
            return False
        self.actors[role] = ActorRecord(role)
        return True

    def actor_problems(self):
        "Missing mandatory fields, per actor that has any"
        problems = {}
        for actor in self.actors:
            missing = validate_actor(actor, self._version,
                                     actor.role == ACTOR_CR)
            if missing:
                problems[actor.role] = missing
        return problems
