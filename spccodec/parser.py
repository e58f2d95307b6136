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

"""Parse and validate Swiss Payments Code text.

Every problem found is collected as an SPCError, instead of stopping
at the first one, so that one pass over a code reports all of its
defects."""

from . import config, layout
from .actor import ActorRecord, roles
from .errors import SPCError, ValidationError
from . import errors as E
from .fields import parse_amount, parse_date, amount_length
from .record import PaymentRecord

log = config.getLogger('spccodec.parser')

max_length = 997
min_lines = 25
version_line = 1


class Parser(object):

    def __init__(self):
        self.record = PaymentRecord()
        self.errors = []
        self.reference_type = None
        self.lineno = -1

    def error(self, code):
        error = SPCError.from_code(code)
        log.debug('Line %d: %s', self.lineno + 1, error)
        self.errors.append(error)

    def parse(self, raw):
        if not raw:
            self.error(E.INPUT_EMPTY)
            return self.errors
        if len(raw) > max_length:
            self.error(E.INPUT_TOO_LONG)

        lines = [line.rstrip('\r') for line in raw.strip().split('\n')]
        if len(lines) < min_lines:
            self.error(E.INSUFFICIENT_LINES)

        self.lineno = version_line
        version = lines[version_line] if len(lines) > version_line else ''
        if not self.record.set_version(version):
            # Go on with the default layout, to find as many errors
            # as possible
            self.error(E.INVALID_VERSION)

        record = self.record
        for role in roles:
            record.actors[role] = ActorRecord(role)

        fields = record.layout
        for self.lineno, field in enumerate(fields):
            try:
                item = lines[self.lineno]
            except IndexError:
                item = ''
            spec = layout.records[field]
            if spec.parse is None:
                continue
            method = getattr(self, 'parse_' + spec.parse)
            if spec.role is None:
                method(item)
            else:
                method(record.actors[spec.role], item)
        if len(lines) > len(fields):
            log.debug('Ignoring %d lines after the last field',
                      len(lines) - len(fields))

        self.lineno = -1
        problems = record.actor_problems()
        if problems:
            for role, missing in sorted(problems.items()):
                log.debug('Actor %d is missing %s', role, ', '.join(missing))
            self.error(E.ACTOR_DEPENDENCIES)
        else:
            for actor in record.actors:
                actor.normalize()

        if self.errors:
            log.info('Parsed SPC data with %d errors', len(self.errors))
        else:
            log.info('Parsed SPC data')
        return self.errors

    def parse_qr_type(self, item):
        if not self.record.set_qr_type(item):
            self.error(E.INVALID_QRTYPE)

    def parse_coding_type(self, item):
        if not self.record.set_coding_type(item):
            self.error(E.INVALID_CODING)

    def parse_iban(self, item):
        if not self.record.set_iban(item):
            self.error(E.INVALID_IBAN)

    def parse_amount(self, item):
        if not item.strip():
            self.record.set_amount()
            return
        try:
            amount = parse_amount(item)
        except ValueError:
            self.error(E.INVALID_AMOUNT)
            return
        if (amount < 0 or len(item.strip()) > amount_length
                or not self.record.set_amount(amount)):
            self.error(E.INVALID_AMOUNT)

    def parse_currency(self, item):
        if not self.record.set_currency(item):
            self.error(E.INVALID_CURRENCY)

    def parse_due_date(self, item):
        if not item.strip():
            self.record.set_due_date()
            return
        try:
            year, month, day = parse_date(item)
        except ValueError:
            self.record.set_due_date()
            self.error(E.INVALID_DUEDATE)
            return
        if not self.record.set_due_date(year, month, day):
            self.error(E.INVALID_DUEDATE)

    def parse_reference_type(self, item):
        # Checked together with the reference, on the next line
        self.reference_type = item

    def parse_reference(self, item):
        if not self.record.set_reference(self.reference_type, item):
            self.error(E.INVALID_REFERENCE)

    def parse_unstructured_message(self, item):
        if not self.record.set_unstructured_message(item):
            self.error(E.TEXT_TOO_LONG)

    def parse_trailer(self, item):
        if not self.record.set_trailer(item):
            self.error(E.INVALID_TRAILER)

    def parse_bill_info(self, item):
        if not self.record.set_bill_info(item):
            self.error(E.TEXT_TOO_LONG)

    def parse_alternative_schema_1(self, item):
        if not self.record.set_alternative_schema(item, 0):
            self.error(E.TEXT_TOO_LONG)

    def parse_alternative_schema_2(self, item):
        if not self.record.set_alternative_schema(item, 1):
            self.error(E.TEXT_TOO_LONG)

    # Actor fields are only checked one by one here, whether the actor
    # as a whole has its mandatory fields is checked at the end

    def parse_address_type(self, actor, item):
        actor.set_address_type(item, self.record.version)

    def parse_name(self, actor, item):
        actor.set_name(item)

    def parse_address_line_1(self, actor, item):
        actor.set_address_line_1(item)
        if item and not actor.address_line_1:
            self.error(E.TEXT_TOO_LONG)

    def parse_address_line_2(self, actor, item):
        # The limit depends on the address type, read the line before
        actor.set_address_line_2(item)
        if item and not actor.address_line_2:
            self.error(E.TEXT_TOO_LONG)

    def parse_postcode(self, actor, item):
        actor.set_postcode(item)

    def parse_location(self, actor, item):
        actor.set_location(item)

    def parse_country(self, actor, item):
        actor.set_country(item)


def parse(raw):
    "Parse raw SPC text, returns the record and the list of errors"
    parser = Parser()
    errors = parser.parse(raw)
    return parser.record, errors


def loads(raw):
    "Parse raw SPC text, ValidationError unless it is completely valid"
    record, errors = parse(raw)
    if errors:
        raise ValidationError(errors)
    return record
