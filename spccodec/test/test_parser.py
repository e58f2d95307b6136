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

import datetime
from decimal import Decimal
import pytest
from spccodec import errors, parser
from spccodec.actor import ACTOR_CR, ACTOR_UCR, ACTOR_UDR
from spccodec.errors import SPCError, ValidationError
from spccodec.fields import NO_AMOUNT

from . import spcdata
from .spcdata import replace_line


def codes(raw):
    record, errs = parser.parse(raw)
    return [error.code for error in errs]


class TestParse(object):

    def test_v2_qrr(self):
        record, errs = parser.parse(spcdata.v2_qrr)
        assert errs == []
        assert record.version == Decimal('2.00')
        assert record.iban == 'CH4431999123000889012'
        assert record.amount == Decimal('1949.75')
        assert record.currency == 'CHF'
        assert record.reference_type == 'QRR'
        assert record.reference == spcdata.qr_reference
        assert record.unstructured_message == 'Order of 15 June 2020'
        assert record.trailer == 'EPD'
        assert record.bill_info.startswith('//S1/10/10201409')
        assert record.get_alternative_schema(0) == [
            'UV', ';', 'UltraPay005', '12345']
        assert record.alternative_schema_2 == 'XY;XYService;54321'

        creditor = record.get_actor(ACTOR_CR)
        assert creditor.as_tuple() == ('S', 'Robert Schneider AG',
                                       'Rue du Lac', '1268', '2501', 'Biel',
                                       'CH')
        assert record.get_actor(ACTOR_UCR).as_tuple() == ('',) * 7
        assert record.get_actor(ACTOR_UDR).name == \
            'Pia-Maria Rutschmann-Schnyder'

        assert record.render() == spcdata.v2_qrr

    def test_v2_minimal(self):
        record, errs = parser.parse(spcdata.v2_minimal)
        assert errs == []
        assert record.amount == NO_AMOUNT
        assert record.reference_type == 'NON'
        assert record.reference == ''
        creditor = record.get_actor(ACTOR_CR)
        assert creditor.address_type == 'K'
        assert creditor.address_line_2 == '2501 Biel'
        assert creditor.postcode == ''
        assert record.render() == spcdata.v2_minimal

    def test_v1_non(self):
        record, errs = parser.parse(spcdata.v1_non)
        assert errs == []
        assert record.version == Decimal('1.00')
        assert record.due_date == datetime.date(2019, 10, 31)
        assert record.reference_type == 'NON'
        assert record.trailer == 'EPD'
        assert record.get_actor(ACTOR_CR).address_type == ''
        assert record.render() == spcdata.v1_non

    def test_line_endings(self):
        raw = spcdata.v2_qrr.replace('\n', '\r\n') + '\r\n\r\n'
        record, errs = parser.parse(raw)
        assert errs == []
        assert record.render() == spcdata.v2_qrr

    def test_extra_lines(self):
        record, errs = parser.parse(spcdata.v2_qrr + '\nfoo\nbar')
        assert errs == []
        assert record.render() == spcdata.v2_qrr

    def test_from_text(self):
        record, errs = parser.PaymentRecord.from_text(spcdata.v2_qrr)
        assert errs == []
        assert record == parser.parse(spcdata.v2_qrr)[0]

    def test_loads(self):
        record = parser.loads(spcdata.v2_minimal)
        assert record.iban == 'CH5800791123000889012'

        with pytest.raises(ValidationError) as exc:
            parser.loads(replace_line(spcdata.v2_minimal, 3, 'DE89'))
        assert exc.value.errors == [SPCError(7, 'Valid IBAN missing.')]
        assert str(exc.value) == 'E7: Valid IBAN missing.'


class TestErrors(object):

    def test_empty(self):
        assert codes('') == [errors.INPUT_EMPTY]
        assert codes(None) == [errors.INPUT_EMPTY]

    def test_too_long(self):
        raw = replace_line(spcdata.v2_qrr, 29, 'x' * 700)
        assert codes(raw) == [errors.INPUT_TOO_LONG, errors.TEXT_TOO_LONG]

        assert codes('x' * 998)[:3] == [errors.INPUT_TOO_LONG,
                                        errors.INSUFFICIENT_LINES,
                                        errors.INVALID_VERSION]

    def test_insufficient_lines(self):
        raw = '\n'.join(spcdata.v2_qrr_lines[:20])
        assert codes(raw) == [errors.INSUFFICIENT_LINES,
                              errors.INVALID_REFERENCE,
                              errors.INVALID_TRAILER]

    def test_version(self):
        for version in ['0300', '0150', '', 'abcd']:
            raw = replace_line(spcdata.v2_qrr, 1, version)
            assert codes(raw) == [errors.INVALID_VERSION]
            # parsed with the default layout
            record, errs = parser.parse(raw)
            assert record.version == Decimal('2.00')
            assert record.reference == spcdata.qr_reference

    def test_field_errors(self):
        cases = [
            (0, 'BCD', errors.INVALID_QRTYPE),
            (2, '2', errors.INVALID_CODING),
            (3, 'DE89370400440532013000', errors.INVALID_IBAN),
            (3, '', errors.INVALID_IBAN),
            (18, 'abc', errors.INVALID_AMOUNT),
            (18, '1234567890.00', errors.INVALID_AMOUNT),
            (18, '-5.00', errors.INVALID_AMOUNT),
            (19, 'USD', errors.INVALID_CURRENCY),
            (27, 'FOO', errors.INVALID_REFERENCE),
            (28, spcdata.qr_reference[:-1] + '6', errors.INVALID_REFERENCE),
            (28, '', errors.INVALID_REFERENCE),
            (29, 'x' * 141, errors.TEXT_TOO_LONG),
            (30, 'EOD', errors.INVALID_TRAILER),
            (30, '', errors.INVALID_TRAILER),
            (31, 'x' * 141, errors.TEXT_TOO_LONG),
            (32, 'x' * 101, errors.TEXT_TOO_LONG),
            (33, 'x' * 101, errors.TEXT_TOO_LONG),
        ]
        for lineno, value, code in cases:
            raw = replace_line(spcdata.v2_qrr, lineno, value)
            assert codes(raw) == [code], (lineno, value)

    def test_case_insensitive(self):
        raw = replace_line(spcdata.v2_qrr, 0, 'spc')
        raw = replace_line(raw, 19, 'chf')
        raw = replace_line(raw, 27, 'qrr')
        raw = replace_line(raw, 30, 'epd')
        record, errs = parser.parse(raw)
        assert errs == []
        assert record.render() == spcdata.v2_qrr

    def test_invalid_reference_falls_back(self):
        raw = replace_line(spcdata.v2_qrr, 28, '1234')
        record, errs = parser.parse(raw)
        assert [e.code for e in errs] == [errors.INVALID_REFERENCE]
        assert record.reference_type == 'NON'
        assert record.reference == ''

    def test_amount_format(self):
        for value in ['-0.00', '+1949.75', '1.94975e3', ' -1']:
            raw = replace_line(spcdata.v2_qrr, 18, value)
            assert codes(raw) == [errors.INVALID_AMOUNT], value

        raw = replace_line(spcdata.v2_qrr, 18, '0.00')
        record, errs = parser.parse(raw)
        assert errs == []
        assert record.formatted_amount == '0.00'

    def test_address_lines_too_long(self):
        # structured: line 2 is optional, but may not be dropped silently
        raw = replace_line(spcdata.v2_qrr, 7, 'x' * 17)
        record, errs = parser.parse(raw)
        assert [e.code for e in errs] == [errors.TEXT_TOO_LONG]
        assert record.get_actor(ACTOR_CR).address_line_2 == ''

        raw = replace_line(spcdata.v2_qrr, 7, 'x' * 16)
        assert codes(raw) == []

        # combined: up to 70, and line 2 is mandatory
        raw = replace_line(spcdata.v2_minimal, 7, 'x' * 70)
        assert codes(raw) == []
        raw = replace_line(spcdata.v2_minimal, 7, 'x' * 71)
        assert codes(raw) == [errors.TEXT_TOO_LONG,
                              errors.ACTOR_DEPENDENCIES]

        raw = replace_line(spcdata.v2_qrr, 22, 'x' * 71)
        assert codes(raw) == [errors.TEXT_TOO_LONG,
                              errors.ACTOR_DEPENDENCIES]

        # 1.0 has no address type, line 2 is always at most 16
        raw = replace_line(spcdata.v1_non, 6, 'x' * 17)
        assert codes(raw) == [errors.TEXT_TOO_LONG]

    def test_no_amount(self):
        record, errs = parser.parse(replace_line(spcdata.v2_qrr, 18, ''))
        assert errs == []
        assert record.amount == NO_AMOUNT

    def test_due_date(self):
        for value in ['2019-02-29', '2017-12-31', '31.10.2019']:
            raw = replace_line(spcdata.v1_non, 18, value)
            assert codes(raw) == [errors.INVALID_DUEDATE]
            record, errs = parser.parse(raw)
            assert record.due_date is None

        record, errs = parser.parse(replace_line(spcdata.v1_non, 18, ''))
        assert errs == []
        assert record.due_date is None

    def test_actor_dependencies(self):
        # creditor without name
        raw = replace_line(spcdata.v2_qrr, 5, '')
        assert codes(raw) == [errors.ACTOR_DEPENDENCIES]

        # only a country for the ultimate creditor
        raw = replace_line(spcdata.v2_qrr, 17, 'CH')
        assert codes(raw) == [errors.ACTOR_DEPENDENCIES]

        # structured address without location
        raw = replace_line(spcdata.v2_qrr, 25, '')
        assert codes(raw) == [errors.ACTOR_DEPENDENCIES]

        # unknown address type
        raw = replace_line(spcdata.v2_qrr, 4, 'X')
        assert codes(raw) == [errors.ACTOR_DEPENDENCIES]

        # blank creditor, and a second broken actor, give one error
        lines = list(spcdata.v2_qrr_lines)
        lines[4:11] = [''] * 7
        lines[26] = ''
        assert codes('\n'.join(lines)) == [errors.ACTOR_DEPENDENCIES]

        # version 1 needs a postcode
        raw = replace_line(spcdata.v1_non, 7, '')
        assert codes(raw) == [errors.ACTOR_DEPENDENCIES]

    def test_several_errors(self):
        raw = replace_line(spcdata.v2_qrr, 0, 'XYZ')
        raw = replace_line(raw, 3, 'DE89370400440532013000')
        raw = replace_line(raw, 19, 'USD')
        raw = replace_line(raw, 5, '')
        assert codes(raw) == [errors.INVALID_QRTYPE, errors.INVALID_IBAN,
                              errors.INVALID_CURRENCY,
                              errors.ACTOR_DEPENDENCIES]

    def test_error_messages(self):
        record, errs = parser.parse('')
        error, = errs
        assert error == (1, 'Input data empty or null.')
        assert str(error) == 'E1: Input data empty or null.'
        for code in range(1, 15):
            assert SPCError.from_code(code).message == errors.messages[code]


def test_parser_object():
    p = parser.Parser()
    assert p.parse(spcdata.v2_qrr) == []
    assert p.record.iban == 'CH4431999123000889012'
    assert p.errors == []

    p = parser.Parser()
    errs = p.parse(replace_line(spcdata.v2_qrr, 3, ''))
    assert errs is p.errors
    assert [e.code for e in errs] == [errors.INVALID_IBAN]
