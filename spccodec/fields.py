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
from decimal import Decimal, InvalidOperation, ROUND_DOWN

CENTS = Decimal('0.01')
NO_AMOUNT = Decimal(-1)

digits = '0123456789'
iban_chars = '1234567890ABCDEFGHIJKLMNOPQRSTUVWXYZ'
iban_countries = ('CH', 'LI')
iban_length = 21
amount_length = 12
first_year = 2018


def validate_str(value, required, max_len=0):
    """Check a field value against its length limit.

    Returns the value if it is acceptable. An empty or too long value
    gives None for required fields and an empty string for optional
    ones."""
    if not value:
        if required:
            return None
        return ''
    if max_len == 0 or len(value) <= max_len:
        return value
    if required:
        return None
    return ''


def validate_line(value, required, max_len=0):
    "validate_str for values that must stay on their own line of the code"
    if value and ('\n' in value or '\r' in value):
        if required:
            return None
        return ''
    return validate_str(value, required, max_len)


def to_decimal(amount):
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        # repr() is the shortest string that round trips, so 12.345
        # becomes Decimal('12.345') and not its binary approximation
        return Decimal(repr(amount))
    return Decimal(amount)


def format_amount(amount):
    """Format amount with two decimals, truncating any further digits.

    None and negative amounts mean no amount and give an empty string."""
    if amount is None:
        return ''
    try:
        amount = to_decimal(amount)
        if not amount.is_finite() or amount < 0:
            return ''
        # -0 is not negative, but must not render with a sign
        amount = amount.copy_abs()
        return str(amount.quantize(CENTS, rounding=ROUND_DOWN))
    except (InvalidOperation, ValueError, TypeError):
        return ''


def parse_amount(text):
    "Digits with an optional decimal point, no sign or exponent"
    text = text.strip()
    whole, point, cents = text.partition('.')
    if not whole or any(c not in digits for c in whole + cents):
        raise ValueError(text)
    return Decimal(text)


def normalize_iban(iban):
    return ''.join(iban.split()).upper()


def valid_iban(iban):
    if iban is None:
        return False
    iban = normalize_iban(iban)
    for c in iban:
        if c not in iban_chars:
            return False
    if validate_str(iban, True, iban_length) is None:
        return False
    return iban.startswith(iban_countries)


def make_date(year, month, day):
    "Due dates are calendar dates from 2018 on, anything else is ValueError"
    if year < first_year:
        raise ValueError('Year before %d: %d' % (first_year, year))
    return datetime.date(year, month, day)


def parse_date(text):
    parts = text.strip().split('-')
    if len(parts) != 3:
        raise ValueError(text)
    year, month, day = map(int, parts)
    return year, month, day


def format_date(date):
    if date is None:
        return ''
    return date.strftime('%Y-%m-%d')
