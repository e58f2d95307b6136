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

import collections

INPUT_EMPTY = 1
INPUT_TOO_LONG = 2
INSUFFICIENT_LINES = 3
INVALID_VERSION = 4
INVALID_QRTYPE = 5
INVALID_CODING = 6
INVALID_IBAN = 7
INVALID_CURRENCY = 8
INVALID_REFERENCE = 9
ACTOR_DEPENDENCIES = 10
INVALID_AMOUNT = 11
INVALID_DUEDATE = 12
INVALID_TRAILER = 13
TEXT_TOO_LONG = 14

messages = {
    INPUT_EMPTY: "Input data empty or null.",
    INPUT_TOO_LONG: "Input data exceeds maximum allowed limit.",
    INSUFFICIENT_LINES: "Malformed data - insufficient fields.",
    INVALID_VERSION: "Version invalid or not supported.",
    INVALID_QRTYPE: "QR type invalid or not supported.",
    INVALID_CODING: "Valid coding type missing.",
    INVALID_IBAN: "Valid IBAN missing.",
    INVALID_CURRENCY: "Valid currency missing.",
    INVALID_REFERENCE: "Valid reference missing.",
    ACTOR_DEPENDENCIES: "Mandatory actor dependencies not met.",
    INVALID_AMOUNT: "Amount invalid or too long.",
    INVALID_DUEDATE: "Due date invalid.",
    INVALID_TRAILER: "Trailer invalid or missing.",
    TEXT_TOO_LONG: "Text field exceeds maximum length.",
}


class SPCError(collections.namedtuple('SPCError', 'code message')):

    __slots__ = ()

    @classmethod
    def from_code(cls, code):
        return cls(code, messages[code])

    def __str__(self):
        return 'E%d: %s' % (self.code, self.message)


class ValidationError(ValueError):
    """Raised when SPC data does not validate.

    All problems found are available as a list of SPCError in
    the errors attribute."""

    def __init__(self, errors):
        self.errors = list(errors)
        super(ValidationError, self).__init__(
            '; '.join(str(error) for error in self.errors))
