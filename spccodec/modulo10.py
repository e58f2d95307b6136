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

# Recursive modulo 10 check digit, as used for QR references (QRR)
# on Swiss QR-bills and the older orange payment slips.

reference_length = 27

pattern = [
    [0, 9, 4, 6, 8, 2, 7, 1, 3, 5],
    [9, 4, 6, 8, 2, 7, 1, 3, 5, 0],
    [4, 6, 8, 2, 7, 1, 3, 5, 0, 9],
    [6, 8, 2, 7, 1, 3, 5, 0, 9, 4],
    [8, 2, 7, 1, 3, 5, 0, 9, 4, 6],
    [2, 7, 1, 3, 5, 0, 9, 4, 6, 8],
    [7, 1, 3, 5, 0, 9, 4, 6, 8, 2],
    [1, 3, 5, 0, 9, 4, 6, 8, 2, 7],
    [3, 5, 0, 9, 4, 6, 8, 2, 7, 1],
    [5, 0, 9, 4, 6, 8, 2, 7, 1, 3],
]

check_digits = [0, 9, 8, 7, 6, 5, 4, 3, 2, 1]


def check_digit(digits):
    # Returns the check digit for digits, or -1 if it isn't all digits
    position = 0
    for c in str(digits):
        if c not in '0123456789':
            return -1
        position = pattern[position][int(c)]
    return check_digits[position]


def validate(reference):
    "Check a QR reference, including its trailing check digit"
    if not reference:
        return False
    reference = ''.join(str(reference).split())
    if len(reference) < reference_length:
        return False
    if reference[-1] not in '0123456789':
        return False
    check = check_digit(reference[:-1])
    if check < 0:
        return False
    return check == int(reference[-1])


def add_check_digit(number, length=reference_length):
    """Zero pad number to one less than length and add the check digit
    at the end."""
    s = str(number).zfill(length - 1)
    check = check_digit(s)
    if check < 0:
        raise ValueError('Not a number: %r' % (number,))
    return s + str(check)


if __name__ == '__main__':
    import sys
    for arg in sys.argv[1:] or sys.stdin:
        arg = arg.strip()
        print(arg, validate(arg))
