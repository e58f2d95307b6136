#!/usr/bin/env python

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

# Check files holding the text of Swiss QR-bill codes, as read by a
# QR code scanner.

import argparse
import sys

import spccodec
import spccodec.config

log = spccodec.config.getLogger('spccodec.spccheck')


def read(fname):
    if fname == '-':
        return sys.stdin.read()
    # Coding type 1, the only one there is
    with open(fname, 'r', encoding='iso-8859-1') as f:
        return f.read()


def check_file(fname, render=False, quiet=False, out=None):
    if out is None:
        out = sys.stdout
    record, errors = spccodec.parse(read(fname))
    for error in errors:
        out.write('%s: %s\n' % (fname, error))
    if not errors and not quiet:
        out.write('%s: OK\n' % fname)
    if render:
        out.write(record.render())
        out.write('\n')
    return not errors


def parse_args(args):
    parser = argparse.ArgumentParser(
        description='Validate Swiss Payments Code (QR-bill) data.')
    parser.add_argument('files', metavar='FILE', nargs='+',
                        help='file with the text of one code, - for stdin')
    parser.add_argument('--render', action='store_true',
                        help='print the code as it renders after parsing')
    parser.add_argument('--quiet', action='store_true',
                        help='only print errors')
    return parser.parse_args(args)


def main(args, out=None):
    spccodec.config.setup_logging()
    options = parse_args(args)
    ok = True
    for fname in options.files:
        try:
            valid = check_file(fname, options.render, options.quiet, out=out)
        except (IOError, UnicodeDecodeError) as exc:
            log.error('Could not read %s: %s', fname, exc)
            valid = False
        ok = ok and valid
    return 0 if ok else 1


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
