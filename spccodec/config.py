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

import configparser
import logging
import logging.config
import os
from decimal import Decimal
from io import StringIO

config = None
here = os.path.dirname(__file__)
default_cfg = os.path.join(here, 'defaults.cfg')
default_log_cfg = os.path.join(here, 'logging.cfg')
del here

load_paths = [p for p in ['/etc/spccodec.cfg',
                          os.path.expandvars('$HOME/.spccodec.cfg'),
                          os.environ.get('SPCCODEC_CONFIG')
                          ] if p]
log_load_paths = ['/etc/spccodec-log.cfg',
                  os.path.expandvars('$HOME/.spccodec-log.cfg')]


def get_default_version():
    # Stored as on the wire, i.e. '0200' for version 2.00
    version = config.get('spccodec', 'default_version')
    return Decimal(int(version)) / 100


def get_default_currency():
    return config.get('spccodec', 'default_currency').upper()


def load_config(defaults, files):
    config = configparser.ConfigParser()
    with open(defaults, 'r') as f:
        config.read_file(f)
    config.read(files)
    return config


def setup_config():
    global config
    config = load_config(default_cfg, load_paths)


def setup_logging():
    logging.config.fileConfig([default_log_cfg] + log_load_paths,
                              disable_existing_loggers=False)


def save():
    f = StringIO()
    config.write(f)
    f.seek(0)
    return f


def restore(f):
    config.read_file(f)


getLogger = logging.getLogger  # so lazy code don't have to import logging


setup_config()
