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

from .actor import (ActorRecord, validate_actor, ACTOR_CR, ACTOR_UCR,
                    ACTOR_UDR, ADDTYPE_STRUCTURED, ADDTYPE_COMBINED)
from .errors import SPCError, ValidationError
from .fields import NO_AMOUNT, format_amount
from .parser import Parser, parse, loads
from .record import (PaymentRecord, QRTYPE_SPC, CODING_LATIN_1, CURRENCY_CHF,
                     CURRENCY_EUR, REFTYPE_QRR, REFTYPE_SCOR, REFTYPE_NON,
                     TRAILER_EPD)
