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

from . import layout


def render_field(record, field):
    spec = layout.records[field]
    if spec.role is None:
        obj = record
    else:
        obj = record.actors[spec.role]
    value = getattr(obj, spec.attr)
    if value is None:
        return ''
    return str(value)


def render(record):
    """Render record as Swiss Payments Code text, one field per line.

    Fields that are missing render as empty lines. Whitespace at the
    ends of the whole text, which includes trailing empty lines, is
    removed."""
    fields = layout.get_layout(record.version)
    if fields is None:
        return ''
    lines = [render_field(record, field) for field in fields]
    return '\n'.join(lines).strip()
