"""Lightweight websocket payload validation utilities.

Provides minimal schema-like checking with clear, consistent error responses.
Returns (ok, value_or_error) tuples; the caller decides whether to emit an
error event.

Schema Mini-Language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'str', 'int', 'list', 'dict', 'coord'
Extras examples:
  max_len (for str), min_len (str), allow_empty (str)
  item_type (list element primitive type)
  min / max (for int)

'coord' accepts a two element list of integers and normalises it to a Coord.

Example:
 schema = {
   'seed': ('str', True, {'max_len': 128})
 }
 ok, data_or_err = validate(data, schema)

If invalid: (False, {'field': 'seed', 'error': 'too long', 'code': 'max_len'})
If valid: (True, normalized_data)
"""
from __future__ import annotations

from typing import Any, Dict, Tuple

from cavern.level.grid import Coord

PRIMITIVES = {
    'str': str,
    'int': int,
    'list': list,
    'dict': dict,
    'coord': list,
}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if not isinstance(payload, dict):
        return _fail('__root__', 'payload must be an object', 'type')
    out = {}
    for name, spec in schema.items():
        if not isinstance(spec, tuple) or len(spec) < 2:
            return _fail('__schema__', f'invalid spec for {name}', 'schema')
        type_name, required = spec[0], spec[1]
        extras = spec[2] if len(spec) > 2 else {}
        if type_name not in PRIMITIVES:
            return _fail('__schema__', f'unsupported type {type_name}', 'schema')
        if name not in payload:
            if required:
                return _fail(name, 'missing required field', 'required')
            else:
                continue
        value = payload[name]
        py_type = PRIMITIVES[type_name]
        if type_name == 'int':
            if not _is_int(value):
                return _fail(name, 'expected int', 'type')
        elif not isinstance(value, py_type):
            return _fail(name, f'expected {type_name}', 'type')
        if type_name == 'str':
            s = value.strip() if not extras.get('allow_empty') else value
            if not extras.get('allow_empty') and len(s) == 0:
                return _fail(name, 'must not be empty', 'empty')
            if 'max_len' in extras and len(value) > extras['max_len']:
                return _fail(name, 'too long', 'max_len')
            if 'min_len' in extras and len(value) < extras['min_len']:
                return _fail(name, 'too short', 'min_len')
            out[name] = s
        elif type_name == 'int':
            if 'min' in extras and value < extras['min']:
                return _fail(name, 'too small', 'min')
            if 'max' in extras and value > extras['max']:
                return _fail(name, 'too large', 'max')
            out[name] = value
        elif type_name == 'coord':
            if len(value) != 2 or not all(_is_int(v) for v in value):
                return _fail(name, 'expected [x, y] integers', 'coord')
            out[name] = Coord(value[0], value[1])
        elif type_name == 'list':
            item_type = extras.get('item_type')
            if item_type:
                it = PRIMITIVES.get(item_type)
                if not it:
                    return _fail('__schema__', f'unsupported item_type {item_type}', 'schema')
                for idx, elem in enumerate(value):
                    if not isinstance(elem, it):
                        return _fail(name, f'element {idx} not {item_type}', 'item_type')
            out[name] = value
        elif type_name == 'dict':
            out[name] = value
    return True, out


# Predefined schemas used by handlers
JOIN_LEVEL = {
    'seed': ('str', True, {'min_len': 1, 'max_len': 128}),
}
LEAVE_LEVEL = JOIN_LEVEL
LEVEL_TICK = {
    'seed': ('str', True, {'min_len': 1, 'max_len': 128}),
    'chance': ('int', False, {'min': 1}),
}
REQUEST_PATH = {
    'seed': ('str', True, {'min_len': 1, 'max_len': 128}),
    'start': ('coord', True),
    'target': ('coord', True),
}
