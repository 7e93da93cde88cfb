from cavern.level import Coord
from cavern.utils.coords import decode_path, encode_path
from cavern.websockets.validation import REQUEST_PATH, validate


def test_long_path_uses_delta_form():
    path = [(x, 10) for x in range(10, 30)] + [(29, y) for y in range(11, 25)]
    enc = encode_path(path)
    assert enc.startswith("D:")
    assert enc.split("|")[1] == "1,0"
    assert decode_path(enc) == path


def test_short_path_stays_raw():
    assert encode_path([(1, 2), (1, 3)]) == "1,2;1,3"
    assert decode_path("1,2;1,3") == [Coord(1, 2), Coord(1, 3)]


def test_order_is_preserved():
    path = [(3, 3), (2, 3), (2, 2), (1, 2), (1, 1), (0, 1), (0, 0), (1, 0), (2, 0), (3, 0)]
    assert decode_path(encode_path(path)) == path


def test_empty_and_malformed():
    assert encode_path([]) == ""
    assert decode_path("") == []
    assert decode_path("D:1,1|x") == []
    assert decode_path("1;2") == []


def test_validate_request_path_normalises_coords():
    ok, data = validate({"seed": " cave ", "start": [1, 2], "target": [3, 4], "extra": 1}, REQUEST_PATH)
    assert ok
    assert data == {"seed": "cave", "start": Coord(1, 2), "target": Coord(3, 4)}


def test_validate_failures():
    assert validate([], REQUEST_PATH) == (False, {"field": "__root__", "error": "payload must be an object", "code": "type"})
    ok, err = validate({"seed": "x", "start": [1, True], "target": [0, 0]}, REQUEST_PATH)
    assert not ok and err["code"] == "coord"
    ok, err = validate({"seed": "x" * 200, "start": [1, 1], "target": [0, 0]}, REQUEST_PATH)
    assert not ok and err["code"] == "max_len"
    ok, err = validate({"n": True}, {"n": ("int", True)})
    assert not ok and err["code"] == "type"
    ok, err = validate({}, {"n": ("float", True)})
    assert not ok and err["field"] == "__schema__"
