import pytest

from sbctl.stringset import StringSet


@pytest.mark.parametrize(
    "allowed, value, want_type, want_error, want_string",
    [
        (None, "abc", "[]", True, ""),
        (["pk"], "pk", "[pk]", False, "pk"),
        (["pk"], "pj", "[pk]", True, ""),
        (["pk", "kek", "db"], "db", "[pk,kek,db]", False, "db"),
        (["pk", "kek", "db"], "da", "[pk,kek,db]", True, ""),
    ],
    ids=[
        "no string allowed",
        "set value",
        "set wrong value",
        "multiple allowed",
        "fail on multiple allowed",
    ],
)
def test_string_set(allowed, value, want_type, want_error, want_string):
    string_set = StringSet(allowed, "")
    assert string_set.type_name() == want_type
    if want_error:
        with pytest.raises(ValueError):
            string_set.set(value)
    else:
        string_set.set(value)
    assert str(string_set) == want_string


def test_error_message_lists_allowed():
    string_set = StringSet(["pk", "kek", "db"])
    with pytest.raises(ValueError, match="da is not included in pk,kek,db"):
        string_set.set("da")