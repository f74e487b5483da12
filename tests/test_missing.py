from dtobox import Missing, is_missing


def test_missing_is_falsy_and_keeps_key():
    missing = Missing('name')

    assert not missing
    assert missing.key == 'name'
    assert repr(missing) == "Missing('name')"


def test_missing_equality_is_by_type():
    assert Missing('a') == Missing('b')
    assert hash(Missing('a')) == hash(Missing())
    assert Missing('a') != None  # noqa: E711
    assert Missing('a') != 'a'
    assert len({Missing('a'), Missing('b')}) == 1


def test_is_missing():
    assert is_missing(Missing())
    assert not is_missing(None)
    assert not is_missing(0)
