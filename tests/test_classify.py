from services.invitations.classify import classify, is_valid_email_address


def test_owner_is_in_neither_list():
    result = classify(["x@y.com", "bad", "owner@site"], excluded="owner@site")
    assert result.valid == ("x@y.com",)
    assert result.invalid == ("bad",)


def test_owner_dropped_even_when_it_is_a_valid_address():
    result = classify(["me@acme.io", "you@acme.io"], excluded="me@acme.io")
    assert result.valid == ("you@acme.io",)
    assert result.invalid == ()


def test_partition_covers_every_candidate_once():
    candidates = ["a@acme.io", "nope", "b@acme.io", "also nope", "a@acme.io"]
    result = classify(candidates)
    assert set(result.valid) & set(result.invalid) == set()
    assert set(result.valid) | set(result.invalid) == set(candidates)
    assert len(result.valid) + len(result.invalid) == 4


def test_custom_predicate():
    result = classify(["1", "22", "333"], is_valid=lambda c: len(c) > 1)
    assert result.valid == ("22", "333")
    assert result.invalid == ("1",)


def test_email_predicate():
    assert is_valid_email_address("someone@acme.io")
    assert not is_valid_email_address("someone")
    assert not is_valid_email_address("someone@")
    assert not is_valid_email_address("two words@acme.io")
