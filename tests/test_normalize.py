from services.invitations.normalize import normalize


def test_trims_dedups_and_drops_blank_lines():
    assert normalize("a\n a \n\nb\na") == ["a", "b"]


def test_keeps_first_seen_order():
    assert normalize("c@x.io\nb@x.io\nc@x.io\na@x.io") == ["c@x.io", "b@x.io", "a@x.io"]


def test_handles_windows_line_endings():
    assert normalize("a@x.io\r\nb@x.io\r\n") == ["a@x.io", "b@x.io"]


def test_blank_input_is_empty():
    assert normalize("") == []
    assert normalize("   \n\t\n  ") == []
