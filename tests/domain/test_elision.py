from dictee_morph.domain.elision import (
    elided_bases_for,
    elided_bases_from_token_text,
    is_bare_elision_marker,
)


def test_elided_bases_for_known_fragments():
    assert elided_bases_for("l") == ["le", "la"]
    assert elided_bases_for("qu") == ["que"]
    assert elided_bases_for("lorsqu") == ["lorsque"]
    assert elided_bases_for("j") == ["je"]


def test_elided_bases_for_unknown_fragment_is_empty():
    assert elided_bases_for("x") == []
    assert elided_bases_for("aujourd") == []


def test_elided_bases_from_token_text_matches_left_fragments_only():
    assert elided_bases_from_token_text("Qu'") == ["que"]
    assert elided_bases_from_token_text("l’") == ["le", "la"]
    assert elided_bases_from_token_text("l '") == ["le", "la"]
    assert elided_bases_from_token_text("l'ami") == []
    assert elided_bases_from_token_text("ami") == []


def test_is_bare_elision_marker():
    assert is_bare_elision_marker("l'")
    assert is_bare_elision_marker("D’")
    assert is_bare_elision_marker("s '")
    assert not is_bare_elision_marker("qu'")
    assert not is_bare_elision_marker("l")
    assert not is_bare_elision_marker("x'")
