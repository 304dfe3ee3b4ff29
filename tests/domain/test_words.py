from dictee_morph.domain.word_exceptions import get_all_exceptional_words, get_word_exception
from dictee_morph.domain.words import (
    ExceptionalWord,
    ExoticWord,
    LemmaWord,
    format_lemma_display,
    get_mapped_pos,
    known_vocabulary_keys,
    lemma_display_for,
    render_word,
    upgrade_word_record,
    upgrade_word_records,
    word_key,
    word_to_dict,
    words_are_equal,
)


def test_upgrade_word_record_handles_legacy_shapes():
    assert upgrade_word_record({"lemma": "chat"}) == LemmaWord("chat", "chat", "")
    assert upgrade_word_record({"surface": "wifi"}) == ExoticWord("wifi")
    assert upgrade_word_record({"surface": "au", "exceptionType": "article contracté"}) == (
        ExceptionalWord("au", "article contracté")
    )
    assert upgrade_word_record({"word": {"form": "la", "lemma": "le", "pos": "det"}}) == (
        LemmaWord("le", "la", "det")
    )


def test_upgrade_word_record_handles_tagged_records():
    record = {"kind": "lemma", "lemma": "manger", "lemmaDisplay": "manger", "pos": "v"}
    word = upgrade_word_record(record)
    assert word == LemmaWord("manger", "manger", "v")
    assert word_to_dict(word) == record
    assert upgrade_word_record(word) is word


def test_upgrade_word_record_rejects_incomplete_records():
    assert upgrade_word_record({"kind": "exotic"}) is None
    assert upgrade_word_record({"kind": "exceptional", "surface": "au"}) is None
    assert upgrade_word_record({}) is None
    assert upgrade_word_record("chat") is None
    assert len(upgrade_word_records([{"lemma": "chat"}, None, {"surface": "wifi"}])) == 2


def test_known_vocabulary_keys_normalizes_lemma_and_display():
    keys = known_vocabulary_keys(
        [
            {"lemma": "Élève"},
            {"kind": "lemma", "lemma": "le", "lemmaDisplay": "la", "pos": "det"},
            {"surface": "Wifi"},
            {"lemma": ""},
        ]
    )
    assert keys == frozenset({"eleve", "le", "la", "wifi"})


def test_lemma_display_for_clitics_and_determiners():
    assert lemma_display_for("la", "le", "det") == "la"
    assert lemma_display_for("lui", "cld", "cld") == "lui"
    assert lemma_display_for("chats", "chat", "nc") is None


def test_render_word_and_labels():
    assert get_mapped_pos("nc") == "nom commun"
    assert get_mapped_pos("zzz") == "zzz"
    assert format_lemma_display("quoi?") == "quoi ?"
    assert render_word(LemmaWord("chat", "chat", "nc")) == "chat (nom commun)"
    assert render_word(ExceptionalWord("au", "article contracté")) == "au (article contracté)"
    assert render_word(ExoticWord("wifi")) == "wifi"


def test_word_key_and_equality():
    first = LemmaWord("le", "le", "det")
    second = LemmaWord("le", "la", "det")
    assert words_are_equal(first, second)
    assert word_key(first) == "lemma:le:det"
    assert not words_are_equal(first, ExoticWord("le"))
    assert words_are_equal(ExoticWord("wifi"), ExoticWord("wifi"))
    assert word_key(ExceptionalWord("du", "article contracté")) == "exceptional:du:article contracté"


def test_word_exceptions():
    assert get_word_exception("Aux") == "article contracté"
    assert get_word_exception("chat") is None
    assert get_word_exception("") is None
    assert get_all_exceptional_words() == {
        "au": "article contracté",
        "aux": "article contracté",
        "du": "article contracté",
        "des": "article contracté",
    }
