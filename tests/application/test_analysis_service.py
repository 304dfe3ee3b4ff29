import pytest

from dictee_morph.application.analysis_service import AnalysisService, group_lemmas
from dictee_morph.domain.grammar import decode_grammar
from dictee_morph.domain.models import Analysis
from dictee_morph.storage.assets import FORM_TO_ANALYSES_ASSET
from dictee_morph.storage.lexicon_store import LexiconStore, NotLoadedError


def _words(result):
    return [token for token in result.tokens if token.is_word]


def test_single_known_noun(store):
    result = AnalysisService(store).analyze("chat")
    assert len(result.tokens) == 1
    token = result.tokens[0]
    assert token.found is True
    assert token.ambiguous is False
    assert [(group.lemma, group.pos) for group in token.lemmas] == [("chat", ("nc",))]


def test_inflected_verb_groups_under_its_lemma(store):
    token = AnalysisService(store).analyze("manges").tokens[0]
    assert token.found is True
    assert [(group.lemma, group.pos) for group in token.lemmas] == [("manger", ("v",))]
    assert token.analyses[0].grammar.persons == (2,)


def test_unknown_word_is_not_found(store):
    result = AnalysisService(store).analyze("zzzz")
    token = result.tokens[0]
    assert token.is_word is True
    assert token.found is False
    assert token.analyses == ()
    assert token.lemmas == ()
    assert result.stats.total_words == 1
    assert result.stats.found_words == 0


def test_left_elision_resolves_every_base(store):
    result = AnalysisService(store).analyze("l'ami")
    left, right = result.tokens
    assert (left.text, right.text) == ("l'", "ami")
    assert left.found is True
    assert left.ambiguous is True
    assert {analysis.form for analysis in left.analyses} == {"le", "la"}
    assert {group.lemma_display for group in left.lemmas} == {"le", "la"}
    assert left.analyses[0].grammar.type == "pronom"
    assert right.found is True
    assert [(group.lemma, group.pos) for group in right.lemmas] == [("ami", ("adj", "nc"))]


def test_elided_conjunction(store):
    result = AnalysisService(store).analyze("qu'il")
    left, right = result.tokens
    assert [group.lemma for group in left.lemmas] == ["que"]
    assert left.lemmas[0].pos == ("csu", "prel")
    assert [group.lemma_display for group in right.lemmas] == ["il"]


def test_duplicate_records_collapse_to_one_analysis(make_reader):
    record = '{"form":"chat","lemma":"chat","pos":"nc","traits":"ms"}'
    reader = make_reader({FORM_TO_ANALYSES_ASSET: '{"chat":[%s,%s]}' % (record, record)})
    store = LexiconStore(reader)
    store.load()
    token = AnalysisService(store).analyze("chat").tokens[0]
    assert len(token.analyses) == 1
    assert token.ambiguous is False


def test_bare_marker_without_analyses_passes_through(make_reader):
    store = LexiconStore(make_reader({FORM_TO_ANALYSES_ASSET: "{}"}))
    store.load()
    result = AnalysisService(store).analyze("l'ami")
    marker, word = result.tokens
    assert marker.is_word is False
    assert word.is_word is True
    assert result.stats.total_words == 1


def test_non_words_pass_through(store):
    result = AnalysisService(store).analyze("chat, 42!")
    assert [(token.text, token.is_word) for token in result.tokens] == [
        ("chat", True),
        (",", False),
        (" ", False),
        ("4", False),
        ("2", False),
        ("!", False),
    ]
    assert result.stats.total_words == 1


def test_known_words_use_the_representative_lemma(store):
    service = AnalysisService(store, known_words={"manger", "zzzz"})
    result = service.analyze("Je manges zzzz chat")
    known = {token.text: token.known for token in _words(result)}
    assert known == {"Je": False, "manges": True, "zzzz": True, "chat": False}
    assert result.stats.known == 2

    override = service.analyze("chat", known_words={"chat"})
    assert override.tokens[0].known is True


def test_stats_are_consistent(store):
    text = "Le chat mange l'eau, qu'il aime. Zzzz élève Paris amis la"
    stats = AnalysisService(store).analyze(text).stats
    assert stats.total_words == 13
    assert stats.found_words == 11
    assert stats.ambiguous_words <= stats.found_words <= stats.total_words
    assert stats.known <= stats.total_words
    assert stats.unique_lemmas == 10


def test_result_serializes_to_wire_shape(store):
    payload = AnalysisService(store).analyze("la").to_dict()
    token = payload["tokens"][0]
    assert set(token) == {
        "start",
        "end",
        "text",
        "isWord",
        "found",
        "known",
        "ambiguous",
        "analyses",
        "lemmas",
    }
    assert token["lemmas"][0]["pos"] == ["cla", "nc"]
    assert set(payload["stats"]) == {
        "totalWords",
        "foundWords",
        "ambiguousWords",
        "uniqueLemmas",
        "known",
    }


def test_parallel_resolution_matches_sequential(store):
    text = " ".join(["Le chat mange l'eau, qu'il aime zzzz."] * 20)
    sequential = AnalysisService(store).analyze(text)
    service = AnalysisService(store, max_workers=4, parallel_min_tokens=1)
    try:
        parallel = service.analyze(text)
    finally:
        service.close()
    assert parallel == sequential


def test_analyze_before_load_raises(make_reader):
    service = AnalysisService(LexiconStore(make_reader()))
    with pytest.raises(NotLoadedError):
        service.analyze("chat")
    assert service.analyze("").tokens == ()


def test_group_lemmas_merges_pos_for_same_lemma_and_display():
    def _analysis(form, lemma, pos, display=None):
        return Analysis(
            form=form,
            lemma=lemma,
            lemma_key=lemma,
            pos=pos,
            grammar=decode_grammar(pos),
            lemma_display=display,
        )

    groups = group_lemmas(
        [
            _analysis("ami", "ami", "nc"),
            _analysis("ami", "ami", "adj"),
            _analysis("ami", "ami", "nc"),
            _analysis("la", "le", "det", display="la"),
        ]
    )
    assert [(group.lemma_display, group.pos) for group in groups] == [
        ("ami", ("nc", "adj")),
        ("la", ("det",)),
    ]
    assert groups[0].grammar.type == "nom commun"
