import threading

import pytest
from conftest import DICT_EXAMPLE, ZOLWI_CONTENT, ZOLWICA_CONTENT, xdxf

from xdxf_index import (
    Dictionary,
    MalformedInputError,
    SourceReadError,
    StructureError,
    UndefinedAbbreviationError,
    feed_from_path,
    feed_from_text,
    load_from_path,
    load_from_text,
    lookup,
)


def test_parser(dictionary):
    assert dictionary.abbreviations["m"] == "rodzaj męski"

    nodes = dictionary.lookup("żół")
    assert len(nodes) == 2
    assert nodes[0] == ("żółwi", ZOLWI_CONTENT)
    assert nodes[1] == ("żółwica", ZOLWICA_CONTENT)


def test_rendered_body_details(dictionary):
    content = dictionary.get("żółwi")
    assert "<span class='partofspeech'><acronym title='rzeczownik'>rzecz.</acronym></span>" in content
    assert "<acronym title='rodzaj męski'>m</acronym>" in content
    assert "<br/>черепаха" in content
    assert "\n" not in content


def test_short_prefix_is_empty(dictionary):
    assert dictionary.lookup("żó") == []
    assert lookup(dictionary, "") == []


def test_load_from_path(source_file):
    dictionary = load_from_path(source_file)
    assert [headword for headword, _ in dictionary.lookup("żół")] == ["żółwi", "żółwica"]


def test_missing_file(tmp_path):
    with pytest.raises(SourceReadError):
        load_from_path(tmp_path / "missing.xdxf")


def test_undecodable_file(tmp_path):
    path = tmp_path / "cp1251.xdxf"
    path.write_bytes("<xdxf>черепаха</xdxf>".encode("cp1251"))
    with pytest.raises(SourceReadError):
        Dictionary.load_file(path)


def test_independent_loads_render_identically(source_file):
    first = load_from_text(DICT_EXAMPLE)
    second = Dictionary()
    feed_from_path(second, source_file)
    assert list(first.articles()) == list(second.articles())


def test_feed_accumulates():
    dictionary = load_from_text(DICT_EXAMPLE)
    summary = feed_from_text(
        dictionary,
        xdxf("<ar><k>żółtko</k>желток <abr>n</abr></ar>", "<abr_def><k>n</k><v>nijaki</v></abr_def>"),
    )
    assert summary.articles == 1
    assert summary.abbreviations == 1
    assert [h for h, _ in dictionary.lookup("żół")] == ["żółtko", "żółwi", "żółwica"]
    assert dictionary.abbreviations["n"] == "nijaki"
    assert dictionary.abbreviations["f"] == "rodzaj żeński"


def test_later_source_uses_earlier_abbreviations():
    dictionary = load_from_text(DICT_EXAMPLE)
    dictionary.feed_text(xdxf("<ar><k>żółtek</k><abr>m</abr></ar>"))
    assert dictionary.get("żółtek") == "<acronym title='rodzaj męski'>m</acronym>"


def test_duplicate_headword_overwrites():
    dictionary = Dictionary.load_text(xdxf("<ar><k>słowo</k>one</ar><ar><k>słowo</k>two</ar>"))
    assert dictionary.lookup("sło") == [("słowo", "two")]
    assert len(dictionary) == 1


@pytest.mark.parametrize(
    "source, error",
    [
        ("<xdxf><ar><k>słowo</k>", MalformedInputError),
        (xdxf("<ar><k>słowo</k><abr>zzz</abr></ar>"), UndefinedAbbreviationError),
        (xdxf("<ar>no headword</ar>"), StructureError),
        (xdxf("", "<abr_def><k>x</k></abr_def>"), StructureError),
    ],
)
def test_failing_feed_leaves_dictionary_untouched(source, error):
    dictionary = load_from_text(DICT_EXAMPLE)
    before = list(dictionary.articles())
    abbreviations = dict(dictionary.abbreviations)
    with pytest.raises(error):
        dictionary.feed_text(source)
    assert list(dictionary.articles()) == before
    assert dict(dictionary.abbreviations) == abbreviations


def test_articles_before_failure_are_not_committed():
    dictionary = Dictionary()
    with pytest.raises(UndefinedAbbreviationError):
        dictionary.feed_text(xdxf("<ar><k>słoik</k>банка</ar><ar><k>słowo</k><abr>zzz</abr></ar>"))
    assert len(dictionary) == 0
    assert dictionary.lookup("sło") == []


def test_other_root_contributes_nothing():
    dictionary = Dictionary.load_text("<dictionary><ar><k>słowo</k>x</ar></dictionary>")
    assert len(dictionary) == 0


def test_unknown_top_level_children_ignored():
    dictionary = Dictionary.load_text(
        xdxf("<meta_info><k>ignored</k></meta_info><!-- c --><ar><k>słowo</k>x</ar>")
    )
    assert dictionary.lookup("sło") == [("słowo", "x")]


def test_abbreviations_view_is_read_only(dictionary):
    with pytest.raises(TypeError):
        dictionary.abbreviations["zzz"] = "x"


def test_concurrent_lookups_during_feed():
    dictionary = load_from_text(DICT_EXAMPLE)
    results = []

    def reader():
        for _ in range(50):
            results.append(len(dictionary.lookup("żół")))

    threads = [threading.Thread(target=reader) for _ in range(4)]
    for thread in threads:
        thread.start()
    dictionary.feed_text(xdxf("<ar><k>żółtko</k>желток</ar>"))
    for thread in threads:
        thread.join()
    assert set(results) <= {2, 3}
    assert len(dictionary.lookup("żół")) == 3
