from recipebox.extract import extract_json_ld, iter_candidate_blocks


def test_no_blocks_gives_empty_result():
    result = extract_json_ld("<html><body>No structured data here</body></html>")
    assert result.documents == []
    assert result.skipped == 0


def test_blocks_are_returned_in_document_order():
    html = (
        '<script type="application/ld+json">{"a": 1}</script>'
        '<p>between</p>'
        '<script type="application/ld+json">[{"b": 2}]</script>'
    )
    result = extract_json_ld(html)
    assert result.documents == [{"a": 1}, [{"b": 2}]]


def test_malformed_block_is_skipped_and_scan_continues():
    html = (
        '<script type="application/ld+json">{ this is not json }</script>'
        '<script type="application/ld+json">{"@type": "Recipe", "name": "Ok"}</script>'
    )
    result = extract_json_ld(html)
    assert result.skipped == 1
    assert result.documents == [{"@type": "Recipe", "name": "Ok"}]


def test_marker_and_closing_tag_are_case_insensitive():
    html = (
        "<SCRIPT TYPE='Application/LD+JSON' id=\"schema\">\n"
        '  {"name": "Loud"}  \n'
        "</SCRIPT>"
    )
    assert list(iter_candidate_blocks(html)) == ['{"name": "Loud"}']
    assert extract_json_ld(html).documents == [{"name": "Loud"}]


def test_other_scripts_are_ignored():
    html = (
        '<script>var x = {"@type": "Recipe"};</script>'
        '<script type="application/json">{"@type": "Recipe"}</script>'
    )
    assert extract_json_ld(html).documents == []


def test_too_deeply_nested_block_is_skipped():
    deep = "[" * 100000 + "]" * 100000
    html = (
        f'<script type="application/ld+json">{deep}</script>'
        '<script type="application/ld+json">{"@type": "Recipe", "name": "After"}</script>'
    )
    result = extract_json_ld(html)
    assert result.skipped == 1
    assert result.documents == [{"@type": "Recipe", "name": "After"}]


def test_empty_block_counts_as_skipped():
    result = extract_json_ld('<script type="application/ld+json">   </script>')
    assert result.documents == []
    assert result.skipped == 1
