from recipebox.entities import decode_entities


def test_named_and_numeric_references():
    assert decode_entities("&frac14; cup sugar") == "¼ cup sugar"
    assert decode_entities("Grandma&#8217;s pie") == "Grandma’s pie"
    assert decode_entities("Fish &amp; chips &mdash; classic") == "Fish & chips — classic"
    assert decode_entities("&#x2F;") == "/"


def test_text_without_references_is_unchanged():
    assert decode_entities("") == ""
    assert decode_entities("2 eggs") == "2 eggs"
    assert decode_entities("salt & pepper") == "salt & pepper"


def test_unterminated_reference_is_left_alone():
    assert decode_entities("AT&T rates") == "AT&T rates"


def test_decoding_twice_changes_nothing():
    once = decode_entities("&frac12; tsp &quot;fine&quot; salt")
    assert decode_entities(once) == once


def test_unknown_names_with_a_known_prefix_are_kept():
    assert decode_entities("&notit; &ampersand;") == "&notit; &ampersand;"
    assert decode_entities("&not; &amp;") == "¬ &"
