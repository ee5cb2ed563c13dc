"""Tests for the Shopify search expression builder."""

from catalog_api.search import STATUS_FILTER, build_product_query


def test_empty_input_returns_status_filter_only():
    assert build_product_query("") == "status:active"
    assert build_product_query("   ") == "status:active"
    assert build_product_query(None) == STATUS_FILTER


def test_terms_become_and_joined_prefix_clauses():
    """Each term matches title, vendor or tag by prefix; terms are AND-ed."""

    assert build_product_query("Café Rojo") == (
        "(title:cafe* OR vendor:cafe* OR tag:cafe*)"
        " AND (title:rojo* OR vendor:rojo* OR tag:rojo*)"
        " AND status:active"
    )


def test_terms_are_sanitized_before_reaching_the_filter():
    query = build_product_query('crema" OR status:draft')
    assert '"' not in query
    assert "status:draft" not in query
    assert query.startswith("(title:crema* OR vendor:crema* OR tag:crema*) AND ")
    assert "(title:statusdraft* OR vendor:statusdraft* OR tag:statusdraft*)" in query
    assert query.endswith(" AND status:active")


def test_terms_with_no_searchable_characters_are_skipped():
    assert build_product_query("*** ---") == "status:active"
    assert build_product_query("--- sol") == "(title:sol* OR vendor:sol* OR tag:sol*) AND status:active"
