"""Tests for environment-driven settings."""

from catalog_api.config import DEFAULT_TOP_TAG, Settings


def _clear(monkeypatch):
    for name in (
        "SHOPIFY_SHOP",
        "SHOPIFY_TOKEN",
        "CLINIC_LOCATION_ID",
        "FEATURE_TOPDOCTORES_TAG",
        "FEATURE_TOPDOCTORS_TAG",
        "SHOPIFY_API_VERSION",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_reads_required_settings(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("SHOPIFY_SHOP", "shop.myshopify.com")
    monkeypatch.setenv("SHOPIFY_TOKEN", "shpat_x")
    monkeypatch.setenv("CLINIC_LOCATION_ID", "gid://shopify/Location/7")

    settings = Settings.from_env()

    assert settings.missing() == []
    assert settings.top_tag == DEFAULT_TOP_TAG
    assert settings.graphql_endpoint == "https://shop.myshopify.com/admin/api/2024-07/graphql.json"


def test_missing_names_every_absent_variable(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("SHOPIFY_TOKEN", "   ")

    settings = Settings.from_env()

    assert settings.missing() == ["SHOPIFY_SHOP", "SHOPIFY_TOKEN", "CLINIC_LOCATION_ID"]
    assert settings.graphql_endpoint is None


def test_top_tag_accepts_both_variable_names(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("FEATURE_TOPDOCTORS_TAG", "Destacado")
    assert Settings.from_env().top_tag == "destacado"

    monkeypatch.setenv("FEATURE_TOPDOCTORES_TAG", "TopDoctores")
    assert Settings.from_env().top_tag == "topdoctores"


def test_api_version_can_be_overridden(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("SHOPIFY_SHOP", "shop.myshopify.com")
    monkeypatch.setenv("SHOPIFY_API_VERSION", "2025-01")

    assert Settings.from_env().graphql_endpoint.endswith("/admin/api/2025-01/graphql.json")


def test_startup_summary_separates_presence_from_top_tag():
    summary = Settings(shopify_shop="shop.myshopify.com", top_tag="destacado").startup_summary()

    assert summary == {
        "present": {"SHOPIFY_SHOP": True, "SHOPIFY_TOKEN": False, "CLINIC_LOCATION_ID": False},
        "top_tag": "destacado",
    }
