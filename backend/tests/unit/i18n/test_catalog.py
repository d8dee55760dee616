import pytest

from content_i18n.i18n.catalog import (
    CATEGORY_LABELS,
    MESSAGES,
    LocalizeOptions,
    get_messages,
    is_localized_object,
    localize_data,
    localize_data_with_paths,
    pick_locale,
    t,
    tr_category,
)
from content_i18n.i18n.context import reset_language, set_language


@pytest.mark.unit
class TestMessages:
    def test_every_locale_has_every_key(self):
        keys = set(MESSAGES["en"])
        assert set(MESSAGES["so"]) == keys
        assert set(MESSAGES["ar"]) == keys
        assert set(CATEGORY_LABELS["so"]) == set(CATEGORY_LABELS["en"]) == set(CATEGORY_LABELS["ar"])

    def test_lookup(self):
        assert t("readMore", "so") == "Akhri Dheeraad"
        assert t("readMore", "ar-SA") == "اقرأ المزيد"

    def test_unknown_locale_falls_back_to_english(self):
        assert t("readMore", "fr") == "Read More"

    def test_unknown_key_returns_key(self):
        assert t("doesNotExist", "so") == "doesNotExist"

    def test_params_are_interpolated(self):
        assert t("pageOf", "en", page=2, total=9) == "Page 2 of 9"
        assert t("pageOf", "so", page=1, total=3) == "Bogga 1 ee 3"

    def test_missing_param_returns_template(self):
        assert t("pageOf", "en", page=2) == "Page {page} of {total}"

    def test_uses_request_language(self):
        token = set_language("ar")
        try:
            assert t("close") == "إغلاق"
            assert get_messages()["next"] == "التالي"
        finally:
            reset_language(token)
        assert t("close") == "Close"

    def test_get_messages_is_complete(self):
        assert set(get_messages("so")) == set(MESSAGES["en"])


@pytest.mark.unit
class TestPickLocale:
    def test_plain_string(self):
        assert pick_locale("Hello", "so") == "Hello"

    def test_none(self):
        assert pick_locale(None, "so") == ""

    def test_localized_object(self):
        value = {"en": "Hello", "so": "Salaan", "ar": "مرحبا"}
        assert pick_locale(value, "so") == "Salaan"
        assert pick_locale(value, "ar") == "مرحبا"

    def test_falls_back_to_english_then_empty(self):
        assert pick_locale({"en": "Hello", "so": ""}, "so") == "Hello"
        assert pick_locale({"so": "Salaan"}, "ar") == ""

    def test_is_localized_object(self):
        assert is_localized_object({"en": "Hi"})
        assert not is_localized_object({"name": "Hi"})
        assert not is_localized_object("Hi")


@pytest.mark.unit
class TestCategories:
    def test_translate_category(self):
        assert tr_category("so", "documentary") == "Dukumentari"
        assert tr_category("ar", "web-series") == "سلسلة الويب"

    def test_unknown_category_returns_key(self):
        assert tr_category("so", "podcast") == "podcast"

    def test_empty_category(self):
        assert tr_category("so", None) == ""


@pytest.mark.unit
class TestLocalizeData:
    def test_resolves_localized_fields_and_categories(self):
        data = {
            "items": [
                {
                    "title": {"en": "Our Story", "so": "Sheekadeena", "ar": "قصتنا"},
                    "category": "documentary",
                    "meta": {"caption": {"en": "Caption", "so": "Qoraal"}},
                    "views": 10,
                }
            ]
        }

        result = localize_data(data, "so")

        assert result == {
            "items": [
                {
                    "title": "Sheekadeena",
                    "category": "Dukumentari",
                    "meta": {"caption": "Qoraal"},
                    "views": 10,
                }
            ]
        }
        assert data["items"][0]["category"] == "documentary"

    def test_plain_named_fields_are_kept(self):
        data = {"title": "Already plain", "description": {"html": "<p>x</p>"}}
        assert localize_data(data, "ar") == data

    def test_auto_detect_can_be_disabled(self):
        options = LocalizeOptions(auto_detect_localized_objects=False)
        data = {"caption": {"en": "Caption", "so": "Qoraal"}}

        assert localize_data(data, "so", options) == data

    def test_non_container_values_pass_through(self):
        assert localize_data("Hello", "so") == "Hello"
        assert localize_data(None, "so") is None

    def test_reports_leaves_resolved_in_target_locale(self):
        data = {
            "title": {"en": "Hello there", "ar": "مرحبا بكم"},
            "category": "documentary",
            "cards": [{"caption": {"en": "Only English"}}, {"category": "custom-key"}],
            "summary": "Plain text",
        }

        result, resolved = localize_data_with_paths(data, "ar")

        assert result == {
            "title": "مرحبا بكم",
            "category": "الوثائقي",
            "cards": [{"caption": "Only English"}, {"category": "custom-key"}],
            "summary": "Plain text",
        }
        assert resolved == {("title",), ("category",), ("cards", 1, "category")}

    def test_english_fallback_is_not_reported(self):
        _, resolved = localize_data_with_paths({"title": {"en": "Hello", "so": ""}}, "so")

        assert resolved == set()
