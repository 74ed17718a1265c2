import pytest

from nearfeed.i18n.translator import SUPPORTED_LOCALES, Translator, load_locale_table, normalize_locale


def test_normalize_locale():
    assert normalize_locale("fr-CA") == "fr"
    assert normalize_locale("AR") == "ar"
    assert normalize_locale("en_US") == "en"
    assert normalize_locale("de") == "fr"
    assert normalize_locale(None) == "fr"


def test_translate_with_fallbacks():
    fr = Translator("fr")
    assert fr.t("nearby") == "À proximité"
    assert fr.t("unknownKey") == "unknownKey"

    ar = Translator("ar")
    assert ar.t("perMonth") == "/ شهر"
    assert ar.direction == "rtl"
    assert fr.direction == "ltr"


def test_unsupported_locale_serves_french():
    assert Translator("de").t("nearby") == "À proximité"
    assert Translator(None).locale == "fr"


@pytest.mark.parametrize("locale", SUPPORTED_LOCALES)
def test_locale_tables_share_the_same_keys(locale):
    reference = set(load_locale_table("fr"))
    assert set(load_locale_table(locale)) == reference


def test_labels_cover_every_key():
    labels = Translator("ar").labels()
    assert labels["nearby"] == "بالقرب منك"
    assert set(labels) == set(load_locale_table("fr"))


def test_translators_are_independent():
    en = Translator("en")
    fr = Translator("fr")
    assert en.t("All") == "All"
    assert fr.t("All") == "Tous"
