from hadith_hub.text.normalize import normalize_title


def test_empty_and_none():
    assert normalize_title(None) == ""
    assert normalize_title("") == ""
    assert normalize_title("   ") == ""


def test_hamza_and_persian_ya_fold_together():
    assert normalize_title("أعلام الدین") == normalize_title("اعلام الدين")


def test_diacritics_stripped():
    assert normalize_title("كِتَابُ الصَّلَاةِ") == normalize_title("كتاب الصلاة")
    # superscript alef
    assert normalize_title("الرحمٰن") == normalize_title("الرحمن")


def test_diacritic_range_keeps_arabic_indic_digits():
    assert normalize_title("الباب ٣") == "الباب٣"


def test_alef_variants():
    assert normalize_title("أ") == normalize_title("إ") == normalize_title("آ") == normalize_title("ء") == "ا"


def test_alef_maksura_and_ta_marbuta():
    assert normalize_title("موسى") == "موسي"
    assert normalize_title("الصحيفة") == "الصحيفه"


def test_tatweel_removed():
    assert normalize_title("الكـــافي") == normalize_title("الكافي")


def test_persian_kaf_and_ya():
    assert normalize_title("الکافی") == normalize_title("الكافي")


def test_punctuation_and_whitespace():
    assert normalize_title("كتاب (الاول)") == normalize_title("كتاب الاول")
    assert normalize_title("«نهج البلاغة»") == normalize_title("نهج البلاغة")
    assert normalize_title("الكافي - الروضة") == normalize_title("الكافي (الروضة)")
    assert normalize_title("تحف، العقول؛ ۔ : / \\ [x]") == "تحفالعقولx"


def test_quotes_removed():
    assert normalize_title("\"Tuhaf\" 'al' “Uqul” ‘x’") == "tuhafaluqulx"


def test_latin_lowercased():
    assert normalize_title("Abc") == normalize_title("abc") == "abc"


def test_non_string_cell():
    assert normalize_title(12) == "12"


def test_idempotent():
    samples = [
        "أعلام الدین",
        "الکافي (دارالحدیث)",
        "  Bihar  al-Anwar  ",
        "وسائل الشیعة",
        "الكـافي «الروضة»",
        "",
    ]
    for s in samples:
        once = normalize_title(s)
        assert normalize_title(once) == once
