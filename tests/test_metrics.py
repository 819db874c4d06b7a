from hamster_html.docs.model import TextDir
from hamster_html.html.direction import detect_dir
from hamster_html.html.metrics import TextMetrics, estimate_text_metrics, js_round


def test_estimate_text_metrics_heuristic():
    m = estimate_text_metrics("abc", 16, 19.2)
    # 3 * 16 * 0.6 = 28.8
    assert m == TextMetrics(width=29, height=19, ascent=13, descent=3)


def test_estimate_text_metrics_minimum_one():
    m = estimate_text_metrics("", 16, 0)
    assert m.width == 1
    assert m.height == 1


def test_js_round_is_half_up():
    assert js_round(2.5) == 3
    assert js_round(0.5) == 1
    assert js_round(-2.5) == -2
    assert js_round(3.2) == 3


def test_astral_characters_count_as_two_units():
    # 2 * 10 * 0.6 = 12
    assert estimate_text_metrics("\U0001F600", 10, 12).width == 12
    assert estimate_text_metrics("中", 10, 12).width == 6


def test_detect_dir_hebrew_and_arabic_are_rtl():
    assert detect_dir("שלום") == TextDir.RTL
    assert detect_dir("مرحبا") == TextDir.RTL
    assert detect_dir("abc א") == TextDir.RTL


def test_detect_dir_ascii_and_cjk_are_ltr():
    assert detect_dir("hello world") == TextDir.LTR
    assert detect_dir("中文内容") == TextDir.LTR
    assert detect_dir("") == TextDir.LTR
