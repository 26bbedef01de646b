from ecroll.utils import bn_to_ascii, digits_only, normalize_birth_date


def test_bengali_digits_map_to_ascii():
    assert bn_to_ascii("০১২৩৪৫৬৭৮৯") == "0123456789"


def test_non_digits_pass_through():
    assert bn_to_ascii("ভোটার নং: ১২৩") == "ভোটার নং: 123"
    assert bn_to_ascii("abc 42") == "abc 42"
    assert bn_to_ascii("") == ""


def test_digits_only_keeps_digits_of_both_scripts():
    assert digits_only("১২-৩৪ 56") == "123456"
    assert digits_only("—") == ""


def test_birth_date_is_normalized():
    assert normalize_birth_date("১২/০৫/১৯৮০") == "12/05/1980"
    assert normalize_birth_date("1-5-1980") == "01/05/1980"
    assert normalize_birth_date(" ৭.৮.১৯৯৯ ") == "07/08/1999"


def test_birth_date_noise_after_date_is_dropped():
    assert normalize_birth_date("০১/০১/১৯৯০ ঠিকানা") == "01/01/1990"


def test_unrecognized_birth_date_is_kept_as_extracted():
    assert normalize_birth_date("৩২/০১/১৯৯০") == "32/01/1990"
    assert normalize_birth_date("১৯৯০") == "1990"
    assert normalize_birth_date("") == ""
