"""Tests for identifier classification."""

from shortlinks.identifiers import classify, is_addressable, NumericId, AliasKey, MAX_IDENTIFIER


class TestClassify:
    """Numeric ids versus aliases."""

    def test_digits_are_numeric(self):
        assert classify("42") == NumericId(42)
        assert classify("007") == NumericId(7)

    def test_everything_else_is_alias(self):
        assert classify("promo") == AliasKey("promo")
        assert classify("12abc") == AliasKey("12abc")
        assert classify("-5") == AliasKey("-5")
        assert classify("") == AliasKey("")

    def test_non_ascii_digits_are_alias(self):
        # Arabic-Indic digits are not 0-9
        assert classify("١٢") == AliasKey("١٢")

    def test_range(self):
        assert NumericId(1).in_range
        assert NumericId(MAX_IDENTIFIER).in_range
        assert not NumericId(0).in_range
        assert not NumericId(MAX_IDENTIFIER + 1).in_range

    def test_huge_number_is_still_numeric(self):
        key = classify("9" * 40)
        assert isinstance(key, NumericId)
        assert not key.in_range

    def test_addressable(self):
        assert is_addressable(classify("42"))
        assert is_addressable(classify("my-file_2"))
        assert not is_addressable(classify("0"))
        assert not is_addressable(classify("9" * 40))

    def test_unstorable_aliases_are_not_addressable(self):
        assert not is_addressable(classify("a\x00b"))
        assert not is_addressable(classify("bad alias"))
        assert not is_addressable(classify("café"))
        assert not is_addressable(classify(""))
