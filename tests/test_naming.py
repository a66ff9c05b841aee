"""
File name normalization tests.
"""

import pytest

from drawable_export.naming import NamePolicy, normalize


class TestWhitespacePolicy:
    """Default normalization"""

    def test_my_icon(self):
        assert normalize("My Icon") == "my_icon"

    def test_collapses_whitespace_runs(self):
        assert normalize("  Back   Arrow\tLarge ") == "back_arrow_large"

    def test_keeps_other_punctuation(self):
        assert normalize("Icon (Copy).v2") == "icon_(copy).v2"

    def test_empty_name_falls_back(self):
        assert normalize("   ") == "unnamed"


class TestResourcePolicy:
    """Android resource name normalization"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("My Icon", "my_icon"),
            ("Icon (Copy).v2", "icon_copy_v2"),
            ("ic-launcher--round", "ic_launcher_round"),
            ("2x Badge", "img_2x_badge"),
            ("***", "unnamed"),
        ],
    )
    def test_resource_names(self, raw, expected):
        assert normalize(raw, NamePolicy.RESOURCE) == expected

    def test_policy_accepts_string(self):
        assert normalize("A B", "resource") == "a_b"

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            normalize("A B", "camel")
