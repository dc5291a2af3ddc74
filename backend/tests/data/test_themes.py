"""
Tests for the canned theme bundles behind the keyword fallback.
"""
import pytest

from app.data.themes import THEMES, match_theme, generic_theme


class TestMatchTheme:

    @pytest.mark.parametrize("prompt, expected", [
        ("Robotics startups", "Robotics & Automation Index"),
        ("warehouse AUTOMATION", "Robotics & Automation Index"),
        ("sustainable energy stocks", "Clean Energy Innovation Index"),
        ("clean water", "Clean Energy Innovation Index"),
        ("Renewable utilities", "Clean Energy Innovation Index"),
        ("companies with a CEO under 40", "Young Visionary CEOs Index"),
        ("young ceo founders", "Young Visionary CEOs Index"),
        ("AI chip makers", "AI Revolution Index"),
        ("artificial intelligence leaders", "AI Revolution Index"),
        ("medical devices", "Digital Health Innovation Index"),
        ("Healthcare disruptors", "Digital Health Innovation Index"),
    ])
    def test_keyword_routing(self, prompt, expected):
        assert match_theme(prompt)["indexName"] == expected

    def test_sustainable_wins_over_ai_substring(self):
        # "sustainable" contains "ai"; the energy bundle is checked first
        assert match_theme("sustainable farming")["key"] == "clean_energy"

    def test_robotics_checked_before_ai(self):
        assert match_theme("AI robotics")["key"] == "robotics"

    def test_ceo_alone_does_not_match_leadership(self):
        assert match_theme("ceo succession") is None

    def test_no_match_returns_none(self):
        assert match_theme("shipping and ports") is None

    def test_ai_bundle_symbols(self):
        theme = match_theme("ai")
        assert [c["symbol"] for c in theme["companies"]] == [
            "NVDA", "MSFT", "GOOGL", "AMZN", "META", "TSLA", "PLTR", "AMD",
        ]

    def test_clean_energy_bundle_symbols(self):
        theme = match_theme("clean energy")
        assert [c["symbol"] for c in theme["companies"]] == [
            "TSLA", "NEE", "FSLR", "ENPH", "PLUG", "BEP", "VWS.CO", "ALB",
        ]

    def test_returns_copy(self):
        theme = match_theme("ai")
        theme["companies"].clear()
        theme["indexName"] = "mutated"

        again = match_theme("ai")
        assert again["indexName"] == "AI Revolution Index"
        assert len(again["companies"]) == 8


class TestGenericTheme:

    def test_prompt_is_interpolated_verbatim(self):
        theme = generic_theme("Shipping & Ports")
        assert theme["indexName"] == "Innovation Leaders Index"
        assert theme["description"] == (
            'Companies driving innovation and growth in themes related to "Shipping & Ports", '
            "representing the future of industry transformation."
        )

    def test_prompt_with_braces_is_safe(self):
        theme = generic_theme("{weird} prompt")
        assert '"{weird} prompt"' in theme["description"]


def test_every_bundle_has_between_6_and_10_companies():
    for theme in THEMES:
        assert 6 <= len(theme["companies"]) <= 10, theme["key"]
        for company in theme["companies"]:
            assert company["name"] and company["symbol"]
