from datetime import date

from msprates.gemini.prompts import (
    RAW_SNIPPET_CHARS,
    history_prompt,
    rates_prompt,
    structuring_prompt,
)


class TestRatesPrompt:
    def test_includes_date(self):
        assert "Today is Tue Oct 01 2024" in rates_prompt(date(2024, 10, 1))

    def test_canonical_fields(self):
        prompt = rates_prompt(date(2024, 10, 1))
        for field in ("id", "crop", "variety", "category", "year", "rate", "increasePercentage"):
            assert f'"{field}"' in prompt


class TestHistoryPrompt:
    def test_anchor_rate(self):
        prompt = history_prompt("Wheat", None, "2024-25", 2275.0)
        assert "for Wheat in India" in prompt
        assert "The current MSP for 2024-25 is ₹2275 per quintal." in prompt

    def test_variety(self):
        assert "Paddy (Grade A)" in history_prompt("Paddy", "Grade A", "2024-25", 2203)


class TestStructuringPrompt:
    def test_raw_snippet_truncated(self):
        records = [{"commodity_name": "Paddy", "msp_price": "2183"}] * 200
        prompt = structuring_prompt(records)
        assert '"commodity_name": "Paddy"' in prompt
        assert len(prompt) < RAW_SNIPPET_CHARS + 2000
