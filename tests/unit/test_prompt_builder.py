"""Unit tests for cleanseai.core.prompt_builder — removal instruction template.

Tests cover:
- Verbatim embedding of the user's description.
- Presence of every instruction section in order.
- Determinism and handling of awkward user text.
"""

from __future__ import annotations

from cleanseai.core.prompt_builder import REMOVAL_PROMPT_TEMPLATE, build_removal_prompt


class TestBuildRemovalPrompt:
    """Test build_removal_prompt()."""

    def test_embeds_user_prompt_in_quotes(self):
        """The description should appear verbatim inside the request line."""
        result = build_removal_prompt("the person in the red shirt")
        assert '**User\'s Request:** "the person in the red shirt"' in result

    def test_placeholder_is_replaced(self):
        result = build_removal_prompt("a lamp post")
        assert "{user_prompt}" not in result

    def test_sections_in_order(self):
        """Instructions should run remove -> reconstruct -> preserve -> output -> warning."""
        result = build_removal_prompt("a lamp post")
        markers = [
            "expert image processing specialist",
            "**User's Request:**",
            "**Analyze and Remove:**",
            "**Reconstruct:**",
            "**Preserve Quality:**",
            "**Output:**",
            "**Critical Warning:**",
        ]
        positions = [result.index(marker) for marker in markers]
        assert positions == sorted(positions)

    def test_output_instruction_requests_image_only(self):
        result = build_removal_prompt("a lamp post")
        assert "Provide only the clean, edited image as the output." in result
        assert "unless you are unable to process the image" in result

    def test_is_deterministic(self):
        assert build_removal_prompt("dust spots") == build_removal_prompt("dust spots")

    def test_braces_in_user_text_survive(self):
        """Format-style braces in user text must not be interpreted."""
        result = build_removal_prompt("the {logo} in the corner")
        assert '"the {logo} in the corner"' in result

    def test_only_user_text_differs(self):
        """Everything except the description comes from the template."""
        result = build_removal_prompt("X")
        assert result == REMOVAL_PROMPT_TEMPLATE.replace("{user_prompt}", "X")
