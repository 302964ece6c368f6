"""Tests for inline formatting of fields."""

from notes2anki_core.parsing.formatting import format_emphasis, format_field


class TestFormatEmphasis:
    """Tests for emphasis markup on plain text."""

    def test_bold_italic_strike(self) -> None:
        """Test the three emphasis styles together."""
        assert format_emphasis("**bold** and *it* and ~~s~~") == (
            "<b>bold</b> and <i>it</i> and <s>s</s>"
        )

    def test_underscore_forms(self) -> None:
        """Test __bold__ and _italic_."""
        assert format_emphasis("__b__ _i_") == "<b>b</b> <i>i</i>"

    def test_snake_case_is_not_italic(self) -> None:
        """Test that intraword underscores stay literal."""
        assert format_emphasis("snake_case_name") == "snake_case_name"

    def test_bullet_star_is_not_italic(self) -> None:
        """Test that a list bullet does not open emphasis."""
        assert format_emphasis("* one\n* two") == "* one\n* two"


class TestFormatField:
    """Tests for whole-field formatting."""

    def test_inline_code_suppresses_emphasis(self) -> None:
        """Test that stars inside code are literal."""
        assert format_field("Use `x*2*y` here") == "Use <code>x*2*y</code> here"

    def test_fenced_block(self) -> None:
        """Test that fences are stripped and content wrapped."""
        assert format_field("```python\nprint(1)\n```") == (
            "<pre><code>print(1)</code></pre>"
        )

    def test_fenced_block_line_breaks(self) -> None:
        """Test that newlines inside a fence become <br> last."""
        assert format_field("```\na\nb\n```") == "<pre><code>a<br>b</code></pre>"

    def test_highlight_inside_fence_untouched(self) -> None:
        """Test that ==x== in a fenced block is not a cloze."""
        assert format_field("```\n==Paris==\n```") == (
            "<pre><code>==Paris==</code></pre>"
        )

    def test_highlight_in_plain_text(self) -> None:
        """Test that ==x== outside code is a cloze."""
        assert format_field("Capital: ==Paris==") == "Capital: {{c1::Paris}}"

    def test_inline_math(self) -> None:
        """Test inline math delimiters and no emphasis inside."""
        assert format_field("$a*b*c$") == r"\(a*b*c\)"

    def test_display_math(self) -> None:
        """Test display math delimiters."""
        assert format_field("$$x^2$$") == r"\[x^2\]"

    def test_line_breaks(self) -> None:
        """Test that plain newlines become <br>."""
        assert format_field("a\r\nb\nc") == "a<br>b<br>c"

    def test_math_suppresses_clozes(self) -> None:
        """Test that highlight and brace forms inside math stay literal."""
        assert format_field("$==x== {y}$") == r"\(==x== {y}\)"
        assert format_field("{a} $$\\frac{1}{2}$$") == r"{{c1::a}} \[\frac{1}{2}\]"
