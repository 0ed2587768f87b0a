"""
Test Secure Prompt Manager Module

This module tests the SecurePromptManager to ensure it properly prevents
prompt injection attacks and safely handles user data in the evaluation
prompt templates.

Dependencies:
- pytest: For testing framework
- app.core.secure_prompt_manager: The module being tested
"""

import pytest
from app.core.secure_prompt_manager import SecurePromptManager, sanitize_text, PromptTemplate

class TestSanitizeText:
    """Test the sanitize_text function for various injection attempts."""
    
    def test_sanitize_normal_text(self):
        """Test that normal text is sanitized correctly."""
        text = "Hello, this is a normal response."
        result = sanitize_text(text)
        assert result == "Hello, this is a normal response."
    
    def test_sanitize_html_injection(self):
        """Test that HTML injection is prevented."""
        text = "<script>alert('xss')</script>Hello"
        result = sanitize_text(text)
        assert "<script>" not in result
        assert "&lt;script&gt;" in result
    
    def test_sanitize_null_bytes(self):
        """Test that null bytes are removed."""
        text = "Hello\x00World"
        result = sanitize_text(text)
        assert "\x00" not in result
        assert "HelloWorld" in result
    
    def test_sanitize_control_characters(self):
        """Test that control characters are removed."""
        text = "Hello\x01\x02\x03World"
        result = sanitize_text(text)
        assert "\x01" not in result
        assert "\x02" not in result
        assert "\x03" not in result
        assert "HelloWorld" in result
    
    def test_sanitize_length_limit(self):
        """Test that text is truncated to prevent DoS."""
        long_text = "A" * 2000
        result = sanitize_text(long_text)
        assert len(result) <= 1000

    def test_sanitize_without_length_limit(self):
        """Test that max_length=None keeps long text whole."""
        long_text = "A" * 100000
        assert sanitize_text(long_text, max_length=None) == long_text
    
    def test_sanitize_none_input(self):
        """Test that None input raises ValueError."""
        with pytest.raises(ValueError, match="Text cannot be None"):
            sanitize_text(None)
    
    def test_sanitize_empty_after_cleaning(self):
        """Test that empty text after sanitization raises ValueError."""
        with pytest.raises(ValueError, match="Text cannot be empty after sanitization"):
            sanitize_text("")

class TestPromptTemplate:
    """Test the PromptTemplate class."""
    
    def test_template_rendering(self):
        """Test basic template rendering."""
        template = PromptTemplate(
            template="Hello {name}, you are a {role}.",
            placeholders={"name": "User's name", "role": "User's role"}
        )
        result = template.render(name="John", role="developer")
        assert result == "Hello John, you are a developer."
    
    def test_template_missing_placeholder(self):
        """Test that missing placeholders raise ValueError."""
        template = PromptTemplate(
            template="Hello {name}, you are a {role}.",
            placeholders={"name": "User's name", "role": "User's role"}
        )
        with pytest.raises(ValueError, match="Missing required placeholders"):
            template.render(name="John")
    
    def test_template_unknown_key_ignored(self):
        """Test that unknown keys are ignored to prevent injection."""
        template = PromptTemplate(
            template="Hello {name}.",
            placeholders={"name": "User's name"}
        )
        result = template.render(name="John", malicious_key="injection")
        assert result == "Hello John."
    
    def test_template_injection_attempt(self):
        """Test that injection attempts are sanitized."""
        template = PromptTemplate(
            template="Hello {name}.",
            placeholders={"name": "User's name"}
        )
        malicious_input = "<script>alert('xss')</script>"
        result = template.render(name=malicious_input)
        assert "<script>" not in result
        assert "&lt;script&gt;" in result

    def test_sanitization_config_length_and_escaping(self):
        """Test that per-placeholder config controls truncation and escaping."""
        template = PromptTemplate(
            template="{answer}",
            placeholders={"answer": "Candidate answer"},
            sanitization_config={"answer": {"max_length": 5000, "escape_html": False}},
        )
        result = template.render(answer="<b>" + "A" * 3000)
        assert result.startswith("<b>")
        assert len(result) == 3003

    def test_raw_placeholder_is_inserted_untouched(self):
        """Test that raw placeholders skip sanitization, including empty values."""
        template = PromptTemplate(
            template="Header\n{optional}Body",
            placeholders={"optional": "Optional line"},
            sanitization_config={"optional": {"raw": True}},
        )
        assert template.render(optional="") == "Header\nBody"

class TestSecurePromptManager:
    """Test the SecurePromptManager class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.manager = SecurePromptManager()

    def test_full_interview_template(self):
        """Test full interview prompt rendering."""
        prompt = self.manager.render(
            "full_interview_evaluation",
            skill_count=12,
            skills_section="### 1. Story Structure & Clarity",
            transcript="[CANDIDATE]: I led the launch.",
        )
        assert "N+STAR+TL Framework" in prompt
        assert "Skills to Evaluate (12 Total)" in prompt
        assert "[CANDIDATE]: I led the launch." in prompt

    def test_transcript_control_characters_removed(self):
        """Test that control characters in the transcript are stripped."""
        prompt = self.manager.render(
            "full_interview_evaluation",
            skill_count=12,
            skills_section="### 1. Story Structure & Clarity",
            transcript="[CANDIDATE]: I led\x00 the\x07 launch.",
        )
        assert "\x00" not in prompt
        assert "\x07" not in prompt
        assert "I led the launch." in prompt

    def test_long_transcript_is_never_truncated(self):
        """Test that a transcript far past every length limit is kept whole."""
        transcript = "[CANDIDATE]: " + "word " * 20000 + "closing answer"
        prompt = self.manager.render(
            "full_interview_evaluation",
            skill_count=12,
            skills_section="### 1. Story Structure & Clarity",
            transcript=transcript,
        )
        assert transcript.strip() in prompt

    def test_missing_placeholder_raises(self):
        """Test that missing template data is rejected."""
        with pytest.raises(ValueError, match="Missing required placeholders"):
            self.manager.render("quick_question_evaluation", category="Behavioral")

    def test_unknown_template_raises(self):
        """Test that an unknown template name is rejected."""
        with pytest.raises(KeyError):
            self.manager.get_template("response_analysis")


class TestSecurityFeatures:
    """Test specific security features and edge cases."""
    
    def test_unicode_normalization(self):
        """Test that unicode characters are properly normalized."""
        text = "Hello\u2028World\u2029"  # Unicode line/paragraph separators
        result = sanitize_text(text)
        # Note: The current sanitize_text function doesn't remove \u2028 and \u2029
        # This is acceptable as they are not control characters in the current regex
        assert "Hello" in result
        assert "World" in result
    
    def test_whitespace_handling(self):
        """Test that whitespace is properly handled."""
        text = "  Hello  World  "
        result = sanitize_text(text)
        assert result == "Hello  World"  # Leading/trailing stripped, internal preserved
    
    def test_special_characters(self):
        """Test that special characters are properly escaped."""
        text = "Hello & World < 5 > 3"
        result = sanitize_text(text)
        assert "&amp;" in result
        assert "&lt;" in result
        assert "&gt;" in result
    
    def test_template_placeholder_validation(self):
        """Test that template placeholders are properly validated."""
        template = PromptTemplate(
            template="Hello {name}.",
            placeholders={"name": "User's name"}
        )
        
        # Test with extra data (should be ignored)
        result = template.render(name="John", extra="data")
        assert result == "Hello John."
        
        # Test with missing data (should raise error)
        with pytest.raises(ValueError):
            template.render(extra="data")

if __name__ == "__main__":
    pytest.main([__file__]) 
