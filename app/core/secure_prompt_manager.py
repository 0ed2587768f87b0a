"""
Secure Prompt Manager Module

This module provides a secure way to manage AI prompts by isolating them from user data
to prevent injection attacks. It implements a template-based system with explicit
placeholders and sanitization of everything a user could have typed (transcripts,
questions, company names).

The module contains:
- PromptTemplate: A dataclass for secure prompt templates with placeholders
- SecurePromptManager: Holds the interview evaluation prompt templates
- sanitize_text: Utility function for text sanitization

Dependencies:
- dataclasses: For template data structures
- typing: For type hints
- re: For regex-based sanitization
- html: For HTML entity encoding
"""

from typing import Dict, Optional
from dataclasses import dataclass
import re
import html
import logging

logger = logging.getLogger(__name__)

def sanitize_text(text: str, max_length: Optional[int] = 1000, escape_html: bool = True) -> str:
    """
    Sanitize text input to prevent injection attacks and ensure data safety.

    This function performs multiple sanitization steps:
    1. Optional HTML entity encoding to prevent XSS
    2. Strips leading/trailing whitespace
    3. Removes null bytes and other control characters
    4. Configurable length limiting to prevent DoS attacks
    5. Normalizes unicode characters

    Args:
        text (str): The text to sanitize
        max_length (Optional[int]): Maximum allowed length (default: 1000);
            None keeps the text whole
        escape_html (bool): Whether to HTML escape the text (default: True)

    Returns:
        str: The sanitized text

    Raises:
        ValueError: If text is None or empty after sanitization
    """
    if text is None:
        raise ValueError("Text cannot be None")

    # Convert to string if not already
    text = str(text)

    # Optional HTML entity encoding to prevent XSS
    if escape_html:
        text = html.escape(text)

    # Strip leading/trailing whitespace
    text = text.strip()

    # Remove null bytes and other control characters (except newlines and tabs)
    text = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', text)

    # Configurable length limiting to prevent DoS attacks
    if max_length is not None and len(text) > max_length:
        text = text[:max_length]
        logger.warning(f"Text truncated to {max_length} characters for security")

    # Normalize unicode characters
    text = text.encode('utf-8', errors='ignore').decode('utf-8')

    # Check if text is empty after sanitization
    if not text:
        raise ValueError("Text cannot be empty after sanitization")

    return text

@dataclass
class PromptTemplate:
    """Secure prompt template with placeholders for safe data injection.

    sanitization_config holds per-placeholder options:
    - max_length (int or None): truncation limit, default 1000; None never truncates
    - escape_html (bool): HTML-escape the value, default True
    - raw (bool): insert the value untouched; only for text the service
      generated itself, such as rubric sections
    """
    template: str
    placeholders: Dict[str, str]
    sanitization_config: Optional[Dict[str, Dict]] = None

    def render(self, **kwargs) -> str:
        """
        Safely render the template with provided data.

        Args:
            **kwargs: Data to inject into placeholders

        Returns:
            str: Rendered prompt with sanitized data

        Raises:
            ValueError: If required placeholders are missing or data is invalid
        """
        missing_placeholders = set(self.placeholders.keys()) - set(kwargs.keys())
        if missing_placeholders:
            raise ValueError(f"Missing required placeholders: {missing_placeholders}")

        sanitized_data = {}
        for key, value in kwargs.items():
            if key not in self.placeholders:
                # Skip unknown keys to prevent injection
                logger.warning(f"Unknown placeholder key: {key}")
                continue

            config = self.sanitization_config.get(key, {}) if self.sanitization_config else {}
            if config.get('raw', False):
                sanitized_data[key] = str(value)
                continue

            sanitized_data[key] = sanitize_text(
                str(value),
                max_length=config.get('max_length', 1000),
                escape_html=config.get('escape_html', True),
            )

        try:
            return self.template.format(**sanitized_data)
        except KeyError as e:
            raise ValueError(f"Template rendering error: {e}") from e

# Transcripts are read by a model, not a browser, and are never cut short
_TRANSCRIPT_CONFIG = {"max_length": None, "escape_html": False}
_USER_TEXT_CONFIG = {"max_length": 2000, "escape_html": False}
_RAW = {"raw": True}

class SecurePromptManager:
    """
    Secure prompt manager that isolates prompts from user data to prevent injection attacks.

    Holds one template per interview mode. Transcript text and other user
    supplied values are sanitized on render; rubric sections built by the
    service are passed through raw.
    """

    def __init__(self):
        self._templates = self._initialize_templates()

    def _initialize_templates(self) -> Dict[str, PromptTemplate]:
        """Initialize secure prompt templates with explicit placeholders."""
        return {
            "full_interview_evaluation": PromptTemplate(
                template="""You are a critical, nuanced, and action-oriented product management career coach evaluating a mock behavioral interview performance.

## Your Role
You are evaluating this candidate as if you were a senior PM interviewer at a top tech company. Be honest, constructive, and calibrated. Your feedback should help the candidate improve for real interviews.

## N+STAR+TL Framework

This is an elevated version of the traditional STAR method, optimized for product management interviews. The best PM candidates naturally structure their answers this way:

**N - Nugget**: The summary or punchline of the story. A quick, one-sentence overview that hooks the interviewer's attention and sets expectations for what's to come.

**S - Situation**: The context or circumstances of the story. Provides enough detail for the interviewer to understand what was going on, but remains concise. Sets the stage without over-explaining.

**T - Task**: The candidate's specific role or responsibility in the situation. What were they expected to accomplish? This clarifies ownership and scope.

**A - Action**: The specific actions the candidate took to address the task or problem. Must be specific and focus on what THEY did (not the team or manager). This is where individual contribution shines.

**R - Result**: The outcomes of the actions taken. Should be quantified with concrete numbers, percentages, or metrics whenever possible. Connects actions directly to business/user impact.

**T - Takeaway**: What the candidate learned or what insights they gained from the situation. Demonstrates self-awareness and a reflective mindset.

**L - Learning**: How they applied (or plan to apply) what they learned to future tasks or challenges. Shows growth mindset, adaptability, and continuous improvement.

## Scoring Scale

**Per-Skill Scores** (1-4, half points like 2.5 or 3.5 allowed):
- **4 - Very Strong**: Candidate demonstrated exceptional experience with this skill
- **3 - Strong**: Candidate demonstrated decent experience with this skill
- **2 - Weak**: Candidate demonstrated sub-par experience with this skill
- **1 - Very Weak**: Candidate demonstrated a complete lack of this skill

**Overall Verdicts**:
- **Strong Hire**: One of the strongest candidates I've seen, we need them
- **Hire**: I think this candidate would have an impact on our team
- **No Hire**: I am not confident this candidate will have a positive impact
- **Strong No Hire**: I am confident this candidate will not perform well

## Skills to Evaluate ({skill_count} Total)

You MUST evaluate ALL {skill_count} skills in the exact order below. For EACH skill, provide:
1. A score (1-4, half points allowed)
2. A detailed explanation of why you gave that score
3. 1-3 direct quotes from the candidate that support your assessment

{skills_section}

## Interview Transcript to Evaluate

{transcript}

## Instructions

1. Evaluate each of the {skill_count} skills in the exact order listed above
2. For each skill, provide:
   - The skill name (exactly as written above)
   - A score from 1-4 (half points allowed: 1.5, 2.5, 3.5)
   - A detailed explanation referencing specific parts of the interview
   - 1-3 direct quotes from the candidate (the CANDIDATE messages) that support your assessment
3. Provide an overall verdict (Strong No Hire, No Hire, Hire, or Strong Hire)
4. Write a comprehensive overall explanation (2-3 paragraphs) summarizing the candidate's performance
5. List 3-7 specific, actionable improvements the candidate should work on

Be rigorous but fair. Ground all feedback in specific evidence from the transcript.""",
                placeholders={
                    "skill_count": "Number of skills to evaluate",
                    "skills_section": "Rendered rubric for every skill",
                    "transcript": "Interview transcript to evaluate",
                },
                sanitization_config={
                    "skill_count": _RAW,
                    "skills_section": _RAW,
                    "transcript": _TRANSCRIPT_CONFIG,
                },
            ),
            "quick_question_evaluation": PromptTemplate(
                template="""You are a product management career coach evaluating a candidate's response to a PM interview question.

## The Question Asked
Category: {category}
Question: "{question}"

## Your Role
Evaluate this answer as if you were a senior PM interviewer at a top tech company. Be honest, constructive, and helpful. This is practice - your feedback should help them improve.

{category_guidance}

## Scoring Scale (1-4, half points allowed)
- **4 - Very Strong**: Exceptional demonstration of this skill
- **3 - Strong**: Good demonstration of this skill
- **2 - Weak**: Sub-par demonstration of this skill
- **1 - Very Weak**: Did not demonstrate this skill

## Skills to Evaluate ({skill_count} Total)

Evaluate these {skill_count} skills in order:

{skills_section}

## Transcript to Evaluate

{transcript}

## Overall Verdict Scale
- **Strong**: Excellent answer - would stand out in a real interview
- **Good**: Solid answer - would meet expectations
- **Needs Work**: Has potential but needs improvement
- **Weak**: Significant gaps - needs substantial practice

## Instructions

1. Evaluate each of the {skill_count} skills in the exact order listed above
2. For each skill, provide:
   - The skill name (exactly as written)
   - A score from 1-4 (half points allowed)
   - A 2-3 sentence explanation
   - 1-2 direct quotes from the candidate
3. Provide an overall verdict (Strong, Good, Needs Work, or Weak)
4. Write a brief overall explanation (1 paragraph) summarizing their answer
5. List 2-4 specific, actionable improvements

Be constructive but honest. This is practice - help them improve.""",
                placeholders={
                    "category": "Question category",
                    "question": "The practiced question",
                    "category_guidance": "Framework guidance for the category",
                    "skill_count": "Number of skills to evaluate",
                    "skills_section": "Rendered rubric for every skill",
                    "transcript": "Interview transcript to evaluate",
                },
                sanitization_config={
                    "category": _USER_TEXT_CONFIG,
                    "question": _USER_TEXT_CONFIG,
                    "category_guidance": _RAW,
                    "skill_count": _RAW,
                    "skills_section": _RAW,
                    "transcript": _TRANSCRIPT_CONFIG,
                },
            ),
            "job_specific_evaluation": PromptTemplate(
                template="""You are a senior product management interviewer evaluating a candidate's performance in a mock interview for the {job_title} role at {company_name}.

## Interview Context
- **Company**: {company_name}
- **Role**: {job_title}
{description_line}
## Questions Asked in This Interview
{questions_asked}

## Your Role
Evaluate this candidate as if you were a hiring manager at {company_name}. Consider both their general PM skills AND their specific fit for this company and role. Be honest, constructive, and calibrated.

## Scoring Scale (1-4, half points allowed)
- **4 - Very Strong**: Exceptional demonstration - would stand out at {company_name}
- **3 - Strong**: Solid demonstration - meets expectations for the {job_title} role
- **2 - Weak**: Below expectations - has gaps to address
- **1 - Very Weak**: Significant concerns - not ready for this role

## Skills to Evaluate ({skill_count} Total)

{skills_section}

## Interview Transcript to Evaluate

{transcript}

## Overall Verdict Scale
- **Strong Hire**: Exceptional candidate for the {job_title} role at {company_name} - would make an immediate impact
- **Hire**: Good candidate - would succeed as {job_title} at {company_name}
- **No Hire**: Not confident this candidate would succeed at {company_name}
- **Strong No Hire**: Clear gaps that would prevent success in this role

## Instructions

1. Evaluate ALL {skill_count} skills in the exact order listed above
2. For each skill, provide:
   - The skill name (exactly as written)
   - A score from 1-4 (half points allowed)
   - A detailed explanation referencing specific parts of the interview
   - 1-3 direct quotes from the candidate (CANDIDATE messages) that support your assessment
3. Provide an overall verdict for this candidate at {company_name}
4. Write an overall explanation (2 paragraphs) summarizing their performance and fit
5. List 2-5 specific improvements they should work on for {company_name} interviews
6. Provide a company fit assessment (1 paragraph) specifically addressing how well they would fit at {company_name}

Be rigorous but fair. Ground all feedback in specific evidence from the transcript.""",
                placeholders={
                    "company_name": "Company the interview targets",
                    "job_title": "Role the interview targets",
                    "description_line": "Optional job description snippet line",
                    "questions_asked": "Numbered list of generated questions",
                    "skill_count": "Number of skills to evaluate",
                    "skills_section": "Rendered rubric for every skill",
                    "transcript": "Interview transcript to evaluate",
                },
                sanitization_config={
                    "company_name": _USER_TEXT_CONFIG,
                    "job_title": _USER_TEXT_CONFIG,
                    # Built from sanitized parts by the caller; may be empty
                    "description_line": _RAW,
                    "questions_asked": _RAW,
                    "skill_count": _RAW,
                    "skills_section": _RAW,
                    "transcript": _TRANSCRIPT_CONFIG,
                },
            ),
        }

    def get_template(self, name: str) -> PromptTemplate:
        """
        Get a prompt template by name.

        Raises:
            KeyError: If no template has that name
        """
        return self._templates[name]

    def render(self, name: str, **kwargs) -> str:
        """Render the named template with sanitized data."""
        return self.get_template(name).render(**kwargs)


# Global instance for reuse across the application
secure_prompt_manager = SecurePromptManager()
