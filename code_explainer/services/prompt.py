"""Prompt template for code explanations.

The three labeled sections are an instruction to the model only. Nothing
downstream parses or validates them.
"""

from __future__ import annotations

from code_explainer.models.schemas import DEFAULT_LANGUAGE_LABEL

SECTION_MARKERS: tuple[str, ...] = (
    "**EXPLANATION:**",
    "**SUGGESTIONS:**",
    "**REFACTORED CODE:**",
)

_TEMPLATE = """
You are an expert {lang} software engineer.
Analyze the following {lang} code and provide a structured response with three sections:

1. **Explanation**: Explain line by line in simple terms.
2. **Suggestions**: List bugs, inefficiencies, and possible improvements or refactorings.
3. **Refactored Code**: Provide an improved, cleaner version of the code if needed.

Return output in this exact format:

**EXPLANATION:**
<your explanation>

**SUGGESTIONS:**
<your suggestions>

**REFACTORED CODE:**
<your refactored code inside a code block>

Code:
```{lang}
{code}
```
"""


def language_label(language: str | None) -> str:
    if language is None or not language.strip():
        return DEFAULT_LANGUAGE_LABEL
    return language.strip()


def build_prompt(code: str, language: str | None) -> str:
    # str.format does not re-scan substituted values, so braces in code are safe
    return _TEMPLATE.format(lang=language_label(language), code=code)
