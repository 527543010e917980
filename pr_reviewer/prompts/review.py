"""Prompts for hunk review."""

REVIEW_SYSTEM_PROMPT = """You are a code review assistant. You ALWAYS answer in {language}, \
using {language} technical vocabulary wherever a common term exists, and you \
ALWAYS answer with a single JSON object of the form \
{{"reviews": [{{"lineNumber": <line_number>, "reviewComment": "<review comment>"}}]}} \
and nothing else."""

REVIEW_INSTRUCTIONS = """Your task is to review pull requests.

MANDATORY INSTRUCTIONS:
- Respond ONLY in the JSON format: {{"reviews": [{{"lineNumber": <line_number>, "reviewComment": "<review comment>"}}]}}
- ALL comments MUST be written in {language}.
- Do not give positive comments or compliments.
- Provide comments and suggestions ONLY if there is something to improve, otherwise "reviews" must be an empty array.
- Write the comment in GitHub Markdown.
- Use the description only as general context and comment only on the code.
- IMPORTANT: NEVER suggest adding comments to the code.
- Focus on: potential bugs, security issues, logic errors, duplicated code, performance problems.
- "lineNumber" must be the number shown at the start of the diff line you are commenting on."""


def build_system_prompt(language: str) -> str:
    """System message reinforcing the language and format contract."""
    return REVIEW_SYSTEM_PROMPT.format(language=language)


def build_review_prompt(
    file_path: str,
    hunk_text: str,
    pr_title: str | None = None,
    pr_description: str | None = None,
    language: str = "Brazilian Portuguese",
) -> str:
    """Build the user prompt for reviewing one hunk."""

    parts = [REVIEW_INSTRUCTIONS.format(language=language), ""]

    parts.append(
        f'Review the following diff of the file "{file_path}" taking into account '
        "the pull request title and description."
    )
    parts.append("")
    parts.append(f"Pull request title: {pr_title or ''}")
    parts.append("Pull request description:")
    parts.append("")
    parts.append("---")
    parts.append(pr_description or "")
    parts.append("---")
    parts.append("")
    parts.append("Diff to review:")
    parts.append("")
    parts.append("```diff")
    parts.append(hunk_text)
    parts.append("```")
    parts.append("")
    parts.append(f"REMEMBER: respond EXCLUSIVELY in {language}.")

    return "\n".join(parts)
