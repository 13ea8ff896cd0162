"""Prompt Builder - Chat messages sent to the model for one diff."""

from aicommit import COMMIT_TYPE_NAMES

SYSTEM_PROMPT = (
    "You are a git commit message generator. Reply with the commit message "
    "line and nothing else: no explanation, no description, no bullet points, "
    "no markdown, no preamble."
)

_USER_TEMPLATE = """\
Write a single git commit message for the diff below using the conventional commits format ({types}, etc).

Rules:
- Output ONLY the commit message, nothing else
- One line, no period at the end
- No explanation, no bullet points, no numbering
- Example output: feat: add user authentication

<diff>
{diff}
</diff>"""


def user_prompt(diff: str) -> str:
    """User instruction with the diff wrapped in a <diff> block."""
    return _USER_TEMPLATE.format(types=', '.join(COMMIT_TYPE_NAMES), diff=diff)


def build_messages(diff: str) -> list[dict[str, str]]:
    """System instruction followed by the user instruction, in chat order."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt(diff)},
    ]
