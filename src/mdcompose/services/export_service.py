"""
MD Compose - Prompt Export

Combines the editor text, attached files and the caller's role, rule and
output texts into one Markdown document for the clipboard.
"""

from mdcompose.services.editor_state import EditorSnapshot
from mdcompose.services.file_record import FileRecord


def _fence_for(content: str) -> str:
    """Pick a backtick fence longer than any run inside ``content``."""
    longest = run = 0
    for char in content:
        run = run + 1 if char == "`" else 0
        longest = max(longest, run)
    return "`" * max(3, longest + 1)


def render_file(record: FileRecord) -> str:
    """Render one file as a heading plus fenced block."""
    fence = _fence_for(record.content)
    body = record.content if record.content.endswith("\n") else record.content + "\n"
    return f"## {record.path}\n\n{fence}{record.extension}\n{body}{fence}"


def build_prompt(
    snapshot: EditorSnapshot,
    role: str = "",
    rule: str = "",
    output: str = "",
) -> str:
    """Build the combined document, skipping empty sections."""
    sections: list[tuple[str, str]] = [
        ("Role", role.strip()),
        ("Rules", rule.strip()),
        ("Task", snapshot.content.strip()),
        ("Files", "\n\n".join(render_file(record) for record in snapshot.files)),
        ("Output", output.strip()),
    ]

    return "\n\n".join(f"# {title}\n\n{body}" for title, body in sections if body) + "\n"
