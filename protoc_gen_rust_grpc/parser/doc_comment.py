"""Translate proto comments into rustdoc comments."""

from __future__ import annotations

# Markdown and rustdoc characters that must be escaped. The backslash is
# handled separately and always first.
_RUSTDOC_SPECIAL = ("`", "*", "_", "[", "]", "#", "<", ">")


def sanitize_for_rustdoc(line: str) -> str:
    """Escape characters that rustdoc would read as markdown or intra-doc links.

    Examples:
        a_b -> a\\_b
        Vec<u8> -> Vec\\<u8\\>
        C:\\path -> C:\\\\path
    """
    sanitized = line.replace("\\", "\\\\")
    for ch in _RUSTDOC_SPECIAL:
        sanitized = sanitized.replace(ch, "\\" + ch)
    return sanitized


def _split_lines(text: str) -> list[str]:
    """Split on "\\n" only; a single terminating line break opens no new line."""
    if not text:
        return []
    lines = text.replace("\r\n", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def to_doc_comment(text: str, indent: str = "") -> str:
    """Convert a comment into a block of rustdoc lines, each ending in a newline.

    Blank lines are kept as bare ``///`` so paragraph breaks survive. Every
    line is prefixed with ``indent``.

    "a\\n\\nb" -> "/// a\\n///\\n/// b\\n"
    "" -> ""
    """
    block = []
    for line in _split_lines(text):
        if line:
            block.append(f"{indent}/// {sanitize_for_rustdoc(line)}\n")
        else:
            block.append(f"{indent}///\n")
    return "".join(block)
