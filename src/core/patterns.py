"""
Matcher template compilation.

Templates are literal text with two placeholders: %s captures a minimal run
of characters within one line and %d captures one or more digits. %% is a
literal percent.
"""

import re

PLACEHOLDER_PATTERN = re.compile(r"%(.?)")
PLACEHOLDER_GROUPS = {"s": "(.+?)", "d": r"(\d+)"}

# Matches nothing, not even the empty string.
NEVER_MATCHES = re.compile(r"(?!)")


def placeholder_kinds(template) -> tuple[str, ...]:
    """
    Return placeholder kinds in template order, e.g. ("s", "d").

    Returns an empty tuple for malformed templates.
    """
    if not isinstance(template, str):
        return ()
    kinds = []
    for match in PLACEHOLDER_PATTERN.finditer(template):
        kind = match.group(1)
        if kind in PLACEHOLDER_GROUPS:
            kinds.append(kind)
        elif kind != "%":
            return ()
    return tuple(kinds)


def compile_pattern(template) -> re.Pattern:
    """
    Compile a matcher template into an anchored regular expression.

    Never raises: empty, non-string or malformed templates (a stray '%')
    compile to NEVER_MATCHES so one bad rule can't block the run.
    """
    if not isinstance(template, str) or not template.strip():
        print(f"Warning: empty matcher template {template!r}, rule will never match")
        return NEVER_MATCHES

    parts = []
    position = 0
    for match in PLACEHOLDER_PATTERN.finditer(template):
        kind = match.group(1)
        parts.append(re.escape(template[position:match.start()]))
        if kind in PLACEHOLDER_GROUPS:
            parts.append(PLACEHOLDER_GROUPS[kind])
        elif kind == "%":
            parts.append(re.escape("%"))
        else:
            print(
                f"Warning: malformed placeholder in matcher template {template!r}, rule will never match "
                "(use %% for a literal percent sign)"
            )
            return NEVER_MATCHES
        position = match.end()
    parts.append(re.escape(template[position:]))

    try:
        return re.compile(r"\A" + "".join(parts) + r"\Z")
    except re.error as e:
        print(f"Warning: could not compile matcher template {template!r}: {e}")
        return NEVER_MATCHES
