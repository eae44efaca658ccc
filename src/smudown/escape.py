"""HTML escaping primitives.

``html_escape`` is used wherever text is emitted without being re-parsed:
code spans, code fences, image alt and link title attributes, and the
bare text of autolinks.
"""

import html


def html_escape(s: str) -> str:
    """Escape HTML special characters.

    Escapes exactly ``&``, ``<``, ``>`` and ``"``. Single quotes and every
    other character pass through unchanged (Python's html.escape() would
    turn ' into &#x27;).
    """
    return html.escape(s, quote=False).replace('"', "&quot;")


def char_refs(s: str) -> str:
    """Encode every character as a decimal numeric character reference.

    Used to obfuscate email autolinks:

        >>> char_refs("a@b")
        '&#97;&#64;&#98;'
    """
    return "".join(f"&#{ord(c)};" for c in s)


__all__ = ["char_refs", "html_escape"]
