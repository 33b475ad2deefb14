import html


def decode(raw: str) -> str:
    """
    Turns HTML entities (&quot; &#039; &amp; &#x27; ...) into the characters
    they stand for. Anything that is not a valid entity is left as it is.
    """
    return html.unescape(raw)
