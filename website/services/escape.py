from markupsafe import escape as _markup_escape


def escape(text: object) -> str:
    """HTML-escape *text* for interpolation into markup or attributes.

    Returns a plain ``str``, so escaping an already escaped value encodes it
    again. Escape once per interpolation point.
    """
    return str(_markup_escape(str(text)))
