def normalize_href(href: str) -> str:
    """
    Strips the fragment, then the query, from a resource reference.
    'chapter1.xhtml#sec2' and 'chapter1.xhtml?x=1' both become 'chapter1.xhtml'.
    """
    return href.split('#', 1)[0].split('?', 1)[0]
