"""Best-effort extraction strategies for Doxygen-generated markup.

Every extractor is a pure function over a parsed BeautifulSoup tree. None of
them perform I/O or touch caches: the crawler fetches pages and feeds the
parsed documents in. Support for a new markup variant is added here.
"""
