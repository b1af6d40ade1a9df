"""Browser automation modules (Playwright).

``session`` owns the browser/context/page lifecycle, ``navigation`` wraps
page loads with a wait-strategy fallback, and ``capture`` runs the
search-scroll-screenshot sequence for a single term.
"""
