"""
common/layout.py

Shared header frame for portal pages.

Embeds its own CSS inside the st.markdown() call to draw a thin header
bar: portal name and page title on the left, owner / updated / source on
the right. No external stylesheet is needed.
"""

from typing import Callable, Optional

import streamlit as st

from config import PORTAL_TITLE

HEADER_CSS = """
<style>
    div.block-container {
        padding-top: 1.8rem !important;
    }

    .portal-header {
        display: flex;
        justify-content: space-between;
        align-items: center;
        padding: 0.3rem 1.25rem;
        background-image: linear-gradient(90deg, #0F172A, #1D4ED8);
        border-radius: 10px;
        box-shadow: 0 4px 12px rgba(0, 0, 0, 0.1);
        margin-bottom: 1.5rem;
    }

    .header-left {
        display: flex;
        align-items: center;
        gap: 0.75rem;
        color: white;
    }
    .header-left h2 {
        font-size: 1.1rem;
        font-weight: 500;
        margin: 0;
        padding: 0;
        line-height: 1;
        color: white;
    }
    .source-badge, .coming-soon-badge {
        padding: 0.2rem 0.5rem;
        border-radius: 4px;
        font-size: 0.7rem;
        font-weight: 700;
        line-height: 1.0;
    }
    .source-badge {
        font-family: 'Consolas', 'Menlo', 'monospace';
        background-color: rgba(255, 255, 255, 0.15);
        color: white;
    }
    .coming-soon-badge {
        background-color: #FFC107;
        color: #333;
    }

    .header-right {
        display: flex;
        flex-direction: row;
        align-items: center;
        gap: 1.25rem;
        font-size: 0.8rem;
        color: #eee;
    }
    .meta-item {
        line-height: 1;
        white-space: nowrap;
    }
    .meta-item strong {
        font-weight: 600;
        color: #aaa;
    }
</style>
"""


def render_frame(
    title_override: str,
    body_component: Optional[Callable],
    last_updated: str,
    owner: str,
    data_source: str,
    coming_soon: bool = False,
) -> None:
    """
    Render the header strip for the current page, then the page body.

    `body_component` is the page's render_body (takes no arguments; the
    page already holds its service).
    """
    coming_soon_tag = '<span class="coming-soon-badge">⚠ Coming Soon</span>' if coming_soon else ""

    header_html = f"""
<div class="portal-header">
<div class="header-left">
<h2>🚁 {PORTAL_TITLE} · {title_override}</h2>
<span class="source-badge">{data_source}</span>
{coming_soon_tag}
</div>
<div class="header-right">
<div class="meta-item">
    <strong>Owner:</strong> {owner}
</div>
<div class="meta-item">
    <strong>Updated:</strong> {last_updated}
</div>
</div>
</div>
"""

    st.markdown(HEADER_CSS, unsafe_allow_html=True)
    st.markdown(header_html, unsafe_allow_html=True)

    if coming_soon:
        st.info(
            "This page has been reserved in the portal, "
            "but the underlying view is still being built."
        )
        st.stop()

    elif body_component:
        body_component()

    else:
        st.error(
            f"**Page Rendering Error:** The page '{title_override}' is not marked "
            "'Coming Soon' but did not provide a valid body component to render."
        )
        st.stop()
