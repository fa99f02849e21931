"""Helpers for building HTML snippets rendered through st.markdown."""
import html
from textwrap import dedent


def html_block(template: str) -> str:
    """
    Flatten multi-line HTML so Streamlit renders it instead of a code block.

    Markdown treats lines indented by four or more spaces as code, so every
    line is left-stripped after dedenting.
    """
    lines = dedent(template).splitlines()
    return "\n".join(line.lstrip() for line in lines).strip()


def pill(label: str, background: str) -> str:
    """Rounded uppercase label, used for registration type badges."""
    return html_block(f"""
        <span style="display: inline-block; padding: 4px 14px; border-radius: 999px;
                     background: {background}; color: white; font-weight: 700;
                     text-transform: uppercase; letter-spacing: 0.05em; font-size: 0.8rem;">
            {html.escape(label)}
        </span>
    """)
