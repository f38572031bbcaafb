"""
Email document assembler.

Renders every block of an email document in order and wraps the result
in the outer table structure. Preview mode returns the body fragment only;
export mode returns a standalone XHTML document with MSO conditionals,
client resets and responsive/dark-mode media queries.

Rendering is deterministic: identical inputs give byte-identical output.
"""

import html
import logging
import re
from typing import Optional

from ..models.schemas import BrandKit, DesignTokens, EmailDocument, RenderOptions
from .blocks import inline_style, render_block
from .tokens import dark_mode_tokens, resolve_tokens

logger = logging.getLogger(__name__)

MOBILE_BREAKPOINT_MARGIN = 20
PREHEADER_FILLER = "&nbsp;&zwnj;"
PREHEADER_FILLER_REPEAT = 50

XHTML_DOCTYPE = (
    '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN" '
    '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-transitional.dtd">'
)


def render_preheader(preheader: str) -> str:
    """Hidden inbox-preview text, padded so clients don't pull in body copy."""
    if not preheader:
        return ""
    return f"""
<div style="display: none; max-height: 0; overflow: hidden; mso-hide: all;">
  {preheader}
  {PREHEADER_FILLER * PREHEADER_FILLER_REPEAT}
</div>
"""


def resolve_render_tokens(doc: EmailDocument, brand_kit: BrandKit, dark_mode: bool = False) -> DesignTokens:
    """Tokens for a render call; either flag forces the dark palette."""
    tokens = resolve_tokens(brand_kit)
    if dark_mode or doc.theme == "dark":
        tokens = dark_mode_tokens(tokens)
    return tokens


def _inner_table_style(tokens: DesignTokens, content_width: int, for_preview: bool) -> str:
    width = f"{content_width}px"
    if for_preview:
        # Pinned width so backgrounds span the configured preview width
        return inline_style({
            "background-color": tokens.surface,
            "width": width,
            "min-width": width,
        })
    return inline_style({
        "background-color": tokens.surface,
        "max-width": width,
        "width": "100%",
    })


def render_body(doc: EmailDocument, tokens: DesignTokens, options: RenderOptions) -> str:
    """Preheader plus the outer full-bleed table holding all rendered blocks."""
    fragments = []
    for block in doc.blocks:
        fragment = render_block(block, tokens)
        if options.include_comments:
            fragment = f"\n<!-- Block: {block.type} ({block.id}) -->\n{fragment}"
        fragments.append(fragment)
    blocks_html = "\n".join(fragments)

    content_width = doc.content_width

    return f"""
{render_preheader(doc.preheader)}
<!-- Email Container -->
<table width="100%" cellpadding="0" cellspacing="0" border="0" style="{inline_style({"background-color": tokens.background})}">
  <tr>
    <td align="center" style="{inline_style({"padding": "20px 10px"})}">
      <!-- Email Content -->
      <table width="{content_width}" cellpadding="0" cellspacing="0" border="0" style="{_inner_table_style(tokens, content_width, options.for_preview)}">
        {blocks_html}
      </table>
    </td>
  </tr>
</table>
"""


def _wrap_document(doc: EmailDocument, tokens: DesignTokens, body: str) -> str:
    content_width = doc.content_width
    breakpoint = content_width + MOBILE_BREAKPOINT_MARGIN
    title = f"<title>{html.escape(doc.subject, quote=False)}</title>" if doc.subject else ""

    return f"""{XHTML_DOCTYPE}
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:v="urn:schemas-microsoft-com:vml" xmlns:o="urn:schemas-microsoft-com:office:office">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <meta http-equiv="X-UA-Compatible" content="IE=edge">
  <meta name="x-apple-disable-message-reformatting">
  <meta name="format-detection" content="telephone=no, date=no, address=no, email=no">
  {title}
  <!--[if mso]>
  <noscript>
    <xml>
      <o:OfficeDocumentSettings>
        <o:PixelsPerInch>96</o:PixelsPerInch>
      </o:OfficeDocumentSettings>
    </xml>
  </noscript>
  <![endif]-->
  <style type="text/css">
    /* Reset styles */
    body, table, td, p, a {{ -webkit-text-size-adjust: 100%; -ms-text-size-adjust: 100%; }}
    table, td {{ mso-table-lspace: 0pt; mso-table-rspace: 0pt; }}
    img {{ -ms-interpolation-mode: bicubic; border: 0; height: auto; line-height: 100%; outline: none; text-decoration: none; }}
    body {{ height: 100% !important; margin: 0 !important; padding: 0 !important; width: 100% !important; }}
    a[x-apple-data-detectors] {{ color: inherit !important; text-decoration: none !important; font-size: inherit !important; font-family: inherit !important; font-weight: inherit !important; line-height: inherit !important; }}

    /* Mobile styles */
    @media only screen and (max-width: {breakpoint}px) {{
      .email-container {{ width: 100% !important; max-width: 100% !important; }}
      .responsive-table {{ width: 100% !important; }}
      .mobile-padding {{ padding-left: 15px !important; padding-right: 15px !important; }}
      .mobile-stack {{ display: block !important; width: 100% !important; }}
    }}

    /* Dark mode styles (best effort) */
    @media (prefers-color-scheme: dark) {{
      .dark-mode-bg {{ background-color: #1a1a1a !important; }}
      .dark-mode-text {{ color: #ffffff !important; }}
    }}

    [data-ogsc] .dark-mode-bg {{ background-color: #1a1a1a !important; }}
    [data-ogsc] .dark-mode-text {{ color: #ffffff !important; }}
    [data-ogsb] .dark-mode-bg {{ background-color: #1a1a1a !important; }}
  </style>
</head>
<body style="margin: 0; padding: 0; background-color: {tokens.background};">
{body}
</body>
</html>"""


def render_email(
    doc: EmailDocument,
    brand_kit: BrandKit,
    options: Optional[RenderOptions] = None,
) -> str:
    """
    Render an email document to HTML.

    Args:
        doc: Email document with its ordered blocks
        brand_kit: Brand kit providing colors and typography
        options: Preview/dark-mode/debug-comment/minify flags

    Returns:
        Body fragment when ``options.for_preview``, else a full HTML document
    """
    options = options or RenderOptions()
    tokens = resolve_render_tokens(doc, brand_kit, options.dark_mode)
    body = render_body(doc, tokens, options)
    logger.debug(f"Rendered {len(doc.blocks)} blocks for email {doc.id} (preview={options.for_preview})")

    output = body if options.for_preview else _wrap_document(doc, tokens, body)
    if options.minify:
        output = minify_html(output)
    return output


def minify_html(html_text: str) -> str:
    """
    Collapse whitespace between and around tags.

    Purely textual: content relying on significant whitespace (e.g. <pre>)
    is collapsed too.
    """
    text = re.sub(r"\n\s*", "", html_text)
    text = re.sub(r">\s+<", "><", text)
    text = re.sub(r"\s{2,}", " ", text)
    return text.strip()


def dark_mode_preview_css() -> str:
    """Approximation of Gmail / Outlook.com dark-mode rewriting, for debug views."""
    return """
/* Gmail Dark Mode Approximation */
[data-ogsc] .email-body {
  background-color: #1a1a1a !important;
}

[data-ogsc] .email-content {
  background-color: #2d2d2d !important;
}

[data-ogsc] .text-primary {
  color: #ffffff !important;
}

[data-ogsc] .text-muted {
  color: #a0a0a0 !important;
}

/* Outlook.com Dark Mode */
[data-ogsb] .email-body {
  background-color: #1a1a1a !important;
}
"""
