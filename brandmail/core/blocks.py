"""
Block renderers.

One pure function per block type. Each returns a self-contained
nested-table fragment with every style inlined, so the output survives
clients that strip <style> tags.
"""

import html
import logging
from typing import Any, Callable, Dict, Mapping

from ..models.schemas import (
    ButtonBlock,
    CardBlock,
    DesignTokens,
    DividerBlock,
    FooterBlock,
    HeaderBlock,
    HeroBlock,
    ImageBlock,
    SocialBlock,
    SpacerBlock,
    TextBlock,
)

logger = logging.getLogger(__name__)

WHITE = "#ffffff"
UNSUBSCRIBE_PLACEHOLDER = "{{unsubscribe_url}}"
UNSUBSCRIBE_LABEL = "Darse de baja"

SOCIAL_ICON_COLORS = {
    "facebook": "#1877F2",
    "twitter": "#1DA1F2",
    "instagram": "#E4405F",
    "linkedin": "#0A66C2",
    "youtube": "#FF0000",
}


def inline_style(declarations: Mapping[str, Any]) -> str:
    """
    Build a style attribute value from ordered CSS declarations.

    Declarations whose value is None or "" are dropped.

        >>> inline_style({"color": "#000", "padding": None, "margin": "0"})
        'color: #000; margin: 0'
    """
    return "; ".join(
        f"{prop}: {value}"
        for prop, value in declarations.items()
        if value is not None and value != ""
    )


def _attr(value: Any) -> str:
    return html.escape(str(value), quote=True)


def _table(inner: str, style: str = "", width: str = "100%") -> str:
    width_attr = f' width="{width}"' if width else ""
    style_attr = f' style="{style}"' if style else ""
    return f"""
<table{width_attr} cellpadding="0" cellspacing="0" border="0"{style_attr}>
  {inner}
</table>
"""


def render_header(block: HeaderBlock, tokens: DesignTokens) -> str:
    bg_color = block.background_color or tokens.background
    padding = block.padding or 20

    logo = ""
    if block.logo_url:
        logo = f"""
    <img src="{_attr(block.logo_url)}" alt="Logo" style="{inline_style({
        "max-width": "180px",
        "height": "auto",
        "display": "inline-block",
    })}" />"""

    tagline = ""
    if block.tagline:
        tagline = f"""
    <p style="{inline_style({
        "margin": "10px 0 0 0" if block.logo_url else "0",
        "font-family": tokens.font_stack,
        "font-size": "14px",
        "color": tokens.muted_text,
    })}">{block.tagline}</p>"""

    cell = f"""<tr>
    <td style="{inline_style({"padding": f"{padding}px", "text-align": block.alignment})}">{logo}{tagline}
    </td>
  </tr>"""
    return _table(cell, inline_style({"background-color": bg_color}))


def render_hero(block: HeroBlock, tokens: DesignTokens) -> str:
    bg_color = block.background_color or tokens.primary
    text_color = block.text_color or WHITE

    subtitle = ""
    if block.subtitle:
        subtitle = f"""
      <p style="{inline_style({
        "margin": "0",
        "font-family": tokens.font_stack,
        "font-size": "16px",
        "color": text_color,
        "opacity": "0.9",
        "line-height": "1.5",
    })}">{block.subtitle}</p>"""

    cell = f"""<tr>
    <td style="{inline_style({"padding": "40px 30px", "text-align": block.alignment})}">
      <h1 style="{inline_style({
        "margin": "0 0 10px 0",
        "font-family": tokens.font_stack,
        "font-size": "28px",
        "font-weight": "bold",
        "color": text_color,
        "line-height": "1.3",
    })}">{block.title}</h1>{subtitle}
    </td>
  </tr>"""
    return _table(cell, inline_style({"background-color": bg_color}))


def render_text(block: TextBlock, tokens: DesignTokens) -> str:
    cell = f"""<tr>
    <td style="{inline_style({
        "padding": "20px 30px",
        "font-family": tokens.font_stack,
        "font-size": "16px",
        "line-height": "1.6",
        "color": tokens.text,
        "text-align": block.alignment,
    })}">
      {block.content}
    </td>
  </tr>"""
    return _table(cell)


def render_image(block: ImageBlock, tokens: DesignTokens) -> str:
    width = block.width or 560
    img = f"""<img src="{_attr(block.src)}" alt="{_attr(block.alt)}" width="{width}" style="{inline_style({
        "max-width": "100%",
        "height": "auto",
        "display": "block",
        "border": "0",
    })}" />"""
    if block.link:
        img = f'<a href="{_attr(block.link)}" target="_blank">{img}</a>'

    cell = f"""<tr>
    <td style="{inline_style({"padding": "20px 30px", "text-align": block.alignment})}">
      {img}
    </td>
  </tr>"""
    return _table(cell)


def render_button(block: ButtonBlock, tokens: DesignTokens) -> str:
    """
    Bulletproof button: a VML roundrect for Outlook's Word engine wrapped
    around a regular styled anchor for every other client.
    """
    bg_color = block.background_color or tokens.primary
    text_color = block.text_color or WHITE
    border_radius = block.border_radius or 4
    button_width = "100%" if block.full_width else "auto"
    url = _attr(block.url)

    anchor_style = inline_style({
        "display": "inline-block",
        "width": button_width,
        "padding": "12px 30px",
        "font-family": tokens.font_stack,
        "font-size": "16px",
        "font-weight": "bold",
        "color": text_color,
        "background-color": bg_color,
        "text-decoration": "none",
        "text-align": "center",
        "border-radius": f"{border_radius}px",
        "mso-hide": "all",
    })

    cell = f"""<tr>
    <td style="{inline_style({"padding": "20px 30px", "text-align": block.alignment})}">
      <!--[if mso]>
      <v:roundrect xmlns:v="urn:schemas-microsoft-com:vml" xmlns:w="urn:schemas-microsoft-com:office:word" href="{url}" style="height:44px;v-text-anchor:middle;width:200px;" arcsize="10%" stroke="f" fillcolor="{_attr(bg_color)}">
        <w:anchorlock/>
        <center>
      <![endif]-->
      <a href="{url}" target="_blank" style="{anchor_style}">{block.text}</a>
      <!--[if mso]>
        </center>
      </v:roundrect>
      <![endif]-->
    </td>
  </tr>"""
    return _table(cell)


def render_divider(block: DividerBlock, tokens: DesignTokens) -> str:
    color = block.color or tokens.border
    thickness = block.thickness or 1

    cell = f"""<tr>
    <td style="{inline_style({"padding": "20px 30px"})}">
      <div style="{inline_style({"border-top": f"{thickness}px {block.style} {color}"})}"></div>
    </td>
  </tr>"""
    return _table(cell)


def render_spacer(block: SpacerBlock, tokens: DesignTokens) -> str:
    # 1px font-size/line-height keeps clients from inflating the empty cell
    cell = f"""<tr>
    <td style="{inline_style({
        "height": f"{block.height}px",
        "font-size": "1px",
        "line-height": "1px",
    })}">&nbsp;</td>
  </tr>"""
    return _table(cell)


def render_card(block: CardBlock, tokens: DesignTokens) -> str:
    bg_color = block.background_color or tokens.surface
    border_color = block.border_color or tokens.border

    image_row = ""
    if block.image_url:
        image_row = f"""
      <tr>
        <td>
          <img src="{_attr(block.image_url)}" alt="" width="100%" style="{inline_style({
            "display": "block",
            "width": "100%",
            "height": "auto",
            "border-radius": "8px 8px 0 0",
        })}" />
        </td>
      </tr>"""

    title = ""
    if block.title:
        title = f"""
          <h3 style="{inline_style({
            "margin": "0 0 10px 0",
            "font-family": tokens.font_stack,
            "font-size": "18px",
            "font-weight": "bold",
            "color": tokens.text,
        })}">{block.title}</h3>"""

    cta = ""
    if block.cta_text and block.cta_url:
        cta = f"""
          <p style="{inline_style({"margin": "15px 0 0 0"})}">
            <a href="{_attr(block.cta_url)}" style="{inline_style({
            "font-family": tokens.font_stack,
            "font-size": "14px",
            "font-weight": "bold",
            "color": tokens.primary,
            "text-decoration": "underline",
        })}">{block.cta_text}</a>
          </p>"""

    card = f"""{image_row}
      <tr>
        <td style="{inline_style({"padding": "20px"})}">{title}
          <p style="{inline_style({
            "margin": "0",
            "font-family": tokens.font_stack,
            "font-size": "14px",
            "line-height": "1.5",
            "color": tokens.muted_text,
        })}">{block.content}</p>{cta}
        </td>
      </tr>"""

    inner_table = _table(card, inline_style({
        "background-color": bg_color,
        "border": f"1px solid {border_color}",
        "border-radius": "8px",
    }))

    cell = f"""<tr>
    <td style="{inline_style({"padding": "20px 30px"})}">{inner_table}</td>
  </tr>"""
    return _table(cell)


def render_footer(block: FooterBlock, tokens: DesignTokens) -> str:
    bg_color = block.background_color or tokens.surface
    text_color = block.text_color or tokens.muted_text

    unsubscribe = ""
    if block.include_unsubscribe:
        # Placeholder is substituted by the sending platform
        unsubscribe = f"""
      <p style="{inline_style({
            "margin": "15px 0 0 0",
            "font-family": tokens.font_stack,
            "font-size": "12px",
            "color": text_color,
        })}">
        <a href="{UNSUBSCRIBE_PLACEHOLDER}" style="{inline_style({
            "color": text_color,
            "text-decoration": "underline",
        })}">{UNSUBSCRIBE_LABEL}</a>
      </p>"""

    cell = f"""<tr>
    <td style="{inline_style({"padding": "30px", "text-align": "center"})}">
      <p style="{inline_style({
        "margin": "0",
        "font-family": tokens.font_stack,
        "font-size": "12px",
        "line-height": "1.5",
        "color": text_color,
    })}">{block.content}</p>{unsubscribe}
    </td>
  </tr>"""
    return _table(cell, inline_style({"background-color": bg_color}))


def _social_icon(platform: str, url: str, icon_style: str, tokens: DesignTokens) -> str:
    if icon_style == "color":
        color = SOCIAL_ICON_COLORS.get(platform, tokens.muted_text)
    else:
        color = tokens.muted_text
    icon_src = f"https://placehold.co/32x32/{color.replace('#', '')}/fff?text={platform[:1].upper()}"

    return f"""
      <td style="{inline_style({"padding": "0 8px"})}">
        <a href="{_attr(url)}" target="_blank" style="{inline_style({
            "display": "inline-block",
            "width": "32px",
            "height": "32px",
            "background-color": color,
            "border-radius": "50%",
            "text-decoration": "none",
        })}">
          <img src="{_attr(icon_src)}" alt="{_attr(platform)}" width="32" height="32" style="{inline_style({
            "display": "block",
            "border-radius": "50%",
        })}" />
        </a>
      </td>"""


def render_social(block: SocialBlock, tokens: DesignTokens) -> str:
    icons = "".join(
        _social_icon(network.platform, network.url, block.icon_style, tokens)
        for network in block.networks
    )
    icon_row = _table(f"<tr>{icons}\n  </tr>", inline_style({"display": "inline-block"}), width="")

    cell = f"""<tr>
    <td style="{inline_style({"padding": "20px 30px", "text-align": block.alignment})}">{icon_row}</td>
  </tr>"""
    return _table(cell)


BLOCK_RENDERERS: Dict[str, Callable[[Any, DesignTokens], str]] = {
    "header": render_header,
    "hero": render_hero,
    "text": render_text,
    "image": render_image,
    "button": render_button,
    "divider": render_divider,
    "spacer": render_spacer,
    "card": render_card,
    "footer": render_footer,
    "social": render_social,
}


def render_block(block: Any, tokens: DesignTokens) -> str:
    """
    Render a single block with the renderer registered for its type.

    Blocks without a renderer (e.g. ``columns``) render to an empty string.
    """
    block_type = getattr(block, "type", None)
    renderer = BLOCK_RENDERERS.get(block_type)
    if renderer is None:
        logger.warning(f"Dropping block {getattr(block, 'id', '?')}: no renderer for type '{block_type}'")
        return ""
    return renderer(block, tokens)
