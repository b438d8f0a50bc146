import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from markupsafe import Markup

logger = logging.getLogger(__name__)


class SpriteUrlResolver(Protocol):
    def get_icon_url(self) -> str: ...


ICON_OPTION_DEFAULTS: dict[str, str] = {
    "id": "",
    "class": "",
    "description": "",
}


@dataclass(frozen=True)
class IconOptions:
    """Optional settings for an SVG icon.

    Attributes:
        id (str): ID of the <svg> element.
        class_name (str): Class names for the <svg> element.
        description (str): Screen reader text. Describe what the icon means,
            not what it looks like.
    """

    id: str = ""
    class_name: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "IconOptions":
        merged = merge_defaults(data or {}, ICON_OPTION_DEFAULTS)
        unknown = sorted(k for k in merged if k not in ICON_OPTION_DEFAULTS)
        if unknown:
            logger.debug(f"Ignoring unknown icon options: {unknown}")
        return cls(
            id=merged["id"],
            class_name=merged["class"],
            description=merged["description"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "class": self.class_name,
            "description": self.description,
        }


def merge_defaults(args: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow merge of ``args`` over ``defaults``; keys from ``args`` win."""
    merged = dict(defaults)
    merged.update(args)
    return merged


def _coerce_options(options: IconOptions | Mapping[str, Any] | None) -> IconOptions:
    if isinstance(options, IconOptions):
        return options
    return IconOptions.from_dict(options)


def format_attribute(name: str, value: Any = "") -> str:
    """Turn a name and a value into an HTML attribute fragment.

    Returns ``' name="value"'`` or an empty string when the value is empty.
    The value is NOT escaped; callers pass pre-sanitized values.
    """
    if not value:
        return ""
    return f' {name}="{value}"'


def get_svg_icon(
    path: str,
    width: Any = "",
    height: Any = "",
    options: IconOptions | Mapping[str, Any] | None = None,
) -> Markup:
    """Return HTML for an accessible SVG icon in an icon sprite.

    ``path`` is the URL of the icon inside the sprite, e.g.
    ``https://example.com/build/icons/icons.svg#arrow-right``. No viewBox is
    set on the <svg>; the <symbol> in the sprite already carries one.

    The description is not placed inside the SVG. Some screen readers ignore
    everything within an <svg>, so it is rendered as a sibling <span> that is
    only visible to assistive technology.
    """
    opts = _coerce_options(options)

    svg = "<svg"
    svg += format_attribute("id", opts.id)
    svg += format_attribute("class", opts.class_name)
    svg += format_attribute("width", width)
    svg += format_attribute("height", height)

    # Screen reader inconsistencies and focus bugs in older browsers
    svg += ' focusable="false"'
    svg += ' aria-hidden="true"'
    svg += ' role="img">'

    # Whitespace around <use> is required by Safari 10
    svg += f' <use xlink:href="{path}"></use> '
    svg += "</svg>"

    if opts.description:
        svg += f'<span class="screen-reader-text">{opts.description}</span>'

    return Markup(svg)


def get_icon(
    icon_name: str,
    width: Any = "",
    height: Any = "",
    options: IconOptions | Mapping[str, Any] | None = None,
    *,
    resolver: SpriteUrlResolver,
) -> Markup:
    """Render an icon from the theme sprite by its name.

    Example::

        get_icon("angle-down", 12, 12, {"class": "icon icon-dropdown"}, resolver=resolver)
    """
    icon_path = f"{resolver.get_icon_url()}#{icon_name}"
    return get_svg_icon(icon_path, width, height, options)


class IconRenderer:
    """Callable bound to an icon URL resolver, exposed to templates as ``icon``."""

    def __init__(self, resolver: SpriteUrlResolver):
        self.resolver = resolver

    def __call__(
        self,
        icon_name: str,
        width: Any = "",
        height: Any = "",
        options: IconOptions | Mapping[str, Any] | None = None,
    ) -> Markup:
        return get_icon(icon_name, width, height, options, resolver=self.resolver)


def register_icon_function(target, renderer: IconRenderer, name: str = "icon") -> None:
    """Expose ``renderer`` to templates as a global function.

    ``target`` is a Flask application or a Jinja2 environment.
    """
    env = getattr(target, "jinja_env", target)
    env.globals[name] = renderer
    logger.debug(f"Registered template function '{name}'")
